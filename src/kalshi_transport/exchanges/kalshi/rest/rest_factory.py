from typing import Optional

from ....config.structs import KalshiConfig
from ....infrastructure.logging import HFTLoggerInterface, get_exchange_logger
from ....infrastructure.networking.http import RestManager, RestStrategySet, RestTransport
from .strategies import (
    KalshiRequestStrategy, KalshiRetryStrategy,
    KalshiExceptionHandlerStrategy, KalshiAuthStrategy
)


def create_strategy_set(config: KalshiConfig, logger: Optional[HFTLoggerInterface] = None) -> RestStrategySet:
    """
    Assemble Kalshi strategies.

    Requests are signed only when both key id and private key are configured.
    """
    config.validate()
    logger = logger or get_exchange_logger('kalshi', 'rest')

    retry_strategy = KalshiRetryStrategy.from_config(config.network, logger)
    auth_strategy = None
    if config.credentials.has_private_api:
        auth_strategy = KalshiAuthStrategy.from_credentials(config.credentials, logger)

    return RestStrategySet(
        request_strategy=KalshiRequestStrategy(config),
        retry_strategy=retry_strategy,
        exception_handler_strategy=KalshiExceptionHandlerStrategy(retry_strategy, logger),
        auth_strategy=auth_strategy,
        logger=logger
    )


def create_rest_manager(
    config: KalshiConfig,
    logger: Optional[HFTLoggerInterface] = None,
    transport: Optional[RestTransport] = None
) -> RestManager:
    """Create Kalshi REST manager; pass a transport to replace the aiohttp one."""
    strategy_set = create_strategy_set(config, logger)
    return RestManager(strategy_set, transport=transport, logger=logger)
