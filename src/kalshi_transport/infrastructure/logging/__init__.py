"""
Structured logging.

    logger = get_exchange_logger('kalshi', 'rest.client')
    logger.info("Request sent", method="GET", attempt=1)
    logger.metric("rest_retry_delays", 0.2, attempt=1)
"""

from .interfaces import LogLevel, LogType, LogRecord, LogBackend, HFTLoggerInterface
from .hft_logger import HFTLogger
from .structs import LoggingConfig, ConsoleBackendConfig
from .backends import ConsoleBackend
from .factory import (
    LoggerFactory,
    get_logger,
    get_exchange_logger,
    get_strategy_logger,
    configure_logging
)

__all__ = [
    'LogLevel',
    'LogType',
    'LogRecord',
    'LogBackend',
    'HFTLoggerInterface',
    'HFTLogger',
    'LoggingConfig',
    'ConsoleBackendConfig',
    'ConsoleBackend',
    'LoggerFactory',
    'get_logger',
    'get_exchange_logger',
    'get_strategy_logger',
    'configure_logging',
]
