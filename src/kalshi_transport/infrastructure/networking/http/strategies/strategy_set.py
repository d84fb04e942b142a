"""
The strategies one configuration hands to every operation.

Built once per client; dispatchers only read from it, so a single set
is shared by all concurrent operations.
"""

from typing import Optional

from .auth import AuthStrategy
from .exception_handler import ExceptionHandlerStrategy
from .request import RequestStrategy
from .retry import RetryStrategy
from .structs import PerformanceTargets

from ....logging import get_logger


class RestStrategySet:
    """
    Args:
        request_strategy: Base URL, connection settings and attempt budget
        retry_strategy: Backoff between attempts
        exception_handler_strategy: Maps each attempt outcome to success, retry or failure
        auth_strategy: Request signer; None sends requests unsigned
    """

    def __init__(
        self,
        request_strategy: RequestStrategy,
        retry_strategy: RetryStrategy,
        exception_handler_strategy: ExceptionHandlerStrategy,
        auth_strategy: Optional[AuthStrategy] = None,
        logger=None
    ):
        missing = [name for name, strategy in (
            ('request_strategy', request_strategy),
            ('retry_strategy', retry_strategy),
            ('exception_handler_strategy', exception_handler_strategy),
        ) if strategy is None]
        if missing:
            raise ValueError(f"Missing required strategies: {', '.join(missing)}")

        self.request_strategy = request_strategy
        self.retry_strategy = retry_strategy
        self.exception_handler_strategy = exception_handler_strategy
        self.auth_strategy = auth_strategy
        self.logger = logger or get_logger('rest.strategy_set')

        self._performance_targets = request_strategy.get_performance_targets()
        self.logger.debug("REST strategy set ready",
                          signed=auth_strategy is not None,
                          max_attempts=self._performance_targets.max_retry_attempts)

    def get_performance_targets(self) -> PerformanceTargets:
        return self._performance_targets
