from typing import Mapping, Optional

from .....config.structs import NetworkConfig
from .....infrastructure.logging import get_strategy_logger
from .....infrastructure.networking.http import RetryStrategy, Classification

RETRY_AFTER_HEADER = 'retry-after'


class KalshiRetryStrategy(RetryStrategy):
    """
    Kalshi backoff policy.

    Exponential backoff base * multiplier^(attempt-1) clamped to max_delay,
    except that a valid server Retry-After hint is honoured exactly.
    The attempt cap is enforced by the dispatcher.
    """

    def __init__(self, base_delay: float = 0.1, multiplier: float = 2.0,
                 max_delay: float = 10.0, logger=None):
        """
        Initialize Kalshi retry strategy.

        Args:
            base_delay: Delay after the first failed attempt, in seconds
            multiplier: Growth factor per attempt
            max_delay: Ceiling for computed delays, in seconds
            logger: Optional HFT logger injection
        """
        if logger is None:
            logger = get_strategy_logger('rest.retry.kalshi', ['kalshi', 'rest', 'retry'])
        self.logger = logger

        self.base_delay = base_delay
        self.multiplier = multiplier
        self.max_delay = max_delay

        self.logger.debug("Kalshi retry strategy initialized",
                          base_delay=self.base_delay,
                          multiplier=self.multiplier,
                          max_delay=self.max_delay)

    @classmethod
    def from_config(cls, network: NetworkConfig, logger=None) -> 'KalshiRetryStrategy':
        return cls(
            base_delay=network.retry_delay,
            multiplier=network.retry_multiplier,
            max_delay=network.max_retry_delay,
            logger=logger
        )

    def should_retry(self, attempt: int, classification: Classification) -> bool:
        return classification.is_retryable

    def calculate_delay(self, attempt: int, retry_after: Optional[int] = None) -> float:
        """Server hint when positive, otherwise exponential backoff up to max_delay."""
        if retry_after is not None and retry_after > 0:
            delay = float(retry_after)
            delay_reason = "retry_after"
        else:
            delay = min(self.base_delay * (self.multiplier ** (max(attempt, 1) - 1)), self.max_delay)
            delay_reason = "exponential_backoff"

        self.logger.metric("rest_retry_delays", delay,
                           attempt=attempt, reason=delay_reason)
        return delay

    def parse_retry_after(self, headers: Optional[Mapping[str, str]]) -> Optional[int]:
        """Retry-After as a positive integer number of seconds; anything else is absent."""
        if not headers:
            return None

        value = None
        for name, header_value in headers.items():
            if name.lower() == RETRY_AFTER_HEADER:
                value = header_value
                break
        if value is None:
            return None

        try:
            seconds = int(value.strip())
        except (TypeError, ValueError):
            self.logger.debug("Ignoring unparsable Retry-After", value=value)
            return None

        return seconds if seconds > 0 else None
