"""
Retry Strategy Interface

Pure retry predicate and delay computation consulted by the dispatcher
between attempts. Neither method performs I/O.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from .structs import Classification


class RetryStrategy(ABC):
    """Strategy for retry decisions and backoff delays."""

    @abstractmethod
    def should_retry(self, attempt: int, classification: Classification) -> bool:
        """
        Decide whether another attempt follows.

        Args:
            attempt: Ordinal of the attempt just classified (1-based)
            classification: Classification of that attempt
        """
        pass

    @abstractmethod
    def calculate_delay(self, attempt: int, retry_after: Optional[int] = None) -> float:
        """
        Calculate delay in seconds before the next attempt.

        Args:
            attempt: Ordinal of the attempt just classified (1-based)
            retry_after: Server-supplied retry hint in seconds, if any
        """
        pass

    @abstractmethod
    def parse_retry_after(self, headers: Mapping[str, str]) -> Optional[int]:
        """Extract a positive retry hint from response headers, or None."""
        pass
