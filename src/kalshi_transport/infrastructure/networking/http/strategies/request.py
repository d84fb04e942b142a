"""
Request Strategy Interface

Strategy for HTTP request configuration: base URL, timeouts,
connection limits and attempt budget.
"""

from abc import ABC, abstractmethod

from .structs import RequestContext, PerformanceTargets


class RequestStrategy(ABC):
    """Strategy for HTTP request configuration."""

    def __init__(self, base_url: str, **kwargs):
        self.base_url = base_url

    @abstractmethod
    def create_request_context(self) -> RequestContext:
        """
        Create request configuration.

        Returns:
            RequestContext with URL, timeouts, connection limits
        """
        pass

    @abstractmethod
    def get_performance_targets(self) -> PerformanceTargets:
        """
        Get performance targets for this exchange.

        Returns:
            PerformanceTargets with latency target and attempt budget
        """
        pass

    @property
    def path_prefix(self) -> str:
        """Prefix prepended to every endpoint path (part of the signed path)."""
        return ""
