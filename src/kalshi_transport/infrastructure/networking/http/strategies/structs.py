"""
REST Transport Strategy Data Structures

Common data structures used by REST transport strategies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ....exceptions.exchange import ExchangeRestError


@dataclass(frozen=True)
class RequestContext:
    """Request configuration context."""
    base_url: str
    timeout: float
    max_concurrent: int
    connection_timeout: float = 5.0
    read_timeout: float = 30.0
    keepalive_timeout: float = 60.0
    default_headers: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class AuthenticationData:
    """Per-attempt authentication headers, never reused across attempts."""
    headers: Dict[str, str]
    timestamp: str
    signature: Optional[str] = None


@dataclass(frozen=True)
class PerformanceTargets:
    """Latency and retry targets for an exchange."""
    max_latency_ms: float = 1000.0
    max_retry_attempts: int = 6
    target_throughput_rps: float = 10.0


class ClassificationOutcome(Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one completed attempt."""
    outcome: ClassificationOutcome
    error: Optional[ExchangeRestError] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.outcome is ClassificationOutcome.SUCCESS

    @property
    def is_retryable(self) -> bool:
        return self.outcome is ClassificationOutcome.RETRYABLE


@dataclass
class RequestMetrics:
    """Request performance metrics."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_attempts: int = 0
    retried_requests: int = 0
    rate_limit_hits: int = 0
    cancelled_requests: int = 0
    avg_latency_ms: float = 0.0
    p95_latency_ms: float = 0.0
    p99_latency_ms: float = 0.0
    latency_violations: int = 0
