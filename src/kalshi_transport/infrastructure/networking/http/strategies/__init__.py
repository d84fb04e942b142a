"""
REST Transport Strategy Module

Strategy interfaces and data structures for REST transport.
"""

from .structs import (
    RequestContext,
    AuthenticationData,
    PerformanceTargets,
    RequestMetrics,
    Classification,
    ClassificationOutcome
)

from .request import RequestStrategy
from .retry import RetryStrategy
from .auth import AuthStrategy
from .exception_handler import ExceptionHandlerStrategy
from .strategy_set import RestStrategySet

__all__ = [
    # Data structures
    'RequestContext',
    'AuthenticationData',
    'PerformanceTargets',
    'RequestMetrics',
    'Classification',
    'ClassificationOutcome',

    # Strategy interfaces
    'RequestStrategy',
    'RetryStrategy',
    'AuthStrategy',
    'ExceptionHandlerStrategy',

    # Strategy container
    'RestStrategySet',
]
