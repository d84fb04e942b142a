from .structs import HTTPMethod, TransportResponse, DispatchState, AttemptDecision, AttemptRecord
from .strategies import (
    RequestStrategy, RetryStrategy, AuthStrategy, ExceptionHandlerStrategy,
    RestStrategySet,
    RequestContext, PerformanceTargets, RequestMetrics, AuthenticationData,
    Classification, ClassificationOutcome
)
from .transport import RestTransport, AiohttpTransport
from .dispatcher import RequestDispatcher
from .rest_manager import RestManager
from .utils import build_query_string
# Exchange-specific strategies live in their exchange modules

__all__ = [
    "HTTPMethod", "TransportResponse", "DispatchState", "AttemptDecision", "AttemptRecord",
    # Strategy interfaces
    "RequestStrategy", "RetryStrategy", "AuthStrategy", "ExceptionHandlerStrategy",
    "RestStrategySet",
    # Data structures
    "RequestContext", "PerformanceTargets", "RequestMetrics", "AuthenticationData",
    "Classification", "ClassificationOutcome",
    # Transport
    "RestTransport", "AiohttpTransport",
    "RequestDispatcher", "RestManager",
    "build_query_string",
]
