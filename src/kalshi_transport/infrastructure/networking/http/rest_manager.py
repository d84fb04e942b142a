"""
REST Transport Manager

Long-lived holder of a strategy set and a transport. Each request is one
operation driven by its own RequestDispatcher; concurrent operations share
only the read-only strategies and the transport's connection pool.
"""

import asyncio
import time
from collections import deque
from typing import Any, Dict, Optional, Type

import msgspec

from ...exceptions.exchange import CancellationError, ExchangeRestError, RateLimitError
from ...logging import get_logger
from .dispatcher import RequestDispatcher
from .strategies import RestStrategySet, RequestMetrics
from .structs import HTTPMethod, TransportResponse
from .transport import RestTransport, AiohttpTransport
from .utils import build_query_string


class RestManager:
    """
    REST transport manager with strategy composition.

    Provides a unified interface for authenticated requests with retry,
    classification and cancellation handled per operation.
    """

    def __init__(
        self,
        strategy_set: RestStrategySet,
        transport: Optional[RestTransport] = None,
        dispatcher_kwargs: Optional[Dict[str, Any]] = None,
        logger=None
    ):
        self.strategy_set = strategy_set
        self._request_context = strategy_set.request_strategy.create_request_context()
        self.transport = transport or AiohttpTransport(self._request_context)
        self._dispatcher_kwargs = dispatcher_kwargs or {}

        self._semaphore = asyncio.Semaphore(self._request_context.max_concurrent)

        # Performance monitoring
        self._metrics = RequestMetrics()
        self._performance_targets = strategy_set.get_performance_targets()
        self._latency_samples = deque(maxlen=1000)  # Rolling window for percentiles

        self.logger = logger or get_logger('rest.manager')

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def base_url(self) -> str:
        return self._request_context.base_url

    def build_path(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Signed path: API prefix + endpoint + query string."""
        prefix = self.strategy_set.request_strategy.path_prefix
        if prefix and endpoint.startswith(prefix):
            prefix = ""
        return f"{prefix}{endpoint}{build_query_string(params)}"

    def create_dispatcher(self) -> RequestDispatcher:
        """Fresh dispatcher for one operation."""
        return RequestDispatcher(
            self.strategy_set,
            self.transport,
            max_attempts=self._performance_targets.max_retry_attempts,
            **self._dispatcher_kwargs
        )

    def _parse_response(self, response: TransportResponse, response_type: Optional[Type] = None,
                        attempts: int = 1) -> Any:
        if not response.body:
            return None
        try:
            if response_type is not None:
                return msgspec.json.decode(response.body, type=response_type)
            return msgspec.json.decode(response.body)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise ExchangeRestError(response.status, f"Invalid JSON response: {response.text[:100]}... ({e})",
                                     attempts=attempts) from e

    def _update_metrics(self, latency_ms: float, success: bool, attempts: int,
                        rate_limited: bool = False, cancelled: bool = False):
        self._metrics.total_requests += 1
        self._metrics.total_attempts += attempts

        if success:
            self._metrics.successful_requests += 1
        else:
            self._metrics.failed_requests += 1
        if attempts > 1:
            self._metrics.retried_requests += 1
        if rate_limited:
            self._metrics.rate_limit_hits += 1
        if cancelled:
            self._metrics.cancelled_requests += 1
        if latency_ms > self._performance_targets.max_latency_ms:
            self._metrics.latency_violations += 1

        self._latency_samples.append(latency_ms)
        sorted_samples = sorted(self._latency_samples)
        n = len(sorted_samples)
        self._metrics.avg_latency_ms = sum(sorted_samples) / n
        self._metrics.p95_latency_ms = sorted_samples[min(int(0.95 * n), n - 1)]
        self._metrics.p99_latency_ms = sorted_samples[min(int(0.99 * n), n - 1)]

    async def request(
        self,
        method: HTTPMethod,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        cancel_event: Optional[asyncio.Event] = None,
        response_type: Optional[Type] = None
    ) -> Any:
        """
        Execute one operation.

        Args:
            method: HTTP method
            endpoint: API endpoint, without the API prefix
            params: Query parameters (empty values dropped)
            json_data: JSON body; encoded once, the same bytes are signed and sent
            headers: Additional headers
            cancel_event: Optional cancellation signal for this operation
            response_type: Optional msgspec type to decode the body into

        Returns:
            Decoded response payload (None for an empty body)

        Raises:
            ExchangeRestError: The structured error of a failed operation
        """
        path = self.build_path(endpoint, params)
        body = msgspec.json.encode(json_data) if json_data is not None else None

        request_headers = dict(headers or {})
        if body is not None:
            request_headers.setdefault('Content-Type', 'application/json')

        start_time = time.perf_counter()
        dispatcher = self.create_dispatcher()
        success = False
        rate_limited = False
        cancelled = False

        async with self._semaphore:
            try:
                response = await dispatcher.dispatch(
                    method, self.base_url, path, body, request_headers, cancel_event
                )
                result = self._parse_response(response, response_type, dispatcher.attempt_count)
                success = True
                return result
            except RateLimitError:
                rate_limited = True
                raise
            except CancellationError:
                cancelled = True
                raise
            finally:
                execution_time_ms = (time.perf_counter() - start_time) * 1000
                self._update_metrics(execution_time_ms, success, max(dispatcher.attempt_count, 1),
                                     rate_limited, cancelled)
                self.logger.latency("rest_request", execution_time_ms,
                                    method=method.value, endpoint=endpoint,
                                    attempts=dispatcher.attempt_count, success=success)

                if execution_time_ms > self._performance_targets.max_latency_ms:
                    self.logger.warning("Latency target exceeded",
                                        method=method.value, path=path,
                                        latency_ms=round(execution_time_ms, 2),
                                        target_ms=self._performance_targets.max_latency_ms,
                                        attempts=dispatcher.attempt_count)

    # Convenience HTTP method wrappers

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return await self.request(HTTPMethod.GET, endpoint, params=params, **kwargs)

    async def post(self, endpoint: str, json_data: Optional[Any] = None,
                   params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return await self.request(HTTPMethod.POST, endpoint, params=params, json_data=json_data, **kwargs)

    async def put(self, endpoint: str, json_data: Optional[Any] = None,
                  params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return await self.request(HTTPMethod.PUT, endpoint, params=params, json_data=json_data, **kwargs)

    async def delete(self, endpoint: str, params: Optional[Dict[str, Any]] = None,
                     json_data: Optional[Any] = None, **kwargs) -> Any:
        return await self.request(HTTPMethod.DELETE, endpoint, params=params, json_data=json_data, **kwargs)

    def get_metrics(self) -> RequestMetrics:
        return self._metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        total = self._metrics.total_requests
        if total == 0:
            return {"status": "no_requests"}

        return {
            "total_requests": total,
            "success_rate": (self._metrics.successful_requests / total) * 100,
            "avg_attempts": self._metrics.total_attempts / total,
            "retried_requests": self._metrics.retried_requests,
            "rate_limit_hits": self._metrics.rate_limit_hits,
            "cancelled_requests": self._metrics.cancelled_requests,
            "avg_latency_ms": self._metrics.avg_latency_ms,
            "p95_latency_ms": self._metrics.p95_latency_ms,
            "p99_latency_ms": self._metrics.p99_latency_ms,
            "latency_violations": self._metrics.latency_violations,
            "targets": {
                "max_latency_ms": self._performance_targets.max_latency_ms,
                "max_attempts": self._performance_targets.max_retry_attempts
            }
        }

    def reset_metrics(self):
        self._metrics = RequestMetrics()
        self._latency_samples.clear()

    async def close(self):
        await self.transport.close()
        self.logger.debug("RestManager closed")
