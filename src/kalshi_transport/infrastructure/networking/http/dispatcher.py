"""
Request Dispatcher

Runs one caller-visible operation as a sequence of signed attempts:

    BUILDING -> SIGNING -> SENDING -> CLASSIFYING -> {RETRYING -> BUILDING, SUCCEEDED, FAILED}

Every attempt captures a fresh timestamp and a fresh signature. Retryable
failures are absorbed until the attempt budget runs out, then the last
observed error is raised. A dispatcher instance serves exactly one
operation; shared state (signer, transport pool) is read-only here.
"""

import asyncio
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, TypeVar

from ...exceptions.exchange import CancellationError, ExchangeRestError, SigningError, TransportError
from ...logging import get_logger
from .strategies import RestStrategySet, Classification
from .structs import AttemptDecision, AttemptRecord, DispatchState, HTTPMethod, TransportResponse
from .transport import RestTransport

T = TypeVar('T')


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RequestDispatcher:
    """
    Per-operation state machine over signer, transport, classifier and backoff.

    Args:
        strategy_set: Strategies shared by all operations of one configuration
        transport: Transport shared by all operations of one configuration
        max_attempts: Upper bound on attempts for this operation
        clock: Source of the per-attempt UTC timestamp
        sleep: Coroutine used to suspend between attempts
    """

    def __init__(
        self,
        strategy_set: RestStrategySet,
        transport: RestTransport,
        max_attempts: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger=None
    ):
        self.strategy_set = strategy_set
        self.transport = transport
        if max_attempts is None:
            max_attempts = strategy_set.get_performance_targets().max_retry_attempts
        self.max_attempts = max_attempts
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._clock = clock
        self._sleep = sleep
        self.logger = logger or get_logger('rest.dispatcher')

        self.state = DispatchState.BUILDING
        self.attempts: List[AttemptRecord] = []
        self._used = False

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)

    async def dispatch(
        self,
        method: HTTPMethod,
        base_url: str,
        path: str,
        body: Optional[bytes] = None,
        headers: Optional[dict] = None,
        cancel_event: Optional[asyncio.Event] = None
    ) -> TransportResponse:
        """
        Execute the operation and return the successful response.

        Args:
            method: HTTP method
            base_url: Scheme and host, without trailing slash
            path: Path including query string; signed and sent verbatim
            body: Exact request body bytes
            headers: Extra headers sent with every attempt
            cancel_event: Optional caller cancellation signal

        Raises:
            ExchangeRestError: The single structured error of a failed operation
        """
        if self._used:
            raise RuntimeError("RequestDispatcher instances serve a single operation")
        self._used = True

        retry_strategy = self.strategy_set.retry_strategy
        classifier = self.strategy_set.exception_handler_strategy
        auth_strategy = self.strategy_set.auth_strategy
        url = f"{base_url}{path}"
        ordinal = 1

        while True:
            self.state = DispatchState.BUILDING
            if cancel_event is not None and cancel_event.is_set():
                raise self._fail(CancellationError("Operation cancelled before attempt", attempts=ordinal - 1))

            request_headers = dict(headers or {})

            self.state = DispatchState.SIGNING
            timestamp = self._clock()
            signature = None
            if auth_strategy is not None and auth_strategy.requires_auth(path):
                try:
                    auth_data = auth_strategy.sign_request(method, path, body, timestamp)
                except SigningError as e:
                    e.attempts = ordinal
                    self.logger.error("Request signing failed",
                                      method=method.value, path=path, attempt=ordinal, error=e.message)
                    raise self._fail(e)
                request_headers.update(auth_data.headers)
                stamp = auth_data.timestamp
                signature = auth_data.signature
            else:
                stamp = timestamp.isoformat()

            self.state = DispatchState.SENDING
            response: Optional[TransportResponse] = None
            transport_error: Optional[TransportError] = None
            try:
                response = await self._wait_cancellable(
                    self.transport.send(method, url, request_headers, body),
                    cancel_event,
                    ordinal
                )
            except TransportError as e:
                transport_error = e

            self.state = DispatchState.CLASSIFYING
            classification = classifier.classify(response, transport_error)
            status_code = response.status if response is not None else None

            if classification.is_success:
                self.attempts.append(AttemptRecord(ordinal, stamp, signature, status_code, AttemptDecision.STOP))
                self.state = DispatchState.SUCCEEDED
                if ordinal > 1:
                    self.logger.info("Request succeeded after retries",
                                     method=method.value, path=path, attempts=ordinal)
                return response

            error = classification.error
            error.attempts = ordinal

            if not self._should_retry(ordinal, classification):
                self.attempts.append(AttemptRecord(ordinal, stamp, signature, status_code,
                                                   AttemptDecision.STOP, error))
                if classification.is_retryable:
                    self.logger.warning("Retry attempts exhausted",
                                        method=method.value, path=path,
                                        attempts=ordinal, status_code=status_code,
                                        error_type=type(error).__name__)
                else:
                    self.logger.debug("Terminal response",
                                      method=method.value, path=path,
                                      status_code=status_code, api_code=error.api_code)
                raise self._fail(error)

            self.state = DispatchState.RETRYING
            delay = retry_strategy.calculate_delay(ordinal, classification.retry_after)
            self.attempts.append(AttemptRecord(ordinal, stamp, signature, status_code,
                                               AttemptDecision.RETRY, error, delay))
            self.logger.debug("Retrying request",
                              method=method.value, path=path, attempt=ordinal,
                              status_code=status_code, delay_seconds=delay,
                              error_type=type(error).__name__)

            await self._wait_cancellable(self._sleep(delay), cancel_event, ordinal)
            ordinal += 1

    def _should_retry(self, ordinal: int, classification: Classification) -> bool:
        if ordinal >= self.max_attempts:
            return False
        return self.strategy_set.retry_strategy.should_retry(ordinal, classification)

    def _fail(self, error: ExchangeRestError) -> ExchangeRestError:
        self.state = DispatchState.FAILED
        return error

    async def _wait_cancellable(
        self,
        awaitable: Awaitable[T],
        cancel_event: Optional[asyncio.Event],
        ordinal: int
    ) -> T:
        """Await a suspension point, abandoning it when cancel_event fires."""
        if cancel_event is None:
            return await awaitable

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()

        if task in done:
            return task.result()

        # Let the abandoned send or sleep unwind before reporting
        await asyncio.gather(task, return_exceptions=True)
        self.logger.info("Operation cancelled",
                         state=self.state.value, attempt=ordinal)
        raise self._fail(CancellationError(
            f"Operation cancelled while {self.state.value}", attempts=ordinal
        ))

