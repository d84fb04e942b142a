from typing import Mapping, Optional

import msgspec

from .....infrastructure.exceptions.exchange import (
    ExchangeRestError, TransportError, RateLimitError, ServerError,
    ClientError, AuthenticationError
)
from .....infrastructure.logging import get_strategy_logger
from .....infrastructure.networking.http import (
    ExceptionHandlerStrategy, Classification, ClassificationOutcome, TransportResponse
)
from .retry import KalshiRetryStrategy

UNKNOWN_ERROR_CODE = "UNKNOWN"

_SUCCESS = Classification(ClassificationOutcome.SUCCESS)


class KalshiErrorResponse(msgspec.Struct):
    """Kalshi error body: {"code": "...", "message": "..."}."""
    code: str = ""
    message: str = ""


class KalshiErrorEnvelope(msgspec.Struct):
    """Kalshi error body wrapped as {"error": {...}}."""
    error: KalshiErrorResponse


def parse_error_body(body: str) -> Optional[KalshiErrorResponse]:
    """Decode a Kalshi error body, None when it is not a recognizable error object."""
    if not body:
        return None
    try:
        data = msgspec.json.decode(body)
    except msgspec.DecodeError:
        return None
    if not isinstance(data, dict):
        return None

    try:
        if isinstance(data.get("error"), dict):
            return msgspec.convert(data, KalshiErrorEnvelope).error
        return msgspec.convert(data, KalshiErrorResponse)
    except msgspec.ValidationError:
        return None


class KalshiExceptionHandlerStrategy(ExceptionHandlerStrategy):
    """
    Kalshi error classifier.

    Rules, first match wins:
        transport failure -> retryable TransportError
        429               -> retryable RateLimitError with Retry-After hint
        5xx               -> retryable ServerError
        other non-2xx     -> terminal ClientError (AuthenticationError on 401)
        2xx               -> success
    """

    def __init__(self, retry_strategy: Optional[KalshiRetryStrategy] = None, logger=None):
        """
        Initialize Kalshi exception handler strategy.

        Args:
            retry_strategy: Source of Retry-After parsing; a default one is created if omitted
            logger: Optional HFT logger injection
        """
        if logger is None:
            logger = get_strategy_logger('rest.exception.kalshi', ['kalshi', 'rest', 'exception'])
        self.logger = logger
        self._retry_strategy = retry_strategy or KalshiRetryStrategy(logger=logger)

    def classify(
        self,
        response: Optional[TransportResponse],
        transport_error: Optional[TransportError] = None
    ) -> Classification:
        if response is None:
            error = transport_error or TransportError("No response received")
            return Classification(ClassificationOutcome.RETRYABLE, error)

        if 200 <= response.status < 300:
            return _SUCCESS

        error = self.handle_error(response.status, response.text, response.headers)
        if error.is_retryable:
            retry_after = error.retry_after if isinstance(error, RateLimitError) else None
            return Classification(ClassificationOutcome.RETRYABLE, error, retry_after)

        return Classification(ClassificationOutcome.TERMINAL, error)

    def handle_error(
        self,
        status_code: int,
        response_text: str,
        headers: Optional[Mapping[str, str]] = None
    ) -> ExchangeRestError:
        """
        Convert a Kalshi error response into a structured exception.

        Args:
            status_code: HTTP status code from the response
            response_text: Raw response text from the API
            headers: Response headers (consulted for Retry-After on 429)

        Returns:
            Structured exception; api_code is "UNKNOWN" when the body is not a Kalshi error
        """
        parsed = parse_error_body(response_text)
        if parsed is not None:
            api_code = parsed.code
            message = parsed.message or response_text
        else:
            api_code = UNKNOWN_ERROR_CODE
            message = response_text

        if status_code == 429:
            retry_after = self._retry_strategy.parse_retry_after(headers)
            self.logger.warning("Rate limited by Kalshi",
                                api_code=api_code, retry_after=retry_after)
            self.logger.metric("rest_rate_limit_hits", 1, exchange="kalshi")
            return RateLimitError(status_code, message, api_code, retry_after)

        if 500 <= status_code < 600:
            return ServerError(status_code, message, api_code)

        if status_code == 401:
            return AuthenticationError(status_code, message, api_code)

        return ClientError(status_code, message, api_code)
