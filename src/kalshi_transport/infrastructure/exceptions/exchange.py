from typing import Optional


class ExchangeRestError(Exception):
    """Base exception for all exchange REST API errors."""
    def __init__(self, code: Optional[int], message: str, api_code: str = "", attempts: int = 1) -> None:
        self.api_code = api_code
        self.message = message
        self.status_code = code
        self.attempts = attempts
        super().__init__(self._format())

    def _format(self) -> str:
        status = f"HTTP {self.status_code}" if self.status_code is not None else "No response"
        if self.api_code:
            return f"{status} [{self.api_code}]: {self.message}"
        return f"{status}: {self.message}"

    @property
    def is_retryable(self) -> bool:
        return False


# Connection and Infrastructure Errors (Retryable)
class TransportError(ExchangeRestError):
    """Transport-level failure, no response was received."""
    def __init__(self, message: str, attempts: int = 1) -> None:
        super().__init__(None, message, attempts=attempts)

    @property
    def is_retryable(self) -> bool:
        return True


class ServerError(ExchangeRestError):
    """Server-side errors (5xx) that may be temporary."""

    @property
    def is_retryable(self) -> bool:
        return True


# Rate Limiting Errors (Retryable with backoff)
class RateLimitError(ExchangeRestError):
    """HTTP 429 Too Many Requests."""
    def __init__(self, code: int, message: str, api_code: str = "", retry_after: Optional[int] = None,
                 attempts: int = 1) -> None:
        super().__init__(code, message, api_code, attempts)
        self.retry_after = retry_after

    @property
    def is_retryable(self) -> bool:
        return True


# Client Errors (Non-retryable)
class ClientError(ExchangeRestError):
    """4xx response other than 429, carries the exchange error code when parseable."""

    @property
    def is_unknown(self) -> bool:
        return self.api_code == "UNKNOWN"


class AuthenticationError(ClientError):
    """Authentication failed - key id, signature or timestamp rejected."""
    pass


# Local failures (Non-retryable)
class SigningError(ExchangeRestError):
    """Signature generation failed, a broken key does not heal on retry."""
    def __init__(self, message: str, attempts: int = 1) -> None:
        super().__init__(None, message, attempts=attempts)


class CancellationError(ExchangeRestError):
    """Caller cancelled the operation."""
    def __init__(self, message: str = "Operation cancelled", attempts: int = 1) -> None:
        super().__init__(None, message, attempts=attempts)
