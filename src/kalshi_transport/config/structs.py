from typing import Optional
from msgspec import Struct, field

from ..infrastructure.exceptions.system import ConfigurationError


DEMO_BASE_URL = "https://demo-api.kalshi.co"
PROD_BASE_URL = "https://api.elections.kalshi.com"


class NetworkConfig(Struct, frozen=True):
    """
    Network configuration settings.

    Attributes:
        request_timeout: Total HTTP request timeout in seconds
        connect_timeout: Connection timeout in seconds
        max_retries: Retries after the first attempt (attempt cap = max_retries + 1)
        retry_delay: Base backoff delay in seconds
        max_retry_delay: Backoff ceiling in seconds
        retry_multiplier: Exponential backoff multiplier
        max_concurrent: Maximum in-flight operations per client
        max_latency_ms: Latency above which an operation is logged as slow
    """
    request_timeout: float = 30.0
    connect_timeout: float = 5.0
    max_retries: int = 5
    retry_delay: float = 0.1
    max_retry_delay: float = 10.0
    retry_multiplier: float = 2.0
    max_concurrent: int = 10
    max_latency_ms: float = 5000.0

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def validate(self) -> None:
        """Validate network configuration."""
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive", "network.request_timeout")
        if self.connect_timeout <= 0:
            raise ConfigurationError("connect_timeout must be positive", "network.connect_timeout")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries cannot be negative", "network.max_retries")
        if self.retry_delay < 0:
            raise ConfigurationError("retry_delay cannot be negative", "network.retry_delay")
        if self.max_retry_delay < self.retry_delay:
            raise ConfigurationError("max_retry_delay must not be below retry_delay", "network.max_retry_delay")
        if self.retry_multiplier < 1.0:
            raise ConfigurationError("retry_multiplier must be at least 1.0", "network.retry_multiplier")
        if self.max_concurrent <= 0:
            raise ConfigurationError("max_concurrent must be positive", "network.max_concurrent")


class KalshiCredentials(Struct, frozen=True):
    """API key id plus private key, given inline (PEM) or as a file path."""
    api_key_id: str = ""
    private_key_path: Optional[str] = None
    private_key_pem: Optional[str] = None

    @property
    def has_private_api(self) -> bool:
        return bool(self.api_key_id) and bool(self.private_key_path or self.private_key_pem)

    def get_preview(self) -> str:
        """Get safe preview of credentials for logging."""
        if not self.api_key_id:
            return "Not configured"
        if len(self.api_key_id) > 8:
            return f"{self.api_key_id[:4]}...{self.api_key_id[-4:]}"
        return "***"

    def validate(self) -> None:
        """Allow empty credentials (public-only mode), but not half of a pair."""
        has_key = bool(self.private_key_path or self.private_key_pem)
        if not self.api_key_id and not has_key:
            return
        if not self.api_key_id:
            raise ConfigurationError("api_key_id is required when a private key is configured",
                                     "credentials.api_key_id")
        if not has_key:
            raise ConfigurationError("private_key_path or private_key_pem is required",
                                     "credentials.private_key_path")


class KalshiConfig(Struct, frozen=True):
    """
    Complete client configuration.

    Attributes:
        production: Use the production API instead of the demo API
        base_url: Explicit base URL override (scheme and host, no API prefix)
        credentials: API credentials
        network: Network, retry and backoff settings
    """
    production: bool = False
    base_url: Optional[str] = None
    credentials: KalshiCredentials = field(default_factory=KalshiCredentials)
    network: NetworkConfig = field(default_factory=NetworkConfig)

    @property
    def environment(self) -> str:
        return "production" if self.production else "demo"

    def get_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        return PROD_BASE_URL if self.production else DEMO_BASE_URL

    def validate(self) -> None:
        self.credentials.validate()
        self.network.validate()
