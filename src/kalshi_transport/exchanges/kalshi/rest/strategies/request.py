from .....config.structs import KalshiConfig
from .....infrastructure.networking.http import RequestStrategy, RequestContext, PerformanceTargets

API_PREFIX = "/trade-api/v2"


class KalshiRequestStrategy(RequestStrategy):
    """Kalshi request configuration based on KalshiConfig."""

    def __init__(self, config: KalshiConfig):
        """
        Initialize Kalshi request strategy from KalshiConfig.

        Args:
            config: Client configuration with environment and network settings
        """
        super().__init__(config.get_base_url())
        self.config = config

    @property
    def path_prefix(self) -> str:
        return API_PREFIX

    def create_request_context(self) -> RequestContext:
        network = self.config.network
        connection_timeout = network.connect_timeout
        read_timeout = max(network.request_timeout - connection_timeout, connection_timeout)

        return RequestContext(
            base_url=self.base_url,
            timeout=network.request_timeout,
            max_concurrent=network.max_concurrent,
            connection_timeout=connection_timeout,
            read_timeout=read_timeout,
            keepalive_timeout=60,
            default_headers={
                "Accept": "application/json",
                "User-Agent": "kalshi-transport/1.0"
            }
        )

    def get_performance_targets(self) -> PerformanceTargets:
        return PerformanceTargets(
            max_latency_ms=self.config.network.max_latency_ms,
            max_retry_attempts=self.config.network.max_attempts,
            target_throughput_rps=10.0
        )
