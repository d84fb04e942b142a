from .structs import (
    DEMO_BASE_URL,
    PROD_BASE_URL,
    NetworkConfig,
    KalshiCredentials,
    KalshiConfig,
)
from .config_manager import (
    load_config,
    load_config_with_logging,
    substitute_env_vars,
    apply_env_overrides,
)

__all__ = [
    'DEMO_BASE_URL',
    'PROD_BASE_URL',
    'NetworkConfig',
    'KalshiCredentials',
    'KalshiConfig',
    'load_config',
    'load_config_with_logging',
    'substitute_env_vars',
    'apply_env_overrides',
]
