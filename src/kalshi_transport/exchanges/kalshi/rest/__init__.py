from .rest_factory import create_rest_manager, create_strategy_set
from .kalshi_rest_client import KalshiRestClient

__all__ = [
    'create_rest_manager',
    'create_strategy_set',
    'KalshiRestClient',
]
