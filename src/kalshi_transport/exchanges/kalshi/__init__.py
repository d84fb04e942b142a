from .structs import ExchangeStatus, ApiKey, ApiKeysResponse, CreateApiKeyRequest, CreateApiKeyResponse
from .rest import KalshiRestClient, create_rest_manager, create_strategy_set

__all__ = [
    'ExchangeStatus',
    'ApiKey',
    'ApiKeysResponse',
    'CreateApiKeyRequest',
    'CreateApiKeyResponse',
    'KalshiRestClient',
    'create_rest_manager',
    'create_strategy_set',
]
