"""
Kalshi REST Client

Thin adapter over RestManager for the account and exchange endpoints.
Retry, signing and error classification are handled per operation by
the manager's dispatcher; this layer only maps endpoints to models.

Usage:
    config = load_config('config.yaml')
    async with KalshiRestClient(config) as client:
        status = await client.get_exchange_status()
"""

import asyncio
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import quote

from ....config.config_manager import load_config_with_logging
from ....config.structs import KalshiConfig
from ....infrastructure.logging import HFTLoggerInterface, configure_logging, get_exchange_logger
from ....infrastructure.networking.http import RestManager, RestTransport
from ..structs import (
    ExchangeStatus, ApiKey, ApiKeysResponse,
    CreateApiKeyRequest, CreateApiKeyResponse
)
from .rest_factory import create_rest_manager


class KalshiRestClient:
    """Kalshi REST client built from KalshiConfig."""

    def __init__(
        self,
        config: KalshiConfig,
        logger: Optional[HFTLoggerInterface] = None,
        transport: Optional[RestTransport] = None,
        rest_manager: Optional[RestManager] = None
    ):
        self.config = config
        self.logger = logger or get_exchange_logger('kalshi', 'rest.client')
        self._rest = rest_manager or create_rest_manager(config, self.logger, transport)

        self.logger.info("Kalshi REST client initialized",
                         environment=config.environment,
                         base_url=config.get_base_url(),
                         authenticated=self.is_authenticated,
                         credentials=config.credentials.get_preview())

    @classmethod
    def from_config_file(
        cls,
        path: Optional[Union[str, Path]] = None,
        env_file: Optional[Union[str, Path]] = None,
        transport: Optional[RestTransport] = None
    ) -> 'KalshiRestClient':
        """
        Build a client from config.yaml, .env and KALSHI_* variables.

        A ``logging`` section in the file is applied before the client's
        loggers are created.
        """
        config, logging_config = load_config_with_logging(path, env_file)
        if logging_config is not None:
            configure_logging(logging_config)
        return cls(config, transport=transport)

    async def __aenter__(self) -> 'KalshiRestClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def rest(self) -> RestManager:
        return self._rest

    @property
    def is_authenticated(self) -> bool:
        return self._rest.strategy_set.auth_strategy is not None

    async def get_exchange_status(self, cancel_event: Optional[asyncio.Event] = None) -> ExchangeStatus:
        return await self._rest.get('/exchange/status', cancel_event=cancel_event,
                                    response_type=ExchangeStatus)

    async def list_api_keys(self, cancel_event: Optional[asyncio.Event] = None) -> List[ApiKey]:
        result = await self._rest.get('/api-keys', cancel_event=cancel_event,
                                      response_type=ApiKeysResponse)
        return result.api_keys if result is not None else []

    async def create_api_key(self, name: str = "",
                             cancel_event: Optional[asyncio.Event] = None) -> CreateApiKeyResponse:
        """
        Create an API key.

        Args:
            name: Optional display name for the key
            cancel_event: Optional cancellation signal

        Returns:
            The new key and its private key PEM (returned only once)
        """
        created = await self._rest.post('/api-keys', json_data=CreateApiKeyRequest(name=name),
                                        cancel_event=cancel_event, response_type=CreateApiKeyResponse)
        self.logger.audit("API key created", key_id=created.api_key.id)
        return created

    async def delete_api_key(self, key_id: str, cancel_event: Optional[asyncio.Event] = None) -> None:
        if not key_id:
            raise ValueError("key_id is required")
        await self._rest.delete(f'/api-keys/{quote(key_id, safe="")}', cancel_event=cancel_event)
        self.logger.audit("API key deleted", key_id=key_id)

    async def close(self) -> None:
        await self._rest.close()
