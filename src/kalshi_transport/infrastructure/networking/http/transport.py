"""
REST Transport

Transport abstraction consumed by the request dispatcher, and the aiohttp
implementation sharing one connection pool across concurrent operations.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, Optional

import aiohttp
from yarl import URL

from ...exceptions.exchange import TransportError
from ...logging import get_logger
from .strategies.structs import RequestContext
from .structs import HTTPMethod, TransportResponse


class RestTransport(ABC):
    """Sends one HTTP request and returns the completed exchange."""

    @abstractmethod
    async def send(
        self,
        method: HTTPMethod,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None
    ) -> TransportResponse:
        """
        Transmit a request.

        Raises:
            TransportError: If no response was received
        """
        pass

    async def close(self) -> None:
        pass


class AiohttpTransport(RestTransport):
    """aiohttp-backed transport with a lazily created pooled session."""

    def __init__(self, context: RequestContext, logger=None):
        self.context = context
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self.logger = logger or get_logger('rest.transport.aiohttp')

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            context = self.context

            self._connector = aiohttp.TCPConnector(
                limit=100,
                limit_per_host=context.max_concurrent,
                ttl_dns_cache=300,
                use_dns_cache=True,
                keepalive_timeout=context.keepalive_timeout,
                force_close=False,
            )

            timeout = aiohttp.ClientTimeout(
                total=context.timeout,
                connect=context.connection_timeout,
                sock_read=context.read_timeout,
                sock_connect=context.connection_timeout,
            )

            default_headers = {
                'User-Agent': 'kalshi-transport/1.0',
                'Accept': 'application/json',
                'Accept-Encoding': 'gzip, deflate',
                'Connection': 'keep-alive',
            }
            if context.default_headers:
                default_headers.update(context.default_headers)

            self._session = aiohttp.ClientSession(
                connector=self._connector,
                timeout=timeout,
                headers=default_headers
            )
            self.logger.debug("HTTP session created",
                              base_url=context.base_url,
                              max_concurrent=context.max_concurrent)
        return self._session

    async def send(
        self,
        method: HTTPMethod,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None
    ) -> TransportResponse:
        session = await self._ensure_session()

        # encoded=True keeps the path byte-identical to the signed one
        target = URL(url, encoded=True)
        try:
            async with session.request(method.value, target, headers=headers, data=body) as response:
                payload = await response.read()
                return TransportResponse(
                    status=response.status,
                    body=payload,
                    headers=dict(response.headers)
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        if self._connector:
            await self._connector.close()
        self.logger.debug("HTTP session closed")
