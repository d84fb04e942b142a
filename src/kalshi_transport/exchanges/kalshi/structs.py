from datetime import datetime
from typing import List, Optional

import msgspec


def parse_api_time(value: Optional[str]) -> Optional[datetime]:
    """RFC 3339 timestamp from the API; empty or missing means unset."""
    if not value:
        return None
    return msgspec.convert(value, type=datetime)


class ExchangeStatus(msgspec.Struct):
    exchange_active: bool = False
    trading_active: bool = False


class ApiKey(msgspec.Struct):
    id: str
    name: str = ""
    # Raw wire values; the API sends "" for unset times
    created_time: Optional[str] = None
    expires_time: Optional[str] = None
    scopes: List[str] = []

    @property
    def created_at(self) -> Optional[datetime]:
        return parse_api_time(self.created_time)

    @property
    def expires_at(self) -> Optional[datetime]:
        return parse_api_time(self.expires_time)


class ApiKeysResponse(msgspec.Struct):
    api_keys: List[ApiKey] = []


class CreateApiKeyRequest(msgspec.Struct, omit_defaults=True):
    name: str = ""


class CreateApiKeyResponse(msgspec.Struct):
    """Generated key pair: the private key is only returned once."""
    api_key: ApiKey
    private_key: str = ""
