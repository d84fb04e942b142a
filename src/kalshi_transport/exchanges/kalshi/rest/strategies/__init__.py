from .auth import (
    KalshiAuthStrategy,
    build_auth_message,
    format_timestamp,
    generate_key_pair,
    encode_private_key_pem,
    encode_public_key_pem,
    TIMESTAMP_HEADER,
    AUTHORIZATION_HEADER,
)
from .retry import KalshiRetryStrategy
from .exception_handler import KalshiExceptionHandlerStrategy, KalshiErrorResponse, parse_error_body
from .request import KalshiRequestStrategy, API_PREFIX

__all__ = [
    'KalshiAuthStrategy',
    'build_auth_message',
    'format_timestamp',
    'generate_key_pair',
    'encode_private_key_pem',
    'encode_public_key_pem',
    'TIMESTAMP_HEADER',
    'AUTHORIZATION_HEADER',
    'KalshiRetryStrategy',
    'KalshiExceptionHandlerStrategy',
    'KalshiErrorResponse',
    'parse_error_body',
    'KalshiRequestStrategy',
    'API_PREFIX',
]
