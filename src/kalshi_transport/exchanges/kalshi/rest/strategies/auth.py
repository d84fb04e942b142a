import base64
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .....infrastructure.exceptions.exchange import SigningError
from .....infrastructure.exceptions.system import ConfigurationError
from .....infrastructure.logging import get_strategy_logger
from .....infrastructure.networking.http import AuthStrategy, AuthenticationData, HTTPMethod
from .....config.structs import KalshiCredentials

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

TIMESTAMP_HEADER = "KALSHI-ACCESS-TIMESTAMP"
AUTHORIZATION_HEADER = "Authorization"
AUTHORIZATION_SCHEME = "KALSHI-API-KEY"


def format_timestamp(timestamp: datetime) -> str:
    """Render a timestamp in UTC, second precision. Naive values are taken as UTC."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def build_auth_message(
    timestamp: datetime,
    method: Union[HTTPMethod, str],
    path: str,
    body: Union[str, bytes, None] = None
) -> bytes:
    """
    Build the canonical payload signed for one attempt.

    timestamp + method + path + body, concatenated without delimiters.
    The body bytes are appended untouched; text bodies are UTF-8 encoded.

    Args:
        timestamp: Timestamp captured for the attempt
        method: HTTP method
        path: Request path including query string, exactly as transmitted
        body: Exact body bytes as transmitted; None or empty for no body

    Returns:
        Canonical message bytes
    """
    method_value = method.value if isinstance(method, HTTPMethod) else method
    prefix = f"{format_timestamp(timestamp)}{method_value}{path}".encode("utf-8")
    if not body:
        return prefix
    if isinstance(body, str):
        body = body.encode("utf-8")
    return prefix + body


class KalshiAuthStrategy(AuthStrategy):
    """
    Kalshi RSA request signing.

    Signs SHA-256 of the canonical message with PKCS#1 v1.5 padding and
    emits the timestamp and Authorization headers. Holds only the key id
    and the private key; safe to share between concurrent operations.
    """

    def __init__(self, api_key_id: str, private_key: rsa.RSAPrivateKey, logger=None):
        """
        Initialize Kalshi authentication strategy.

        Args:
            api_key_id: Kalshi API key identifier
            private_key: RSA private key matching the registered public key
            logger: Optional HFT logger injection

        Raises:
            ConfigurationError: If the key id or a usable RSA key is missing
        """
        if not api_key_id:
            raise ConfigurationError("API key ID is required", "credentials.api_key_id")
        if private_key is None:
            raise ConfigurationError("Private key is required", "credentials.private_key_path")
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise ConfigurationError(
                f"Private key must be RSA, got {type(private_key).__name__}",
                "credentials.private_key_path"
            )

        if logger is None:
            logger = get_strategy_logger('rest.auth.kalshi', ['kalshi', 'private', 'rest', 'auth'])
        self.logger = logger

        self._api_key_id = api_key_id
        self._private_key = private_key

        self.logger.debug("Kalshi auth strategy initialized",
                          key_size=private_key.key_size)

    @classmethod
    def from_pem(cls, api_key_id: str, pem_data: Union[str, bytes], logger=None) -> 'KalshiAuthStrategy':
        """
        Create a strategy from PKCS#1 ("RSA PRIVATE KEY") or PKCS#8 ("PRIVATE KEY") PEM.

        Raises:
            ConfigurationError: If the PEM cannot be parsed
        """
        if isinstance(pem_data, str):
            pem_data = pem_data.encode("utf-8")
        try:
            private_key = serialization.load_pem_private_key(pem_data, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise ConfigurationError(f"Failed to parse private key: {e}", "credentials.private_key_pem") from e
        return cls(api_key_id, private_key, logger=logger)

    @classmethod
    def from_file(cls, api_key_id: str, path: Union[str, Path], logger=None) -> 'KalshiAuthStrategy':
        """Create a strategy from a PEM file on disk."""
        key_path = Path(path).expanduser()
        try:
            pem_data = key_path.read_bytes()
        except OSError as e:
            raise ConfigurationError(f"Cannot read private key file {key_path}: {e}",
                                     "credentials.private_key_path") from e
        return cls.from_pem(api_key_id, pem_data, logger=logger)

    @classmethod
    def from_credentials(cls, credentials: KalshiCredentials, logger=None) -> 'KalshiAuthStrategy':
        """Create a strategy from configured credentials (inline PEM wins over path)."""
        if credentials.private_key_pem:
            return cls.from_pem(credentials.api_key_id, credentials.private_key_pem, logger=logger)
        if credentials.private_key_path:
            return cls.from_file(credentials.api_key_id, credentials.private_key_path, logger=logger)
        raise ConfigurationError("Private key is required", "credentials.private_key_path")

    @property
    def api_key_id(self) -> str:
        return self._api_key_id

    def sign(
        self,
        timestamp: datetime,
        method: Union[HTTPMethod, str],
        path: str,
        body: Union[str, bytes, None] = None
    ) -> str:
        """
        Sign the canonical message for one attempt.

        Returns:
            Base64-encoded RSA signature

        Raises:
            SigningError: If the crypto backend fails
        """
        try:
            message = build_auth_message(timestamp, method, path, body)
            signature = self._private_key.sign(
                message,
                padding.PKCS1v15(),
                hashes.SHA256()
            )
        except Exception as e:
            raise SigningError(f"Failed to sign request: {e}") from e
        return base64.b64encode(signature).decode("ascii")

    def authorization_header(self, signature: str) -> str:
        return f"{AUTHORIZATION_SCHEME} {self._api_key_id}:{signature}"

    @staticmethod
    def timestamp_header(timestamp: datetime) -> str:
        return format_timestamp(timestamp)

    def sign_request(
        self,
        method: HTTPMethod,
        path: str,
        body: Union[str, bytes, None],
        timestamp: datetime
    ) -> AuthenticationData:
        """Produce both headers from the single timestamp captured for this attempt."""
        signature = self.sign(timestamp, method, path, body)
        stamp = format_timestamp(timestamp)

        headers: Dict[str, str] = {
            TIMESTAMP_HEADER: stamp,
            AUTHORIZATION_HEADER: self.authorization_header(signature),
        }
        return AuthenticationData(headers=headers, timestamp=stamp, signature=signature)


def generate_key_pair(key_size: int = 4096) -> rsa.RSAPrivateKey:
    """Generate a new RSA key pair for API key registration."""
    return rsa.generate_private_key(public_exponent=65537, key_size=key_size)


def encode_private_key_pem(private_key: rsa.RSAPrivateKey) -> str:
    """Encode as PKCS#1 PEM ("RSA PRIVATE KEY")."""
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption()
    ).decode("ascii")


def encode_public_key_pem(public_key: Optional[rsa.RSAPublicKey] = None,
                          private_key: Optional[rsa.RSAPrivateKey] = None) -> str:
    """Encode as SubjectPublicKeyInfo PEM ("PUBLIC KEY"), from either half of the pair."""
    if public_key is None:
        if private_key is None:
            raise ValueError("public_key or private_key is required")
        public_key = private_key.public_key()
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode("ascii")
