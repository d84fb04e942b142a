"""
Authentication Strategy Interface

Strategy for request authentication and signing.
Produces the headers for exactly one outbound attempt.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Union

from ..structs import HTTPMethod
from .structs import AuthenticationData


class AuthStrategy(ABC):
    """
    Strategy for request authentication and signing.

    Implementations hold immutable key material only and are safe to share
    between concurrent operations.
    """

    @abstractmethod
    def sign_request(
        self,
        method: HTTPMethod,
        path: str,
        body: Union[str, bytes, None],
        timestamp: datetime
    ) -> AuthenticationData:
        """
        Generate authentication data for one attempt.

        Args:
            method: HTTP method
            path: Request path including any query string, exactly as sent
            body: Exact request body bytes (None or empty for no body)
            timestamp: Timestamp captured for this attempt

        Returns:
            AuthenticationData with the signed headers

        Raises:
            SigningError: If the signature cannot be produced
        """
        pass

    def requires_auth(self, path: str) -> bool:
        """
        Check if endpoint requires authentication.

        Default implementation signs every request.
        """
        return True
