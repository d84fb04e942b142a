"""
Exception Handler Strategy Interface

Strategy for classifying completed attempts and converting exchange
error responses into structured exceptions.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from ....exceptions.exchange import ExchangeRestError, TransportError
from ..structs import TransportResponse
from .structs import Classification


class ExceptionHandlerStrategy(ABC):
    """
    Strategy for handling exchange-specific API errors.

    Stateless; safe to share between concurrent operations.
    """

    @abstractmethod
    def classify(
        self,
        response: Optional[TransportResponse],
        transport_error: Optional[TransportError] = None
    ) -> Classification:
        """
        Classify a completed attempt.

        Args:
            response: Response received, None on transport failure
            transport_error: Transport failure, None when a response arrived

        Returns:
            Classification with outcome, structured error and retry hint
        """
        pass

    @abstractmethod
    def handle_error(
        self,
        status_code: int,
        response_text: str,
        headers: Optional[Mapping[str, str]] = None
    ) -> ExchangeRestError:
        """
        Convert a non-2xx response into a structured exception.

        Args:
            status_code: HTTP status code
            response_text: Raw response text from the API
            headers: Response headers

        Returns:
            ExchangeRestError or subclass
        """
        pass
