"""
Test doubles for the REST transport pipeline.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Union

from kalshi_transport.infrastructure.exceptions.exchange import TransportError
from kalshi_transport.infrastructure.networking.http import HTTPMethod, RestTransport, TransportResponse

FIXED_TIME = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)

Outcome = Union[TransportResponse, Exception, asyncio.Event]


class SentRequest:
    """One request as observed by the fake transport."""

    def __init__(self, method: HTTPMethod, url: str, headers: Dict[str, str], body: Optional[bytes]):
        self.method = method
        self.url = url
        self.headers = headers
        self.body = body


class FakeTransport(RestTransport):
    """
    Scripted transport: each send pops the next scripted outcome.

    An outcome is a TransportResponse, an exception to raise, or an
    asyncio.Event the send blocks on until set (a hung request).
    """

    def __init__(self, outcomes: Optional[List[Outcome]] = None):
        self.outcomes = list(outcomes or [])
        self.requests: List[SentRequest] = []
        self.closed = False
        self.cancelled_sends = 0

    def add(self, outcome: Outcome) -> 'FakeTransport':
        self.outcomes.append(outcome)
        return self

    async def send(self, method, url, headers, body=None) -> TransportResponse:
        self.requests.append(SentRequest(method, url, dict(headers), body))
        if not self.outcomes:
            raise AssertionError("FakeTransport has no scripted outcome left")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, asyncio.Event):
            try:
                await outcome.wait()
            except asyncio.CancelledError:
                self.cancelled_sends += 1
                raise
            raise TransportError("hung request released")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


def json_response(status: int, body: bytes = b"{}", headers: Optional[Dict[str, str]] = None) -> TransportResponse:
    return TransportResponse(status=status, body=body, headers=headers or {})


class RecordingSleep:
    """Sleep stand-in recording requested delays without waiting them out."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


class BlockingSleep:
    """Sleep stand-in that never returns on its own."""

    def __init__(self):
        self.delays: List[float] = []
        self.started = asyncio.Event()

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        self.started.set()
        await asyncio.Event().wait()


class StepClock:
    """Clock advancing one second per reading."""

    def __init__(self, start: datetime = FIXED_TIME):
        self.current = start
        self.readings: List[datetime] = []

    def __call__(self) -> datetime:
        value = self.current
        self.readings.append(value)
        self.current = value + timedelta(seconds=1)
        return value
