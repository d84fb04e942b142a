"""
Pytest configuration and shared fixtures for REST transport tests.
"""

import os
import sys
from pathlib import Path

import pytest
from unittest.mock import Mock

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Configure test environment
os.environ['ENVIRONMENT'] = 'test'

from kalshi_transport.infrastructure.logging import LoggerFactory, LoggingConfig, ConsoleBackendConfig
from kalshi_transport.exchanges.kalshi.rest.strategies import KalshiAuthStrategy, generate_key_pair

from tests.helpers import FakeTransport, RecordingSleep, StepClock


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Set up test-appropriate logging configuration."""
    LoggerFactory.configure(LoggingConfig(
        environment="test",
        console=ConsoleBackendConfig(enabled=True, min_level="ERROR")
    ))
    yield
    LoggerFactory.clear_cache()


@pytest.fixture
def mock_logger():
    """Provide mock HFT logger for strategy injection."""
    return Mock()


@pytest.fixture(scope="session")
def rsa_private_key():
    """Session-wide 2048-bit key; generation is slow."""
    return generate_key_pair(key_size=2048)


@pytest.fixture
def auth_strategy(rsa_private_key, mock_logger):
    return KalshiAuthStrategy("test-key-id", rsa_private_key, logger=mock_logger)


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def step_clock():
    return StepClock()
