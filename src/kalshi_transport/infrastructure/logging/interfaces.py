"""
Logging Interfaces

Records, backends and the logger contract injected into strategies,
dispatchers and clients as ``self.logger``. Callers pass structured
keyword context; rendering is left to the backend.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional


class LogLevel(IntEnum):
    # Same numbers as the stdlib levels
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogType(IntEnum):
    TEXT = 1
    METRIC = 2
    AUDIT = 3


@dataclass
class LogRecord:
    """One event on its way from a logger to the backends."""
    level: LogLevel
    log_type: LogType
    logger_name: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    metric_name: Optional[str] = None
    metric_value: Optional[float] = None

    correlation_id: Optional[str] = None
    exchange: Optional[str] = None

    @classmethod
    def text(cls, level: LogLevel, logger_name: str, message: str,
             log_type: LogType = LogType.TEXT, **context) -> 'LogRecord':
        return cls(level=level, log_type=log_type, logger_name=logger_name,
                   message=message, context=context)

    @classmethod
    def metric(cls, logger_name: str, name: str, value: float, **tags) -> 'LogRecord':
        return cls(level=LogLevel.INFO, log_type=LogType.METRIC, logger_name=logger_name,
                   message="", context=tags, metric_name=name, metric_value=value)


class LogBackend(ABC):
    """
    Destination for log records.

    write() must never raise into request code: failures are counted and
    the backend switches itself off after MAX_ERRORS of them.
    """

    MAX_ERRORS = 10

    def __init__(self, name: str):
        self.name = name
        self.enabled = True
        self.error_count = 0

    @abstractmethod
    def should_handle(self, record: LogRecord) -> bool:
        pass

    @abstractmethod
    def write(self, record: LogRecord) -> None:
        pass

    def record_failure(self) -> None:
        self.error_count += 1
        if self.error_count >= self.MAX_ERRORS:
            self.enabled = False


class HFTLoggerInterface(ABC):
    """Structured logger with keyword context, metrics and audit events."""

    @abstractmethod
    def debug(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def info(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def warning(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def error(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def critical(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def metric(self, name: str, value: float, **tags) -> None:
        pass

    @abstractmethod
    def latency(self, operation: str, duration_ms: float, **tags) -> None:
        """Shorthand for the ``<operation>_latency_ms`` metric."""
        pass

    @abstractmethod
    def audit(self, event: str, **context) -> None:
        """Account-changing action, kept apart from diagnostic text."""
        pass

    @abstractmethod
    def set_context(self, **context) -> None:
        """Context merged into every later record of this logger."""
        pass
