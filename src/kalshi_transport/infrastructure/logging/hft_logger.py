"""
Structured Logger

Fans records out to its backends synchronously. ``correlation_id`` and
``exchange`` are lifted out of the keyword context into record fields.
"""

from typing import Any, Dict, List, Optional, Tuple

from .interfaces import HFTLoggerInterface, LogBackend, LogRecord, LogLevel, LogType


class HFTLogger(HFTLoggerInterface):

    def __init__(self, name: str, backends: List[LogBackend]):
        self.name = name
        self.backends = backends
        self.context: Dict[str, Any] = {}

    def _emit(self, record: LogRecord) -> None:
        for backend in self.backends:
            if backend.enabled and backend.should_handle(record):
                backend.write(record)

    def _split_context(self, extra: Dict[str, Any]) -> Tuple[Dict[str, Any], Optional[str], Optional[str]]:
        merged = {**self.context, **extra}
        return merged, merged.pop('correlation_id', None), merged.pop('exchange', None)

    def _text(self, level: LogLevel, msg: str, log_type: LogType, context: Dict[str, Any]) -> None:
        fields, correlation_id, exchange = self._split_context(context)
        record = LogRecord.text(level, self.name, msg, log_type, **fields)
        record.correlation_id = correlation_id
        record.exchange = exchange
        self._emit(record)

    def debug(self, msg: str, **context) -> None:
        self._text(LogLevel.DEBUG, msg, LogType.TEXT, context)

    def info(self, msg: str, **context) -> None:
        self._text(LogLevel.INFO, msg, LogType.TEXT, context)

    def warning(self, msg: str, **context) -> None:
        self._text(LogLevel.WARNING, msg, LogType.TEXT, context)

    def error(self, msg: str, **context) -> None:
        self._text(LogLevel.ERROR, msg, LogType.TEXT, context)

    def critical(self, msg: str, **context) -> None:
        self._text(LogLevel.CRITICAL, msg, LogType.TEXT, context)

    def audit(self, event: str, **context) -> None:
        self._text(LogLevel.INFO, event, LogType.AUDIT, context)

    def metric(self, name: str, value: float, **tags) -> None:
        fields, correlation_id, exchange = self._split_context(tags)
        record = LogRecord.metric(self.name, name, float(value), **fields)
        record.correlation_id = correlation_id
        record.exchange = exchange
        self._emit(record)

    def latency(self, operation: str, duration_ms: float, **tags) -> None:
        self.metric(f"{operation}_latency_ms", duration_ms, **tags)

    def set_context(self, **context) -> None:
        self.context.update(context)
