"""
Console Backend

Hands rendered records to the stdlib ``logging`` module under the
record's logger name, so handlers installed by the host application
apply. A plain stream handler is installed only when the root logger
has none.
"""

import logging
from typing import Any, Dict

from ..interfaces import LogBackend, LogRecord, LogLevel, LogType
from ..structs import ConsoleBackendConfig

CONTEXT_VALUE_LIMIT = 100


class ConsoleBackend(LogBackend):

    def __init__(self, config: ConsoleBackendConfig, name: str = "console"):
        super().__init__(name)
        self.config = config
        self.min_level = LogLevel[config.min_level.upper()]
        self.enabled = config.enabled

        if self.enabled:
            self._install_root_handler()

    def should_handle(self, record: LogRecord) -> bool:
        if record.level < self.min_level:
            return False
        return record.log_type != LogType.METRIC or self.config.include_metrics

    def write(self, record: LogRecord) -> None:
        try:
            logging.getLogger(record.logger_name).log(int(record.level), self._format_message(record))
        except Exception:
            self.record_failure()

    def _install_root_handler(self) -> None:
        root = logging.getLogger()
        if root.handlers:
            return
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(levelname)-8s %(name)-20s %(message)s'))
        root.addHandler(handler)
        root.setLevel(int(self.min_level))

    def _format_message(self, record: LogRecord) -> str:
        if record.log_type == LogType.METRIC:
            message = f"{record.metric_name}={record.metric_value}"
        else:
            message = record.message

        limit = self.config.max_message_length
        if len(message) > limit:
            message = message[:limit] + "..."

        extras: Dict[str, Any] = dict(record.context) if self.config.include_context else {}
        if record.correlation_id:
            extras['correlation_id'] = record.correlation_id
        if record.exchange:
            extras['exchange'] = record.exchange
        if extras:
            message += " | " + " ".join(f"{key}={self._clip(value)}" for key, value in extras.items())

        if record.log_type == LogType.AUDIT:
            message = f"[AUDIT] {message}"
        return message

    @staticmethod
    def _clip(value: Any) -> str:
        text = str(value)
        if len(text) > CONTEXT_VALUE_LIMIT:
            return text[:CONTEXT_VALUE_LIMIT] + "..."
        return text
