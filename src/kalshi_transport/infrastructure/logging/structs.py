"""
Logging configuration, decoded from the ``logging`` section of config.yaml.
"""

from typing import Any, Dict, Optional

import msgspec
from msgspec import Struct

ENVIRONMENTS = ("dev", "test", "staging", "prod")


class ConsoleBackendConfig(Struct, frozen=True):
    """
    Attributes:
        enabled: Whether records reach the console at all
        min_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        include_context: Append keyword context to each line
        include_metrics: Render metric records as lines too
        max_message_length: Longer messages are cut with "..."
    """
    enabled: bool = True
    min_level: str = "INFO"
    include_context: bool = True
    include_metrics: bool = False
    max_message_length: int = 1000

    def validate(self) -> None:
        if self.min_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {self.min_level}")


class LoggingConfig(Struct, frozen=True):
    environment: str = "dev"
    console: Optional[ConsoleBackendConfig] = None

    def validate(self) -> None:
        if self.environment not in ENVIRONMENTS:
            raise ValueError(f"Invalid environment: {self.environment}")
        if self.console is not None:
            self.console.validate()

    @classmethod
    def for_environment(cls, environment: str) -> 'LoggingConfig':
        """Debug output everywhere except prod."""
        min_level = "INFO" if environment == "prod" else "DEBUG"
        return cls(environment=environment, console=ConsoleBackendConfig(min_level=min_level))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LoggingConfig':
        return msgspec.convert(data, cls)
