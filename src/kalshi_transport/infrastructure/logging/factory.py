"""
Logger Factory

Loggers are cached by name. Until configure_logging() runs, the
configuration follows the ENVIRONMENT variable (dev when unset).
"""

import os
from typing import Any, Dict, List, Optional, Union

from .backends.console import ConsoleBackend
from .hft_logger import HFTLogger
from .interfaces import HFTLoggerInterface
from .structs import LoggingConfig


class LoggerFactory:

    _cached_loggers: Dict[str, HFTLogger] = {}
    _default_config: Optional[LoggingConfig] = None

    @classmethod
    def create_logger(cls, name: str) -> HFTLoggerInterface:
        logger = cls._cached_loggers.get(name)
        if logger is None:
            config = cls._active_config()
            backends = []
            if config.console is not None and config.console.enabled:
                backends.append(ConsoleBackend(config.console))
            logger = HFTLogger(name, backends)
            cls._cached_loggers[name] = logger
        return logger

    @classmethod
    def configure(cls, config: LoggingConfig) -> None:
        """Replace the active configuration; loggers created earlier are dropped from the cache."""
        config.validate()
        cls._cached_loggers.clear()
        cls._default_config = config

    @classmethod
    def clear_cache(cls) -> None:
        cls._cached_loggers.clear()
        cls._default_config = None

    @classmethod
    def _active_config(cls) -> LoggingConfig:
        if cls._default_config is None:
            cls._default_config = LoggingConfig.for_environment(os.getenv('ENVIRONMENT', 'dev'))
        return cls._default_config


def get_logger(name: str) -> HFTLoggerInterface:
    return LoggerFactory.create_logger(name)


def get_exchange_logger(exchange: str, component: Optional[str] = None) -> HFTLoggerInterface:
    """Logger named ``<exchange>.<component>`` tagged with the exchange."""
    logger = get_logger(f"{exchange}.{component}" if component else exchange)
    logger.set_context(exchange=exchange)
    return logger


def get_strategy_logger(strategy_path: str, tags: Optional[List[str]] = None) -> HFTLoggerInterface:
    logger = get_logger(strategy_path)
    if tags:
        logger.set_context(tags=".".join(tags))
    return logger


def configure_logging(config: Union[LoggingConfig, Dict[str, Any]]) -> None:
    """Apply a LoggingConfig or the raw ``logging`` section of config.yaml."""
    if not isinstance(config, LoggingConfig):
        config = LoggingConfig.from_dict(config)
    LoggerFactory.configure(config)
