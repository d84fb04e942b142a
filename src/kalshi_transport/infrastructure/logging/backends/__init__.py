from .console import ConsoleBackend

__all__ = ['ConsoleBackend']
