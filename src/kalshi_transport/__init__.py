"""
Kalshi REST Transport

Authenticated request dispatch for the Kalshi trading API:
- infrastructure: logging, exceptions and the HTTP dispatch pipeline
- config: YAML/environment driven configuration structs
- exchanges: Kalshi-specific strategies (signing, retry, error mapping)
"""

__version__ = "1.0.0"
