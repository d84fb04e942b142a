"""
Infrastructure Components

Core infrastructure components for the Kalshi REST transport:
- networking: HTTP transport, strategies and the request dispatcher
- logging: HFT-style structured logging with pluggable backends
- exceptions: Exchange and system exception definitions
"""
