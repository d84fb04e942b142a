"""
Networking Infrastructure

Network communication components:
- http: REST transport strategies, dispatcher and manager
"""
