"""Team Analytics Backend - esports team analytics API.

This package provides a hexagonal architecture implementation for
League of Legends team performance analytics.

Layers:
- domain: Value objects shared across layers
- application: Use cases and port interfaces
- infrastructure: Adapters for record stores
- api: REST and WebSocket endpoints
"""

__version__ = "1.0.0"
