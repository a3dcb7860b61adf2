from __future__ import annotations

from typing import Optional


class UpstreamFetchError(RuntimeError):
    """Raised when an entity set cannot be retrieved from the record store."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
