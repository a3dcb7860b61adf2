"""Application ports (interfaces)."""

from .progress import ProgressCallbackPort
from .records_source import TeamRecordsPort

__all__ = [
    "ProgressCallbackPort",
    "TeamRecordsPort",
]
