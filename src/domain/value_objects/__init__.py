"""Domain value objects."""

from .types import (
    PlayerId,
    Position,
    ProgressStatus,
    TeamId,
)

__all__ = [
    "PlayerId",
    "Position",
    "ProgressStatus",
    "TeamId",
]
