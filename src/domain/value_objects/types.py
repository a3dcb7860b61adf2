"""Domain value objects and type aliases."""

from enum import Enum
from typing import NewType

# Type aliases for domain clarity
TeamId = NewType("TeamId", str)
PlayerId = NewType("PlayerId", str)


class Position(str, Enum):
    """Player position on the roster."""

    TOP = "Top"
    JUNGLE = "Jungle"
    MID = "Mid"
    ADC = "ADC"
    SUPPORT = "Support"
    FLEX = "Flex"


class ProgressStatus(str, Enum):
    """Status values sent to progress listeners."""

    CONNECTING = "connecting"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"
