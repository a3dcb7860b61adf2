"""Infrastructure adapters."""

from .convex_records_adapter import ConvexRecordsAdapter
from .snapshot_records_adapter import SnapshotRecordsAdapter

__all__ = [
    "ConvexRecordsAdapter",
    "SnapshotRecordsAdapter",
]
