"""Adapter serving team records from an exported table snapshot."""

from typing import Any, Dict, List

from analytics.ingest import SnapshotStore, load_snapshot
from analytics.records import (
    GameRecord,
    PerformanceSnapshot,
    Player,
    PlayerGameStat,
    SeriesRecord,
)

from ...application.ports.records_source import TeamRecordsPort
from ...domain.value_objects.types import PlayerId, TeamId


class SnapshotRecordsAdapter(TeamRecordsPort):
    """Adapter over an in-memory copy of the record tables."""

    def __init__(self, tables: Dict[str, List[Dict[str, Any]]]):
        self._store = SnapshotStore(tables)

    @classmethod
    def from_file(cls, path: str) -> "SnapshotRecordsAdapter":
        """Load the tables from a JSON export.

        Raises:
            UpstreamFetchError: If the file cannot be read or parsed
        """
        return cls(load_snapshot(path))

    def list_completed_scrims(self, team_id: TeamId) -> List[SeriesRecord]:
        return self._store.list_completed_scrims(team_id)

    def list_official_matches(self, team_id: TeamId) -> List[SeriesRecord]:
        return self._store.list_official_matches(team_id)

    def list_child_games(self, parent: SeriesRecord) -> List[GameRecord]:
        return self._store.list_child_games(parent)

    def list_player_game_stats(self, team_id: TeamId) -> List[PlayerGameStat]:
        return self._store.list_player_game_stats(team_id)

    def list_players_on_team(self, team_id: TeamId) -> List[Player]:
        return self._store.list_players_on_team(team_id)

    def list_performance_snapshots(self, player_id: PlayerId) -> List[PerformanceSnapshot]:
        return self._store.list_performance_snapshots(player_id)
