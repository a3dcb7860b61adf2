"""Port (interface) for the team record store."""

from abc import ABC, abstractmethod
from typing import List

from analytics.records import (
    GameRecord,
    PerformanceSnapshot,
    Player,
    PlayerGameStat,
    SeriesRecord,
)

from ...domain.value_objects.types import PlayerId, TeamId


class TeamRecordsPort(ABC):
    """Port for reading the raw entity sets the analytics engine consumes.

    Implementations are blocking and read-only. Any failure to retrieve a
    set is raised as ``UpstreamFetchError``.
    """

    @abstractmethod
    def list_completed_scrims(self, team_id: TeamId) -> List[SeriesRecord]:
        """List the team's completed scrims."""
        ...

    @abstractmethod
    def list_official_matches(self, team_id: TeamId) -> List[SeriesRecord]:
        """List the team's official matches."""
        ...

    @abstractmethod
    def list_child_games(self, parent: SeriesRecord) -> List[GameRecord]:
        """List the games played within one scrim or official match."""
        ...

    @abstractmethod
    def list_player_game_stats(self, team_id: TeamId) -> List[PlayerGameStat]:
        """List every per-game player stat row recorded for the team."""
        ...

    @abstractmethod
    def list_players_on_team(self, team_id: TeamId) -> List[Player]:
        """List the team's players (staff excluded)."""
        ...

    @abstractmethod
    def list_performance_snapshots(self, player_id: PlayerId) -> List[PerformanceSnapshot]:
        """List a player's weekly rating snapshots."""
        ...
