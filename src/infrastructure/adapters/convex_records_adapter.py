"""Adapter reading team records from the Convex HTTP query API."""

import logging
import os
from typing import Dict, List

from analytics.config import function_paths_from_env
from analytics.convex_client import ConvexQueryClient
from analytics.ingest import ConvexStore
from analytics.records import (
    GameRecord,
    PerformanceSnapshot,
    Player,
    PlayerGameStat,
    SeriesRecord,
)

from ...application.ports.records_source import TeamRecordsPort
from ...domain.value_objects.types import PlayerId, TeamId

logger = logging.getLogger(__name__)


class ConvexRecordsAdapter(TeamRecordsPort):
    """Adapter for fetching team records from a Convex deployment."""

    def __init__(
        self,
        base_url: str | None = None,
        auth_token: str | None = None,
        function_paths: Dict[str, str] | None = None,
    ):
        """Initialize with deployment settings.

        Args:
            base_url: Deployment URL. If None, will try to get from environment.
            auth_token: Optional bearer token. If None, read from environment.
            function_paths: Overrides for the query function names. If None,
                read from CONVEX_FUNCTION_PATHS.
        """
        base_url = base_url or os.environ.get("CONVEX_URL", "")
        if not base_url:
            raise ValueError("CONVEX_URL not configured")
        client = ConvexQueryClient(
            base_url=base_url,
            auth_token=auth_token or os.environ.get("CONVEX_AUTH_TOKEN", ""),
        )
        if function_paths is None:
            function_paths = function_paths_from_env()
        self._store = ConvexStore(client, function_paths)
        logger.debug("Convex records adapter bound to %s", base_url)

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
