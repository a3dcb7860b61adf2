from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DEFAULT_FUNCTION_PATHS
from .convex_client import ConvexQueryClient
from .errors import UpstreamFetchError
from .records import (
    GameKind,
    GameRecord,
    PerformanceSnapshot,
    Player,
    PlayerGameStat,
    SeriesRecord,
    TeamRecords,
    game_from_doc,
    player_from_doc,
    series_from_doc,
    snapshot_from_doc,
    stat_from_doc,
)

logger = logging.getLogger(__name__)

COMPLETED_STATUS = "concluido"


def _is_player(doc: Dict[str, Any]) -> bool:
    return doc.get("role", "player") == "player"


class ConvexStore:
    """Reads team entity sets through the database's HTTP query functions."""

    def __init__(self, client: ConvexQueryClient, function_paths: Optional[Dict[str, str]] = None):
        self._client = client
        self._paths = {**DEFAULT_FUNCTION_PATHS, **(function_paths or {})}

    def _list(self, op: str, args: Dict[str, Any]) -> List[Dict[str, Any]]:
        value = self._client.query(self._paths[op], args)
        if value is None:
            return []
        if not isinstance(value, list):
            raise UpstreamFetchError(
                f"Query {self._paths[op]} returned {type(value).__name__}, expected a list",
                operation=self._paths[op],
            )
        return [v for v in value if isinstance(v, dict)]

    def list_completed_scrims(self, team_id: str) -> List[SeriesRecord]:
        docs = self._list("completed_scrims", {"teamId": team_id})
        return [series_from_doc(d, GameKind.SCRIM) for d in docs if d.get("status", COMPLETED_STATUS) == COMPLETED_STATUS]

    def list_official_matches(self, team_id: str) -> List[SeriesRecord]:
        docs = self._list("official_matches", {"teamId": team_id})
        return [series_from_doc(d, GameKind.OFFICIAL) for d in docs]

    def list_child_games(self, parent: SeriesRecord) -> List[GameRecord]:
        if parent.kind is GameKind.SCRIM:
            path, args = self._paths["scrim_games"], {"id": parent.id}
        else:
            path, args = self._paths["official_games"], {"matchId": parent.id}
        value = self._client.query(path, args) or {}
        docs = value.get("games") if isinstance(value, dict) else value
        return [game_from_doc(d, parent.kind, parent.id) for d in (docs or []) if isinstance(d, dict)]

    def list_player_game_stats(self, team_id: str) -> List[PlayerGameStat]:
        return [stat_from_doc(d) for d in self._list("player_game_stats", {"teamId": team_id})]

    def list_players_on_team(self, team_id: str) -> List[Player]:
        docs = self._list("players", {"teamId": team_id})
        return [player_from_doc(d) for d in docs if _is_player(d)]

    def list_performance_snapshots(self, player_id: str) -> List[PerformanceSnapshot]:
        return [snapshot_from_doc(d) for d in self._list("snapshots", {"userId": player_id})]


class SnapshotStore:
    """Serves the same entity sets from an exported table snapshot."""

    def __init__(self, tables: Dict[str, List[Dict[str, Any]]]):
        self._tables = tables

    def _rows(self, table: str) -> List[Dict[str, Any]]:
        return [r for r in (self._tables.get(table) or []) if isinstance(r, dict)]

    def list_completed_scrims(self, team_id: str) -> List[SeriesRecord]:
        return [
            series_from_doc(d, GameKind.SCRIM)
            for d in self._rows("scrims")
            if str(d.get("teamId")) == team_id and d.get("status") == COMPLETED_STATUS
        ]

    def list_official_matches(self, team_id: str) -> List[SeriesRecord]:
        return [
            series_from_doc(d, GameKind.OFFICIAL)
            for d in self._rows("officialMatches")
            if str(d.get("teamId")) == team_id
        ]

    def list_child_games(self, parent: SeriesRecord) -> List[GameRecord]:
        if parent.kind is GameKind.SCRIM:
            table, key = "scrimGames", "scrimId"
        else:
            table, key = "officialGames", "matchId"
        return [
            game_from_doc(d, parent.kind, parent.id)
            for d in self._rows(table)
            if str(d.get(key)) == parent.id
        ]

    def list_player_game_stats(self, team_id: str) -> List[PlayerGameStat]:
        return [stat_from_doc(d) for d in self._rows("playerGameStats") if str(d.get("teamId")) == team_id]

    def list_players_on_team(self, team_id: str) -> List[Player]:
        return [
            player_from_doc(d)
            for d in self._rows("users")
            if str(d.get("teamId")) == team_id and _is_player(d)
        ]

    def list_performance_snapshots(self, player_id: str) -> List[PerformanceSnapshot]:
        return [
            snapshot_from_doc(d)
            for d in self._rows("playerPerformanceSnapshots")
            if str(d.get("userId")) == player_id
        ]


def load_snapshot(path: str) -> Dict[str, List[Dict[str, Any]]]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise UpstreamFetchError(f"Cannot read snapshot {path}: {exc}", operation="load_snapshot") from exc
    if not isinstance(data, dict):
        raise UpstreamFetchError(f"Snapshot {path} is not a table mapping", operation="load_snapshot")
    return data


def collect_team_records(store: Any, team_id: str) -> TeamRecords:
    """Fetch every entity set for one team, one call after another."""
    series = store.list_completed_scrims(team_id) + store.list_official_matches(team_id)
    games: List[GameRecord] = []
    for s in series:
        games.extend(store.list_child_games(s))
    players = store.list_players_on_team(team_id)
    snapshots: List[PerformanceSnapshot] = []
    for p in players:
        snapshots.extend(store.list_performance_snapshots(p.id))
    stats = store.list_player_game_stats(team_id)
    logger.info(
        "Collected %d series, %d games, %d stat rows for team %s",
        len(series), len(games), len(stats), team_id,
    )
    return TeamRecords(
        team_id=team_id,
        series=series,
        games=games,
        stats=stats,
        players=players,
        snapshots=snapshots,
    )
