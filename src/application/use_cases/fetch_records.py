"""Concurrent fetch of a team's entity sets."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, List

from analytics.records import GameRecord, PerformanceSnapshot, TeamRecords

from ..ports.records_source import TeamRecordsPort
from ...domain.value_objects.types import PlayerId, TeamId

logger = logging.getLogger(__name__)

# Thread pool for running blocking record store calls
_executor = ThreadPoolExecutor(max_workers=4)


async def _empty() -> List[Any]:
    return []


class TeamRecordsFetcher:
    """Fetches the entity sets for one team and joins them.

    Independent sets are requested concurrently; per-parent games and
    per-player snapshots are fanned out once their parents are known. The
    first failing call fails the whole fetch.
    """

    def __init__(self, records_source: TeamRecordsPort):
        self._source = records_source

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(_executor, partial(fn, *args))

    async def fetch(
        self,
        team_id: TeamId,
        *,
        games: bool = True,
        stats: bool = True,
        snapshots: bool = True,
    ) -> TeamRecords:
        """Fetch the requested entity sets for a team.

        Args:
            team_id: Team to fetch
            games: Include scrims, official matches and their games
            stats: Include per-game player stat rows
            snapshots: Include weekly performance snapshots

        Returns:
            TeamRecords snapshot for the aggregation
        """
        scrims, matches, players, stat_rows = await asyncio.gather(
            self._run(self._source.list_completed_scrims, team_id) if games else _empty(),
            self._run(self._source.list_official_matches, team_id) if games else _empty(),
            self._run(self._source.list_players_on_team, team_id),
            self._run(self._source.list_player_game_stats, team_id) if stats else _empty(),
        )
        series = list(scrims) + list(matches)

        game_lists: List[List[GameRecord]] = []
        snapshot_lists: List[List[PerformanceSnapshot]] = []
        if series or (snapshots and players):
            results = await asyncio.gather(
                *[self._run(self._source.list_child_games, s) for s in series],
                *[
                    self._run(self._source.list_performance_snapshots, PlayerId(p.id))
                    for p in (players if snapshots else [])
                ],
            )
            game_lists = list(results[: len(series)])
            snapshot_lists = list(results[len(series):])

        records = TeamRecords(
            team_id=team_id,
            series=series,
            games=[g for chunk in game_lists for g in chunk],
            stats=list(stat_rows),
            players=list(players),
            snapshots=[s for chunk in snapshot_lists for s in chunk],
        )
        logger.info(
            "Fetched team %s: %d series, %d games, %d stat rows, %d players",
            team_id,
            len(records.series),
            len(records.games),
            len(records.stats),
            len(records.players),
        )
        return records
