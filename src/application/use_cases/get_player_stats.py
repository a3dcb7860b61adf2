"""Use case for per-player recent form."""

from typing import List

from analytics.players import PlayerStatLine, compute_player_stats

from ..ports.records_source import TeamRecordsPort
from ...domain.value_objects.types import TeamId
from .fetch_records import TeamRecordsFetcher


class GetPlayerStatsUseCase:
    def __init__(self, records_source: TeamRecordsPort):
        self._fetcher = TeamRecordsFetcher(records_source)

    async def execute(self, team_id: TeamId) -> List[PlayerStatLine]:
        records = await self._fetcher.fetch(team_id, games=False, snapshots=False)
        return compute_player_stats(records.players, records.stats)
