"""Use case for correlation, distribution and synergy statistics."""

from analytics.advanced import AdvancedStats, compute_advanced_stats

from ..ports.records_source import TeamRecordsPort
from ...domain.value_objects.types import TeamId
from .fetch_records import TeamRecordsFetcher


class GetAdvancedStatsUseCase:
    def __init__(self, records_source: TeamRecordsPort):
        self._fetcher = TeamRecordsFetcher(records_source)

    async def execute(self, team_id: TeamId) -> AdvancedStats:
        records = await self._fetcher.fetch(team_id, snapshots=False)
        return compute_advanced_stats(records.stats, records.games, records.players)
