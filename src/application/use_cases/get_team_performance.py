"""Use case for the team performance summary."""

from analytics.performance import TeamPerformance, compute_team_performance

from ..ports.records_source import TeamRecordsPort
from ...domain.value_objects.types import TeamId
from .fetch_records import TeamRecordsFetcher


class GetTeamPerformanceUseCase:
    """Win rate, duration, objective control and weekly form of a team."""

    def __init__(self, records_source: TeamRecordsPort):
        self._fetcher = TeamRecordsFetcher(records_source)

    async def execute(self, team_id: TeamId) -> TeamPerformance:
        records = await self._fetcher.fetch(team_id, stats=False)
        return compute_team_performance(records.series, records.games, records.snapshots)
