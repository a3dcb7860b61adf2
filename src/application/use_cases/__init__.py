"""Application use cases."""

from .fetch_records import TeamRecordsFetcher
from .generate_report import (
    GenerateReportRequest,
    GenerateReportResult,
    GenerateReportUseCase,
)
from .get_advanced_stats import GetAdvancedStatsUseCase
from .get_player_stats import GetPlayerStatsUseCase
from .get_team_performance import GetTeamPerformanceUseCase

__all__ = [
    "GenerateReportRequest",
    "GenerateReportResult",
    "GenerateReportUseCase",
    "GetAdvancedStatsUseCase",
    "GetPlayerStatsUseCase",
    "GetTeamPerformanceUseCase",
    "TeamRecordsFetcher",
]
