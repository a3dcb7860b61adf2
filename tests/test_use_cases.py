import asyncio
from datetime import date

import pytest

from analytics.errors import UpstreamFetchError
from analytics.records import Player
from analytics.seed import seed_team_records
from src.application.use_cases import (
    GenerateReportRequest,
    GenerateReportUseCase,
    GetAdvancedStatsUseCase,
    GetPlayerStatsUseCase,
    GetTeamPerformanceUseCase,
    TeamRecordsFetcher,
)
from src.application.ports.progress import ProgressCallbackPort
from src.infrastructure.adapters.snapshot_records_adapter import SnapshotRecordsAdapter


def _adapter() -> SnapshotRecordsAdapter:
    roster = [
        Player(id="p1", name="Ace", position="Mid", win_rate=52.0),
        Player(id="p2", name="Bolt", position="ADC", win_rate=48.0),
        Player(id="p3", name="Cyan", position="Support", win_rate=50.0),
    ]
    return SnapshotRecordsAdapter(seed_team_records("team1", roster, scrims=6, today=date(2025, 6, 30)))


class _FailingAdapter(SnapshotRecordsAdapter):
    def list_official_matches(self, team_id):
        raise UpstreamFetchError("matches unavailable", operation="matches:listByTeam")


class _Recorder(ProgressCallbackPort):
    def __init__(self):
        self.updates = []

    async def report_progress(self, progress, message, status="processing"):
        self.updates.append((progress, status))


def test_fetcher_joins_games_and_snapshots() -> None:
    records = asyncio.run(TeamRecordsFetcher(_adapter()).fetch("team1"))
    assert len(records.series) == 6
    assert len(records.games) == 6
    assert len(records.stats) == 18
    assert len(records.players) == 3
    assert records.snapshots


def test_fetcher_skips_unrequested_sets() -> None:
    records = asyncio.run(
        TeamRecordsFetcher(_adapter()).fetch("team1", games=False, snapshots=False)
    )
    assert records.series == []
    assert records.games == []
    assert records.snapshots == []
    assert len(records.stats) == 18


def test_fetch_failure_propagates() -> None:
    tables = seed_team_records("team1", [Player(id="p1", name="Ace")], scrims=2)
    with pytest.raises(UpstreamFetchError) as exc:
        asyncio.run(GetTeamPerformanceUseCase(_FailingAdapter(tables)).execute("team1"))
    assert exc.value.operation == "matches:listByTeam"


def test_performance_use_case() -> None:
    perf = asyncio.run(GetTeamPerformanceUseCase(_adapter()).execute("team1"))
    assert perf.total_games == 6
    assert len(perf.objectives) == 4


def test_advanced_and_player_use_cases() -> None:
    advanced = asyncio.run(GetAdvancedStatsUseCase(_adapter()).execute("team1"))
    assert len(advanced.synergy) == 3
    lines = asyncio.run(GetPlayerStatsUseCase(_adapter()).execute("team1"))
    assert [line.name for line in lines] == ["Ace", "Bolt", "Cyan"]
    assert all(line.games == 6 for line in lines)


def test_generate_report_reports_progress() -> None:
    recorder = _Recorder()
    result = asyncio.run(
        GenerateReportUseCase(_adapter()).execute(GenerateReportRequest(team_id="team1"), recorder)
    )
    assert result.metadata["games_analyzed"] == 6
    assert result.report["meta"]["team_id"] == "team1"
    assert [p for p, _ in recorder.updates] == [10, 50, 90]


def test_generate_report_reports_error_then_raises() -> None:
    recorder = _Recorder()
    tables = seed_team_records("team1", [Player(id="p1", name="Ace")], scrims=2)
    with pytest.raises(UpstreamFetchError):
        asyncio.run(
            GenerateReportUseCase(_FailingAdapter(tables)).execute(
                GenerateReportRequest(team_id="team1"), recorder
            )
        )
    assert recorder.updates[-1] == (0, "error")
