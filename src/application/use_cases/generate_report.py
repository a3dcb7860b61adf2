"""Use case for generating the full team analytics report."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Any, Dict

from analytics.report import build_report

from ..ports.progress import ProgressCallbackPort
from ..ports.records_source import TeamRecordsPort
from ...domain.value_objects.types import TeamId
from .fetch_records import TeamRecordsFetcher

# Thread pool for the aggregation step
_executor = ThreadPoolExecutor(max_workers=2)


@dataclass
class GenerateReportRequest:
    """Request to generate a report."""

    team_id: TeamId


@dataclass
class GenerateReportResult:
    """Result of report generation."""

    report: Dict[str, Any]
    metadata: Dict[str, Any]


class GenerateReportUseCase:
    """Use case for generating the combined analytics report.

    This orchestrates the process of:
    1. Fetching the team's entity sets from the record store
    2. Running every aggregation over that snapshot
    3. Packaging the report with request metadata
    """

    def __init__(self, records_source: TeamRecordsPort):
        self._fetcher = TeamRecordsFetcher(records_source)

    async def execute(
        self,
        request: GenerateReportRequest,
        progress_callback: ProgressCallbackPort | None = None,
    ) -> GenerateReportResult:
        """Execute the report generation use case.

        Fetch failures are reported to the progress callback and then
        re-raised unchanged.

        Args:
            request: Report generation request
            progress_callback: Optional callback for progress updates

        Returns:
            Report generation result
        """
        loop = asyncio.get_event_loop()

        try:
            if progress_callback:
                await progress_callback.report_progress(
                    10, "Fetching team records...", "processing"
                )

            records = await self._fetcher.fetch(request.team_id)

            if progress_callback:
                await progress_callback.report_progress(
                    50,
                    f"Aggregating {len(records.games)} games and {len(records.stats)} stat rows...",
                    "processing",
                )

            report = await loop.run_in_executor(_executor, partial(build_report, records))

            if progress_callback:
                await progress_callback.report_progress(
                    90, "Finalizing report...", "processing"
                )

            metadata = {
                "team_id": request.team_id,
                "games_analyzed": len(records.games),
                "series_analyzed": len(records.series),
            }
            return GenerateReportResult(report=report, metadata=metadata)

        except Exception as e:
            if progress_callback:
                await progress_callback.report_progress(
                    0, f"Error: {str(e)}", "error"
                )
            raise
