"""REST API routes for team analytics."""

import logging
from typing import Any, Awaitable, Callable, Dict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from analytics.errors import UpstreamFetchError

from ..dependencies import get_records_source
from ..transformers.analytics_transformer import (
    transform_advanced_stats,
    transform_performance,
    transform_player_stats,
    transform_report_to_frontend,
)
from ...application.ports.records_source import TeamRecordsPort
from ...application.use_cases.generate_report import (
    GenerateReportRequest,
    GenerateReportUseCase,
)
from ...application.use_cases.get_advanced_stats import GetAdvancedStatsUseCase
from ...application.use_cases.get_player_stats import GetPlayerStatsUseCase
from ...application.use_cases.get_team_performance import GetTeamPerformanceUseCase
from ...domain.value_objects.types import TeamId

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analytics"])


class ErrorResponse(BaseModel):
    """Error response model."""

    code: str
    message: str
    details: dict = {}


def _error(status_code: int, code: str, message: str, details: Dict[str, Any]) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"error": ErrorResponse(code=code, message=message, details=details).model_dump()},
    )


async def _respond(team_id: str, run: Callable[[], Awaitable[Any]]) -> Any:
    """Run a use case and map its failures to HTTP errors."""
    if not team_id.strip():
        raise _error(400, "INVALID_REQUEST", "team_id must not be blank", {"teamId": team_id})
    try:
        return await run()
    except HTTPException:
        raise
    except UpstreamFetchError as e:
        logger.error("Upstream fetch failed for team %s: %s", team_id, e)
        raise _error(
            502,
            "UPSTREAM_FETCH_FAILED",
            str(e),
            {"teamId": team_id, "operation": e.operation},
        )
    except Exception as e:
        logger.exception("Analytics failed for team %s", team_id)
        raise _error(500, "INTERNAL_ERROR", f"Error computing analytics: {str(e)}", {})


@router.get("/teams/{team_id}/performance")
async def get_team_performance(
    team_id: str,
    records_source: TeamRecordsPort = Depends(get_records_source),
):
    """Get the team performance summary.

    Returns total games, wins, win rate, average game duration,
    objective control rates and the weekly form history.
    """
    use_case = GetTeamPerformanceUseCase(records_source)

    async def run():
        return transform_performance(await use_case.execute(TeamId(team_id)))

    return await _respond(team_id, run)


@router.get("/teams/{team_id}/advanced-stats")
async def get_advanced_stats(
    team_id: str,
    records_source: TeamRecordsPort = Depends(get_records_source),
):
    """Get correlation, distribution, momentum and synergy statistics."""
    use_case = GetAdvancedStatsUseCase(records_source)

    async def run():
        return transform_advanced_stats(await use_case.execute(TeamId(team_id)))

    return await _respond(team_id, run)


@router.get("/teams/{team_id}/player-stats")
async def get_player_stats(
    team_id: str,
    records_source: TeamRecordsPort = Depends(get_records_source),
):
    """Get each player's form over their most recent games."""
    use_case = GetPlayerStatsUseCase(records_source)

    async def run():
        return transform_player_stats(await use_case.execute(TeamId(team_id)))

    return await _respond(team_id, run)


@router.get("/teams/{team_id}/report")
async def get_team_report(
    team_id: str,
    records_source: TeamRecordsPort = Depends(get_records_source),
):
    """Get every analytics section for a team in one response."""
    use_case = GenerateReportUseCase(records_source)

    async def run():
        result = await use_case.execute(GenerateReportRequest(team_id=TeamId(team_id)))
        return transform_report_to_frontend(result.report, result.metadata)

    return await _respond(team_id, run)
