"""Transform analytics results to the dashboard's expected format."""

import logging
from dataclasses import asdict
from typing import Any, Dict, List

from analytics.advanced import AdvancedStats
from analytics.performance import TeamPerformance
from analytics.players import PlayerStatLine

from ...domain.value_objects.types import Position

logger = logging.getLogger(__name__)


def _to_camel_case(snake_str: str) -> str:
    """Convert snake_case to camelCase."""
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _camelize(obj: Any) -> Any:
    """Recursively camelCase dict keys; metric keys are already camelCase."""
    if isinstance(obj, dict):
        return {_to_camel_case(str(k)): _camelize(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_camelize(v) for v in obj]
    return obj


def _get_position_standard(position: str | None) -> str:
    """Standardize position names."""
    if not position:
        return Position.FLEX.value
    position_map = {
        "top": Position.TOP,
        "toplane": Position.TOP,
        "jungle": Position.JUNGLE,
        "jng": Position.JUNGLE,
        "jungler": Position.JUNGLE,
        "mid": Position.MID,
        "middle": Position.MID,
        "midlane": Position.MID,
        "adc": Position.ADC,
        "bot": Position.ADC,
        "carry": Position.ADC,
        "marksman": Position.ADC,
        "support": Position.SUPPORT,
        "sup": Position.SUPPORT,
        "supp": Position.SUPPORT,
    }
    return position_map.get(position.strip().lower(), Position.FLEX).value


def transform_performance(performance: TeamPerformance) -> Dict[str, Any]:
    """Transform the team performance summary.

    Objective entries keep the ``{name, rate}`` shape the dashboard charts
    read, with the objective key alongside.
    """
    return _camelize(asdict(performance))


def transform_advanced_stats(stats: AdvancedStats) -> Dict[str, Any]:
    """Transform correlation, distribution, momentum and synergy results."""
    return _camelize(asdict(stats))


def transform_player_stats(lines: List[PlayerStatLine]) -> List[Dict[str, Any]]:
    """Transform per-player recent form rows.

    Output rows: ``{id, name, role, kda, cs, dmg, winRate, games}``.
    """
    return [
        {
            "id": line.player_id,
            "name": line.name,
            "role": _get_position_standard(line.position),
            "kda": line.kda,
            "cs": line.cs,
            "dmg": line.damage_share,
            "winRate": line.win_rate,
            "games": line.games,
        }
        for line in lines
    ]


def transform_report_to_frontend(
    report: Dict[str, Any],
    metadata: Dict[str, Any],
) -> Dict[str, Any]:
    """Transform the combined report dictionary to dashboard format.

    Args:
        report: Report produced by ``analytics.report.build_report``
        metadata: Request metadata from the use case

    Returns:
        camelCase report with players in the recent-form row shape
    """
    logger.info("Transforming report for team %s", metadata.get("team_id"))
    players = [
        PlayerStatLine(**row) for row in report.get("players") or []
    ]
    return {
        "reportInfo": _camelize({**(report.get("meta") or {}), **metadata}),
        "performance": _camelize(report.get("performance") or {}),
        "advanced": _camelize(report.get("advanced") or {}),
        "players": transform_player_stats(players),
    }
