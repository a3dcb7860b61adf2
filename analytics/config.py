from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple


METRICS: List[str] = [
    "kills",
    "deaths",
    "assists",
    "creepScore",
    "damageDealt",
    "goldEarned",
]

# (key, display name) in dashboard order
OBJECTIVES: List[Tuple[str, str]] = [
    ("firstBlood", "First Blood"),
    ("firstTower", "First Tower"),
    ("baron", "Baron Nashor"),
    ("dragonSoul", "Dragon Soul"),
]

MOMENTUM_OBJECTIVES: List[str] = ["firstBlood", "firstTower"]

SYNERGY_TOP_N = 5
RECENT_GAMES = 10

HISTORY_PLACEHOLDER: List[Tuple[str, float]] = [("S-1", 0.0), ("Atual", 0.0)]

DEFAULT_FUNCTION_PATHS: Dict[str, str] = {
    "completed_scrims": "scrims:listCompleted",
    "official_matches": "matches:listByTeam",
    "scrim_games": "scrims:getScrimWithGames",
    "official_games": "matches:getMatchWithGames",
    "player_game_stats": "analytics:listPlayerGameStats",
    "players": "users:listByTeam",
    "snapshots": "analytics:listPerformanceSnapshots",
}


@dataclass(frozen=True)
class CacheConfig:
    enabled: bool
    base_dir: Path


@dataclass(frozen=True)
class SourceConfig:
    convex_url: str
    auth_token: str
    data_file: str
    function_paths: Dict[str, str] = field(default_factory=dict)

    @property
    def configured(self) -> bool:
        return bool(self.data_file or self.convex_url)


def cache_config_from_env() -> CacheConfig:
    enabled = os.environ.get("ANALYTICS_CACHE", "0").lower() in {"1", "true", "yes"}
    base_dir = Path(os.environ.get("ANALYTICS_CACHE_DIR", ".cache/convex"))
    return CacheConfig(enabled=enabled, base_dir=base_dir)


def function_paths_from_env() -> Dict[str, str]:
    """Query function overrides from ``CONVEX_FUNCTION_PATHS``.

    The value is a JSON object keyed like ``DEFAULT_FUNCTION_PATHS``, e.g.
    ``{"player_game_stats": "stats:listByTeam"}``.
    """
    raw = os.environ.get("CONVEX_FUNCTION_PATHS", "").strip()
    if not raw:
        return {}
    try:
        paths = json.loads(raw)
    except ValueError as exc:
        raise ValueError(f"CONVEX_FUNCTION_PATHS is not valid JSON: {exc}") from exc
    if not isinstance(paths, dict) or not all(isinstance(v, str) for v in paths.values()):
        raise ValueError("CONVEX_FUNCTION_PATHS must be a JSON object of strings")
    unknown = sorted(set(paths) - set(DEFAULT_FUNCTION_PATHS))
    if unknown:
        raise ValueError(f"CONVEX_FUNCTION_PATHS has unknown keys: {', '.join(unknown)}")
    return paths


def source_config_from_env() -> SourceConfig:
    return SourceConfig(
        convex_url=os.environ.get("CONVEX_URL", "").rstrip("/"),
        auth_token=os.environ.get("CONVEX_AUTH_TOKEN", ""),
        data_file=os.environ.get("ANALYTICS_DATA_FILE", ""),
        function_paths=function_paths_from_env(),
    )


def log_level_from_env() -> str:
    return os.environ.get("ANALYTICS_LOG_LEVEL", "INFO").upper()
