from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .advanced import compute_advanced_stats
from .performance import compute_team_performance
from .players import compute_player_stats
from .records import TeamRecords


def build_report(records: TeamRecords, generated_at: Optional[str] = None) -> Dict[str, Any]:
    performance = compute_team_performance(records.series, records.games, records.snapshots)
    advanced = compute_advanced_stats(records.stats, records.games, records.players)
    players = compute_player_stats(records.players, records.stats)

    return {
        "meta": {
            "team_id": records.team_id,
            "generated_at": generated_at
            or datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
            "series": len(records.series),
            "games": len(records.games),
            "stat_rows": len(records.stats),
            "players": len(records.players),
        },
        "performance": asdict(performance),
        "advanced": asdict(advanced),
        "players": [asdict(p) for p in players],
    }
