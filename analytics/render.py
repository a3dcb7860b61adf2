from __future__ import annotations

from typing import Any, Dict


def render_text(report: Dict[str, Any]) -> str:
    meta = report.get("meta", {})
    perf = report.get("performance", {})
    advanced = report.get("advanced", {})
    players = report.get("players", [])

    lines = []
    lines.append("TEAM ANALYTICS")
    lines.append(f"Team: {meta.get('team_id')} | Generated: {meta.get('generated_at')}")
    lines.append("")

    lines.append("Performance")
    lines.append(
        f"Games: {perf.get('total_games', 0)} | Wins: {perf.get('wins', 0)} | "
        f"Win rate: {perf.get('win_rate', 0)}% | Avg duration: {perf.get('average_duration', '00:00')}"
    )
    for obj in perf.get("objectives") or []:
        lines.append(f"- {obj.get('name')}: {obj.get('rate', 0)}%")
    history = perf.get("performance_history") or []
    if history:
        lines.append(
            "Form: " + ", ".join(f"{h.get('week')}={h.get('rating', 0):.1f}" for h in history)
        )
    lines.append("")

    lines.append("Win correlation")
    for metric, r in (advanced.get("correlations") or {}).items():
        lines.append(f"- {metric}: {r:+.2f}")
    lines.append(f"Gold efficiency (gold vs damage): {advanced.get('efficiency', 0):.2f}")
    for key, m in (advanced.get("momentum") or {}).items():
        lines.append(f"Momentum {key}: {m.get('win_rate', 0):.1f}% over {m.get('games', 0)} games")
    lines.append("")

    synergy = advanced.get("synergy") or []
    if synergy:
        lines.append("Top duos")
        for s in synergy:
            lines.append(
                f"- {s.get('player_a')} + {s.get('player_b')}: "
                f"{s.get('win_rate', 0):.1f}% in {s.get('games', 0)} games"
            )
        lines.append("")

    if players:
        lines.append("Players (recent games)")
        for p in players:
            lines.append(
                f"- {p.get('name')} ({p.get('position')}): KDA {p.get('kda')} | "
                f"CS {p.get('cs')} | DMG {p.get('damage_share')} | WR {p.get('win_rate', 0)}%"
            )

    return "\n".join(lines)
