from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List

from .config import RECENT_GAMES
from .records import Player, PlayerGameStat
from .stats import percentage, round_half_up


@dataclass(frozen=True)
class PlayerStatLine:
    player_id: str
    name: str
    position: str
    kda: str
    cs: str
    damage_share: str
    win_rate: float
    games: int


def _recent(rows: List[PlayerGameStat], limit: int) -> List[PlayerGameStat]:
    return sorted(rows, key=lambda s: s.date, reverse=True)[:limit]


def _team_damage_by_game(stats: List[PlayerGameStat]) -> Dict[str, int]:
    totals: Dict[str, int] = defaultdict(int)
    for s in stats:
        totals[s.game_id] += s.damage_dealt
    return totals


def _fmt(value: float) -> str:
    return f"{round_half_up(value, 1):.1f}"


def compute_player_stats(
    players: List[Player],
    stats: List[PlayerGameStat],
    recent: int = RECENT_GAMES,
) -> List[PlayerStatLine]:
    by_player: Dict[str, List[PlayerGameStat]] = defaultdict(list)
    for s in stats:
        by_player[s.player_id].append(s)
    team_damage = _team_damage_by_game(stats)

    lines: List[PlayerStatLine] = []
    for p in players:
        rows = _recent(by_player.get(p.id, []), recent)
        position = p.position or "Flex"
        win_rate = p.win_rate or 0.0
        if not rows:
            lines.append(
                PlayerStatLine(
                    player_id=p.id,
                    name=p.name,
                    position=position,
                    kda="0.0",
                    cs="0.0",
                    damage_share="0%",
                    win_rate=win_rate,
                    games=0,
                )
            )
            continue

        kills = sum(r.kills for r in rows)
        deaths = sum(r.deaths for r in rows)
        assists = sum(r.assists for r in rows)
        cs = sum(r.creep_score for r in rows)
        damage = sum(r.damage_dealt for r in rows)
        damage_pool = sum(team_damage.get(r.game_id, 0) for r in rows)

        lines.append(
            PlayerStatLine(
                player_id=p.id,
                name=p.name,
                position=position,
                kda=_fmt((kills + assists) / max(1, deaths)),
                cs=_fmt(cs / len(rows)),
                damage_share=f"{int(percentage(damage, damage_pool))}%",
                win_rate=win_rate,
                games=len(rows),
            )
        )
    return lines
