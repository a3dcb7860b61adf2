from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, List

from .config import SYNERGY_TOP_N
from .records import GameKind, GameRecord, Player
from .stats import percentage


@dataclass(frozen=True)
class SynergyPair:
    player_a: str
    player_b: str
    games: int
    wins: int
    win_rate: float


def names_match(player_name: str, summoner_name: str) -> bool:
    """Substring match of a roster name against a participant's summoner name.

    Tolerates Riot tag suffixes ("Faker#KR1") but also pairs "Ace" with
    "Grace"; exact matching would need a stable player id on participants.
    """
    if not player_name:
        return False
    return player_name in summoner_name


def _played_in(player: Player, game: GameRecord) -> bool:
    return any(names_match(player.name, p.summoner_name) for p in game.participants)


def compute_synergy(
    players: List[Player],
    games: Iterable[GameRecord],
    top_n: int = SYNERGY_TOP_N,
) -> List[SynergyPair]:
    scrim_games = [g for g in games if g.kind is GameKind.SCRIM and g.participants]

    pairs: List[SynergyPair] = []
    for a, b in combinations(players, 2):
        shared = [g for g in scrim_games if _played_in(a, g) and _played_in(b, g)]
        if not shared:
            continue
        wins = sum(1 for g in shared if g.won is True)
        pairs.append(
            SynergyPair(
                player_a=a.name,
                player_b=b.name,
                games=len(shared),
                wins=wins,
                win_rate=percentage(wins, len(shared), 1),
            )
        )

    pairs.sort(key=lambda p: p.win_rate, reverse=True)
    return pairs[:top_n]
