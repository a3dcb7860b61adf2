from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .config import METRICS, MOMENTUM_OBJECTIVES
from .records import GameRecord, Player, PlayerGameStat
from .stats import (
    FiveNumberSummary,
    five_number_summary,
    pearson_correlation,
    percentage,
    round_half_up,
)
from .synergy import SynergyPair, compute_synergy


@dataclass(frozen=True)
class MetricBoxplot:
    wins: FiveNumberSummary
    losses: FiveNumberSummary


@dataclass(frozen=True)
class MomentumStat:
    objective: str
    games: int
    win_rate: float


@dataclass
class AdvancedStats:
    correlations: Dict[str, float] = field(default_factory=dict)
    correlation_matrix: Dict[str, Dict[str, float]] = field(default_factory=dict)
    boxplots: Dict[str, MetricBoxplot] = field(default_factory=dict)
    momentum: Dict[str, MomentumStat] = field(default_factory=dict)
    efficiency: float = 0.0
    synergy: List[SynergyPair] = field(default_factory=list)


def build_outcome_lookup(games: Iterable[GameRecord]) -> Dict[str, int]:
    return {g.id: 1 if g.won is True else 0 for g in games if g.id}


def _outcomes(stats: List[PlayerGameStat], lookup: Dict[str, int]) -> List[int]:
    # unknown game ids count as losses
    return [lookup.get(s.game_id, 0) for s in stats]


def _column(stats: List[PlayerGameStat], metric: str) -> List[float]:
    return [s.metric(metric) for s in stats]


def _corr(x: List[float], y: List[float]) -> float:
    return round_half_up(pearson_correlation(x, y), 2)


def compute_correlations(stats: List[PlayerGameStat], outcomes: List[int]) -> Dict[str, float]:
    y = [float(o) for o in outcomes]
    return {m: _corr(_column(stats, m), y) for m in METRICS}


def compute_correlation_matrix(stats: List[PlayerGameStat]) -> Dict[str, Dict[str, float]]:
    columns = {m: _column(stats, m) for m in METRICS}
    return {row: {col: _corr(columns[row], columns[col]) for col in METRICS} for row in METRICS}


def compute_boxplots(stats: List[PlayerGameStat], outcomes: List[int]) -> Dict[str, MetricBoxplot]:
    won = [s for s, o in zip(stats, outcomes) if o == 1]
    lost = [s for s, o in zip(stats, outcomes) if o == 0]
    return {
        m: MetricBoxplot(
            wins=five_number_summary(_column(won, m)),
            losses=five_number_summary(_column(lost, m)),
        )
        for m in METRICS
    }


def compute_momentum(games: Iterable[GameRecord]) -> Dict[str, MomentumStat]:
    with_objectives = [g for g in games if g.objectives is not None]
    momentum: Dict[str, MomentumStat] = {}
    for key in MOMENTUM_OBJECTIVES:
        secured = [g for g in with_objectives if g.objectives.achieved(key)]
        wins = sum(1 for g in secured if g.won is True)
        momentum[key] = MomentumStat(
            objective=key,
            games=len(secured),
            win_rate=percentage(wins, len(secured), 1),
        )
    return momentum


def compute_efficiency(stats: List[PlayerGameStat]) -> float:
    return _corr(_column(stats, "goldEarned"), _column(stats, "damageDealt"))


def compute_advanced_stats(
    stats: List[PlayerGameStat],
    games: List[GameRecord],
    players: List[Player],
) -> AdvancedStats:
    lookup = build_outcome_lookup(games)
    outcomes = _outcomes(stats, lookup)
    return AdvancedStats(
        correlations=compute_correlations(stats, outcomes),
        correlation_matrix=compute_correlation_matrix(stats),
        boxplots=compute_boxplots(stats, outcomes),
        momentum=compute_momentum(games),
        efficiency=compute_efficiency(stats),
        synergy=compute_synergy(players, games),
    )
