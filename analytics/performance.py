from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .config import HISTORY_PLACEHOLDER, OBJECTIVES
from .records import GameRecord, PerformanceSnapshot, SeriesRecord
from .stats import percentage, round_half_up


@dataclass(frozen=True)
class ObjectiveRate:
    key: str
    name: str
    rate: int


@dataclass(frozen=True)
class WeeklyRating:
    week: str
    rating: float


@dataclass
class TeamPerformance:
    total_games: int
    wins: int
    win_rate: int
    average_duration: str
    performance_history: List[WeeklyRating] = field(default_factory=list)
    objectives: List[ObjectiveRate] = field(default_factory=list)


def parse_duration(text: str) -> Optional[int]:
    """Return the seconds of a ``mm:ss`` string, or None if it is not one."""
    if not text:
        return None
    parts = text.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        minutes = int(parts[0])
        seconds = int(parts[1])
    except ValueError:
        return None
    if minutes < 0 or seconds < 0:
        return None
    return minutes * 60 + seconds


def format_duration(seconds: float) -> str:
    total = max(0.0, seconds)
    minutes = int(total // 60)
    secs = int(total % 60)
    return f"{minutes:02d}:{secs:02d}"


def average_duration(games: Iterable[GameRecord]) -> str:
    parsed = [s for s in (parse_duration(g.duration) for g in games) if s is not None]
    if not parsed:
        return format_duration(0)
    return format_duration(sum(parsed) / len(parsed))


def objective_rates(games: Iterable[GameRecord]) -> List[ObjectiveRate]:
    with_objectives = [g.objectives for g in games if g.objectives is not None]
    denominator = len(with_objectives) or 1
    rates: List[ObjectiveRate] = []
    for key, name in OBJECTIVES:
        achieved = sum(1 for o in with_objectives if o.achieved(key))
        rates.append(ObjectiveRate(key=key, name=name, rate=int(percentage(achieved, denominator))))
    return rates


def performance_history(snapshots: Iterable[PerformanceSnapshot]) -> List[WeeklyRating]:
    by_week: Dict[str, List[float]] = defaultdict(list)
    for s in snapshots:
        by_week[s.week].append(s.rating)
    if not by_week:
        return [WeeklyRating(week=w, rating=r) for w, r in HISTORY_PLACEHOLDER]
    history: List[WeeklyRating] = []
    for week in sorted(by_week):
        ratings = by_week[week]
        history.append(WeeklyRating(week=week, rating=round_half_up(sum(ratings) / len(ratings), 1)))
    return history


def compute_team_performance(
    series: List[SeriesRecord],
    games: List[GameRecord],
    snapshots: List[PerformanceSnapshot],
) -> TeamPerformance:
    total_games = len(series)
    wins = sum(1 for s in series if s.won is True)
    return TeamPerformance(
        total_games=total_games,
        wins=wins,
        win_rate=int(percentage(wins, total_games)),
        average_duration=average_duration(games),
        performance_history=performance_history(snapshots),
        objectives=objective_rates(games),
    )
