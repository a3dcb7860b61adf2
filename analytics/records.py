from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class GameKind(str, Enum):
    SCRIM = "scrim"
    OFFICIAL = "official"


class Side(str, Enum):
    BLUE = "Blue"
    RED = "Red"


@dataclass(frozen=True)
class Objectives:
    first_blood: bool = False
    first_tower: bool = False
    baron: bool = False
    dragon_soul: bool = False

    def achieved(self, key: str) -> bool:
        return bool(getattr(self, _OBJECTIVE_ATTRS[key]))


_OBJECTIVE_ATTRS: Dict[str, str] = {
    "firstBlood": "first_blood",
    "firstTower": "first_tower",
    "baron": "baron",
    "dragonSoul": "dragon_soul",
}


@dataclass(frozen=True)
class Participant:
    summoner_name: str
    champion: Optional[str] = None
    role: Optional[str] = None
    side_id: Optional[int] = None
    win: Optional[bool] = None


@dataclass
class SeriesRecord:
    id: str
    kind: GameKind
    team_id: str
    opponent: str
    date: str
    won: Optional[bool]


@dataclass
class GameRecord:
    id: str
    parent_id: str
    kind: GameKind
    game_number: int
    won: Optional[bool]
    duration: str
    side: Optional[Side] = None
    objectives: Optional[Objectives] = None
    participants: List[Participant] = field(default_factory=list)


@dataclass
class PlayerGameStat:
    player_id: str
    game_id: str
    game_type: GameKind
    kills: int
    deaths: int
    assists: int
    creep_score: int
    damage_dealt: int
    gold_earned: int
    team_id: str
    date: str

    def metric(self, name: str) -> float:
        return float(getattr(self, _METRIC_ATTRS[name]))


_METRIC_ATTRS: Dict[str, str] = {
    "kills": "kills",
    "deaths": "deaths",
    "assists": "assists",
    "creepScore": "creep_score",
    "damageDealt": "damage_dealt",
    "goldEarned": "gold_earned",
}


@dataclass(frozen=True)
class PerformanceSnapshot:
    player_id: str
    week: str
    rating: float


@dataclass
class Player:
    id: str
    name: str
    position: Optional[str] = None
    team_id: Optional[str] = None
    win_rate: Optional[float] = None
    summoner_name: Optional[str] = None


def _safe_int(value: Any) -> int:
    try:
        return int(value or 0)
    except Exception:
        return 0


def _safe_float(value: Any) -> float:
    try:
        return float(value or 0)
    except Exception:
        return 0.0


def _doc_id(doc: Dict[str, Any]) -> str:
    return str(doc.get("_id") or doc.get("id") or "")


def outcome_from_doc(doc: Dict[str, Any]) -> Optional[bool]:
    """Resolve a win/loss flag from the variants stored on series and games.

    Boolean ``won``/``win`` fields win over the ``"W"``/``"L"`` result tag.
    Anything else is an unknown outcome.
    """
    for key in ("won", "win"):
        val = doc.get(key)
        if isinstance(val, bool):
            return val
    result = doc.get("result")
    if isinstance(result, str):
        tag = result.strip().upper()
        if tag in {"W", "WIN"}:
            return True
        if tag in {"L", "LOSS"}:
            return False
    return None


def _objectives_from_doc(raw: Any) -> Optional[Objectives]:
    if not isinstance(raw, dict):
        return None
    return Objectives(
        first_blood=bool(raw.get("firstBlood")),
        first_tower=bool(raw.get("firstTower")),
        baron=bool(raw.get("baron")),
        dragon_soul=bool(raw.get("soul", raw.get("dragonSoul"))),
    )


def _side_from_doc(raw: Any) -> Optional[Side]:
    if not raw:
        return None
    try:
        return Side(str(raw).capitalize())
    except ValueError:
        return None


def _participants_from_doc(raw: Any) -> List[Participant]:
    out: List[Participant] = []
    for p in raw or []:
        if not isinstance(p, dict):
            continue
        side_id = p.get("teamId")
        win = p.get("win")
        out.append(
            Participant(
                summoner_name=str(p.get("summonerName") or ""),
                champion=p.get("championName"),
                role=p.get("role"),
                side_id=_safe_int(side_id) if side_id is not None else None,
                win=win if isinstance(win, bool) else None,
            )
        )
    return out


def series_from_doc(doc: Dict[str, Any], kind: GameKind) -> SeriesRecord:
    return SeriesRecord(
        id=_doc_id(doc),
        kind=kind,
        team_id=str(doc.get("teamId") or ""),
        opponent=str(doc.get("opponent") or ""),
        date=str(doc.get("date") or ""),
        won=outcome_from_doc(doc),
    )


def game_from_doc(doc: Dict[str, Any], kind: GameKind, parent_id: str = "") -> GameRecord:
    parent = doc.get("scrimId") if kind is GameKind.SCRIM else doc.get("matchId")
    return GameRecord(
        id=_doc_id(doc),
        parent_id=str(parent or parent_id),
        kind=kind,
        game_number=_safe_int(doc.get("gameNumber")),
        won=outcome_from_doc(doc),
        duration=str(doc.get("duration") or ""),
        side=_side_from_doc(doc.get("side")),
        objectives=_objectives_from_doc(doc.get("objectives")),
        participants=_participants_from_doc(doc.get("participants")),
    )


def stat_from_doc(doc: Dict[str, Any]) -> PlayerGameStat:
    game_type = GameKind.OFFICIAL if doc.get("gameType") == "official" else GameKind.SCRIM
    return PlayerGameStat(
        player_id=str(doc.get("userId") or doc.get("playerId") or ""),
        game_id=str(doc.get("gameId") or ""),
        game_type=game_type,
        kills=_safe_int(doc.get("kills")),
        deaths=_safe_int(doc.get("deaths")),
        assists=_safe_int(doc.get("assists")),
        creep_score=_safe_int(doc.get("cs", doc.get("creepScore"))),
        damage_dealt=_safe_int(doc.get("damageDealt")),
        gold_earned=_safe_int(doc.get("goldEarned")),
        team_id=str(doc.get("teamId") or ""),
        date=str(doc.get("date") or ""),
    )


def snapshot_from_doc(doc: Dict[str, Any]) -> PerformanceSnapshot:
    return PerformanceSnapshot(
        player_id=str(doc.get("userId") or doc.get("playerId") or ""),
        week=str(doc.get("week") or ""),
        rating=_safe_float(doc.get("rating")),
    )


def player_from_doc(doc: Dict[str, Any]) -> Player:
    account = doc.get("riotAccount") or {}
    win_rate = account.get("winRate") if isinstance(account, dict) else None
    return Player(
        id=_doc_id(doc),
        name=str(doc.get("name") or ""),
        position=doc.get("position"),
        team_id=str(doc.get("teamId") or "") or None,
        win_rate=_safe_float(win_rate) if win_rate is not None else None,
        summoner_name=account.get("summonerName") if isinstance(account, dict) else None,
    )


@dataclass
class TeamRecords:
    team_id: str
    series: List[SeriesRecord] = field(default_factory=list)
    games: List[GameRecord] = field(default_factory=list)
    stats: List[PlayerGameStat] = field(default_factory=list)
    players: List[Player] = field(default_factory=list)
    snapshots: List[PerformanceSnapshot] = field(default_factory=list)
