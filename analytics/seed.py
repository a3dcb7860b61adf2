from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from .records import Player

TABLES = (
    "users",
    "scrims",
    "scrimGames",
    "officialMatches",
    "officialGames",
    "playerGameStats",
    "playerPerformanceSnapshots",
)


def _user_doc(p: Player, team_id: str) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "_id": p.id,
        "name": p.name,
        "role": "player",
        "position": p.position,
        "teamId": team_id,
    }
    if p.win_rate is not None:
        doc["riotAccount"] = {"winRate": p.win_rate, "summonerName": p.summoner_name or p.name}
    return doc


def seed_team_records(
    team_id: str,
    players: List[Player],
    scrims: int = 10,
    rng_seed: int = 7,
    today: Optional[date] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """Build a synthetic record snapshot for one team.

    Produces ``scrims`` completed BO1 scrims, one game each, with
    objectives and participant summaries biased by the result, a stat row
    per player per game and one weekly rating per player per scrim week.
    Output uses the same table layout as an exported database snapshot.
    """
    if not players:
        raise ValueError("No players found in this team to seed data for.")

    rng = random.Random(rng_seed)
    today = today or date.today()
    tables: Dict[str, List[Dict[str, Any]]] = {name: [] for name in TABLES}
    tables["users"] = [_user_doc(p, team_id) for p in players]

    weekly: Dict[str, Dict[str, List[float]]] = {}

    for s in range(1, scrims + 1):
        day = today - timedelta(days=s)
        scrim_id = f"scrim_{team_id}_{s}"
        is_win = rng.random() > 0.4
        tables["scrims"].append(
            {
                "_id": scrim_id,
                "opponent": f"Treino Rival {s}",
                "date": day.isoformat(),
                "time": "14:00",
                "format": "BO1",
                "server": "BR",
                "status": "concluido",
                "teamId": team_id,
                "result": "W" if is_win else "L",
            }
        )

        game_id = f"{scrim_id}_g1"
        side_id = 100 if rng.random() > 0.5 else 200
        tables["scrimGames"].append(
            {
                "_id": game_id,
                "scrimId": scrim_id,
                "gameNumber": 1,
                "result": "W" if is_win else "L",
                "duration": f"{20 + rng.randrange(20)}:{rng.randrange(60):02d}",
                "side": "Blue" if side_id == 100 else "Red",
                "objectives": {
                    "firstBlood": rng.random() > (0.2 if is_win else 0.8),
                    "firstTower": rng.random() > (0.3 if is_win else 0.7),
                    "baron": rng.random() > (0.5 if is_win else 0.9),
                    "soul": rng.random() > (0.6 if is_win else 0.95),
                },
                "participants": [
                    {
                        "puuid": f"puuid_{p.id}",
                        "summonerName": f"{p.summoner_name or p.name}#BR1",
                        "championName": "",
                        "role": p.position or "",
                        "teamId": side_id,
                        "kills": 0,
                        "deaths": 0,
                        "assists": 0,
                        "totalDamageDealtToChampions": 0,
                        "goldEarned": 0,
                        "win": is_win,
                    }
                    for p in players
                ],
            }
        )

        win_bias = 1.5 if is_win else 0.7
        week = f"{day.isocalendar()[0]}-W{day.isocalendar()[1]:02d}"
        for p in players:
            tables["playerGameStats"].append(
                {
                    "_id": f"{game_id}_{p.id}",
                    "userId": p.id,
                    "gameId": game_id,
                    "gameType": "scrim",
                    "kills": int((3 + rng.random() * 7) * win_bias),
                    "deaths": int((5 + rng.random() * 5) / win_bias),
                    "assists": int((10 + rng.random() * 10) * win_bias),
                    "cs": int(150 + rng.random() * 150),
                    "damageDealt": int((15000 + rng.random() * 20000) * win_bias),
                    "goldEarned": int((10000 + rng.random() * 5000) * win_bias),
                    "teamId": team_id,
                    "date": day.isoformat(),
                }
            )
            rating = 5.0 + (2.0 if is_win else -1.0) + rng.random() * 2
            weekly.setdefault(p.id, {}).setdefault(week, []).append(rating)

    for player_id, weeks in weekly.items():
        for week, ratings in sorted(weeks.items()):
            tables["playerPerformanceSnapshots"].append(
                {
                    "_id": f"snap_{player_id}_{week}",
                    "userId": player_id,
                    "week": week,
                    "rating": round(sum(ratings) / len(ratings), 2),
                }
            )

    return tables
