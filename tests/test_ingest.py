import json
from datetime import date

import pytest

from analytics.errors import UpstreamFetchError
from analytics.ingest import ConvexStore, SnapshotStore, collect_team_records, load_snapshot
from analytics.records import GameKind, Player
from analytics.report import build_report
from analytics.seed import TABLES, seed_team_records


def _tables():
    return {
        "users": [
            {"_id": "p1", "name": "Ace", "role": "player", "teamId": "team1", "position": "Mid"},
            {"_id": "p2", "name": "Bolt", "teamId": "team1", "position": "ADC"},
            {"_id": "c1", "name": "Coach", "role": "coach", "teamId": "team1"},
            {"_id": "p3", "name": "Other", "role": "player", "teamId": "team2"},
        ],
        "scrims": [
            {"_id": "s1", "teamId": "team1", "status": "concluido", "result": "W", "date": "2025-01-01"},
            {"_id": "s2", "teamId": "team1", "status": "agendado", "date": "2025-01-02"},
            {"_id": "s3", "teamId": "team2", "status": "concluido", "result": "L"},
        ],
        "scrimGames": [
            {
                "_id": "g1",
                "scrimId": "s1",
                "gameNumber": 1,
                "result": "W",
                "duration": "30:00",
                "objectives": {"firstBlood": True},
                "participants": [{"summonerName": "Ace#BR1"}, {"summonerName": "Bolt#BR1"}],
            },
            {"_id": "g2", "scrimId": "s2", "gameNumber": 1, "result": "L", "duration": "25:00"},
        ],
        "officialMatches": [{"_id": "m1", "teamId": "team1", "win": False, "date": "2025-01-05"}],
        "officialGames": [{"_id": "og1", "matchId": "m1", "win": False, "duration": "35:10"}],
        "playerGameStats": [
            {"userId": "p1", "gameId": "g1", "teamId": "team1", "kills": 5, "date": "2025-01-01"},
            {"userId": "p3", "gameId": "g9", "teamId": "team2", "kills": 1},
        ],
        "playerPerformanceSnapshots": [
            {"userId": "p1", "week": "2025-W01", "rating": 7.5},
            {"userId": "p3", "week": "2025-W01", "rating": 4.0},
        ],
    }


def test_snapshot_store_filters_by_team_and_status() -> None:
    store = SnapshotStore(_tables())
    scrims = store.list_completed_scrims("team1")
    assert [s.id for s in scrims] == ["s1"]
    assert [m.id for m in store.list_official_matches("team1")] == ["m1"]
    assert [p.id for p in store.list_players_on_team("team1")] == ["p1", "p2"]
    assert [r.player_id for r in store.list_player_game_stats("team1")] == ["p1"]
    assert [s.rating for s in store.list_performance_snapshots("p1")] == [7.5]


def test_snapshot_store_child_games_per_kind() -> None:
    store = SnapshotStore(_tables())
    (scrim,) = store.list_completed_scrims("team1")
    (match,) = store.list_official_matches("team1")
    assert [g.id for g in store.list_child_games(scrim)] == ["g1"]
    (official,) = store.list_child_games(match)
    assert official.id == "og1"
    assert official.kind is GameKind.OFFICIAL
    assert official.parent_id == "m1"


def test_collect_team_records_joins_entity_sets() -> None:
    records = collect_team_records(SnapshotStore(_tables()), "team1")
    assert records.team_id == "team1"
    assert len(records.series) == 2
    assert {g.id for g in records.games} == {"g1", "og1"}
    assert len(records.stats) == 1
    assert len(records.players) == 2
    assert len(records.snapshots) == 1


def test_load_snapshot_reads_tables(tmp_path) -> None:
    path = tmp_path / "tables.json"
    path.write_text(json.dumps(_tables()), encoding="utf-8")
    assert load_snapshot(str(path))["users"][0]["name"] == "Ace"


def test_load_snapshot_rejects_unreadable_file(tmp_path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(UpstreamFetchError):
        load_snapshot(str(bad))
    with pytest.raises(UpstreamFetchError):
        load_snapshot(str(tmp_path / "missing.json"))


class _FakeClient:
    def __init__(self, values):
        self.values = values
        self.calls = []

    def query(self, path, args=None):
        self.calls.append((path, args))
        return self.values.get(path)


def test_convex_store_queries_function_paths() -> None:
    client = _FakeClient(
        {
            "scrims:listCompleted": [
                {"_id": "s1", "teamId": "team1", "status": "concluido", "result": "W"},
                {"_id": "s2", "teamId": "team1", "status": "agendado"},
            ],
            "scrims:getScrimWithGames": {"scrim": {}, "games": [{"_id": "g1", "result": "W"}]},
            "users:listByTeam": [
                {"_id": "p1", "name": "Ace", "role": "player"},
                {"_id": "c1", "name": "Coach", "role": "coach"},
            ],
        }
    )
    store = ConvexStore(client)

    scrims = store.list_completed_scrims("team1")
    assert [s.id for s in scrims] == ["s1"]
    (game,) = store.list_child_games(scrims[0])
    assert (game.id, game.parent_id, game.won) == ("g1", "s1", True)
    assert [p.name for p in store.list_players_on_team("team1")] == ["Ace"]
    assert store.list_official_matches("team1") == []
    assert client.calls[0] == ("scrims:listCompleted", {"teamId": "team1"})
    assert client.calls[1] == ("scrims:getScrimWithGames", {"id": "s1"})
    assert client.calls[2] == ("users:listByTeam", {"teamId": "team1"})


def test_convex_store_rejects_non_list_value() -> None:
    store = ConvexStore(_FakeClient({"analytics:listPlayerGameStats": {"rows": []}}))
    with pytest.raises(UpstreamFetchError) as exc:
        store.list_player_game_stats("team1")
    assert exc.value.operation == "analytics:listPlayerGameStats"


def test_convex_store_honours_custom_paths() -> None:
    client = _FakeClient({"custom:stats": []})
    store = ConvexStore(client, {"player_game_stats": "custom:stats"})
    assert store.list_player_game_stats("team1") == []
    assert client.calls == [("custom:stats", {"teamId": "team1"})]


def _roster():
    return [
        Player(id=f"p{i}", name=f"{pos}Main", position=pos, win_rate=50.0)
        for i, pos in enumerate(["Top", "Jungle", "Mid", "ADC", "Support"])
    ]


def test_seed_is_deterministic_for_a_fixed_seed() -> None:
    today = date(2025, 6, 30)
    first = seed_team_records("team1", _roster(), rng_seed=3, today=today)
    second = seed_team_records("team1", _roster(), rng_seed=3, today=today)
    assert first == second
    assert set(first) == set(TABLES)
    assert len(first["scrims"]) == 10
    assert len(first["scrimGames"]) == 10
    assert len(first["playerGameStats"]) == 50


def test_seed_requires_players() -> None:
    with pytest.raises(ValueError, match="No players found"):
        seed_team_records("team1", [])


def test_seeded_snapshot_produces_full_report() -> None:
    tables = seed_team_records("team1", _roster(), today=date(2025, 6, 30))
    records = collect_team_records(SnapshotStore(tables), "team1")
    report = build_report(records, generated_at="2025-06-30T00:00:00+00:00")

    perf = report["performance"]
    assert perf["total_games"] == 10
    assert 0 <= perf["win_rate"] <= 100
    assert perf["performance_history"][0]["week"].startswith("2025-W")
    assert len(report["advanced"]["synergy"]) == 5
    assert all(p["games"] == 10 for p in report["players"])
    assert report["meta"]["generated_at"] == "2025-06-30T00:00:00+00:00"
