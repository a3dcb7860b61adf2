from analytics.records import (
    GameKind,
    Side,
    game_from_doc,
    outcome_from_doc,
    player_from_doc,
    series_from_doc,
    stat_from_doc,
)


def test_outcome_prefers_boolean_flags_over_result_tag() -> None:
    assert outcome_from_doc({"won": True, "result": "L"}) is True
    assert outcome_from_doc({"win": False}) is False
    assert outcome_from_doc({"result": "W"}) is True
    assert outcome_from_doc({"result": "loss"}) is False
    assert outcome_from_doc({"result": "draw"}) is None
    assert outcome_from_doc({}) is None


def test_series_from_scrim_doc() -> None:
    doc = {
        "_id": "scrim1",
        "teamId": "team1",
        "opponent": "Rival",
        "date": "2025-03-01",
        "status": "concluido",
        "result": "W",
    }
    s = series_from_doc(doc, GameKind.SCRIM)
    assert (s.id, s.kind, s.team_id, s.opponent, s.won) == ("scrim1", GameKind.SCRIM, "team1", "Rival", True)


def test_game_from_doc_reads_objectives_and_participants() -> None:
    doc = {
        "_id": "g1",
        "scrimId": "scrim1",
        "gameNumber": 2,
        "result": "L",
        "duration": "33:12",
        "side": "red",
        "objectives": {"firstBlood": True, "soul": True},
        "participants": [
            {"summonerName": "Ace#BR1", "championName": "Ahri", "teamId": 200, "win": False},
            "junk",
        ],
    }
    g = game_from_doc(doc, GameKind.SCRIM)
    assert g.parent_id == "scrim1"
    assert g.game_number == 2
    assert g.won is False
    assert g.side is Side.RED
    assert g.objectives.first_blood is True
    assert g.objectives.dragon_soul is True
    assert g.objectives.baron is False
    assert len(g.participants) == 1
    assert g.participants[0].summoner_name == "Ace#BR1"
    assert g.participants[0].side_id == 200


def test_game_without_objectives_keeps_none() -> None:
    g = game_from_doc({"_id": "g1", "win": True}, GameKind.OFFICIAL, parent_id="m1")
    assert g.objectives is None
    assert g.parent_id == "m1"
    assert g.side is None
    assert g.won is True


def test_stat_from_doc_maps_cs_and_defaults_bad_numbers() -> None:
    row = stat_from_doc(
        {
            "userId": "p1",
            "gameId": "g1",
            "gameType": "official",
            "kills": "4",
            "deaths": None,
            "assists": "x",
            "cs": 231,
            "damageDealt": 18000,
            "goldEarned": 12000,
            "teamId": "team1",
            "date": "2025-03-01",
        }
    )
    assert row.game_type is GameKind.OFFICIAL
    assert (row.kills, row.deaths, row.assists) == (4, 0, 0)
    assert row.metric("creepScore") == 231.0
    assert row.metric("damageDealt") == 18000.0


def test_player_from_doc_reads_riot_account() -> None:
    p = player_from_doc(
        {
            "_id": "p1",
            "name": "Ace",
            "position": "Mid",
            "teamId": "team1",
            "riotAccount": {"winRate": 54.5, "summonerName": "AceMain"},
        }
    )
    assert (p.id, p.name, p.position, p.team_id) == ("p1", "Ace", "Mid", "team1")
    assert p.win_rate == 54.5
    assert p.summoner_name == "AceMain"

    bare = player_from_doc({"_id": "p2", "name": "Bolt"})
    assert bare.win_rate is None
    assert bare.team_id is None
