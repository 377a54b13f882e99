import pytest

from korfstats.migrations import normalize_match_record, normalize_roster, normalize_team_record
from korfstats.models import CANONICAL_SHOT_TYPES, ShotStat, ShotType, shot_type_label


def _legacy_match():
    return {
        "_id": "m1",
        "team_id": "t1",
        "team_name": "Korf A1",
        "opponent": "Alpha",
        "date": "2023-11-04T14:30:00.000Z",
        "players": [
            {
                "id": 7,
                "name": "Bob",
                "isStarter": False,
                "stats": {
                    "distance": {"goals": "2", "attempts": 3},
                    "close": {"goals": None, "attempts": "x"},
                },
            },
            {"id": None, "name": "ghost", "isStarter": True, "stats": {}},
        ],
        "score": 2,
        "opponent_score": 1,
        "opponent_goals": [{"type": "penalty", "time": "2023-11-04T14:50:00.000Z", "concededBy": "Bob"}],
    }


def test_legacy_match_normalizes_ids_and_missing_fields():
    match = normalize_match_record(_legacy_match())

    assert match.id == "m1"
    assert match.team_id == "t1"
    assert match.finished is True
    assert match.shareable is False
    assert match.goals == ()
    assert [p.id for p in match.players] == ["7"]

    stats = match.players[0].stats
    assert set(stats) == set(CANONICAL_SHOT_TYPES)
    assert stats[ShotType.DISTANCE] == ShotStat(2, 3)
    assert stats[ShotType.CLOSE] == ShotStat(0, 0)
    assert stats[ShotType.OUTSTART] == ShotStat(0, 0)

    assert match.opponent_goals[0].conceded_by == "Bob"


def test_explicit_unfinished_is_kept_and_camel_case_is_accepted():
    match = normalize_match_record(
        {
            "id": "m2",
            "teamId": "t1",
            "teamName": "Korf A1",
            "opponent": "Beta",
            "date": "2024-01-01",
            "players": [],
            "score": 0,
            "opponentScore": 0,
            "opponentGoals": [],
            "finished": False,
            "goals": [{"playerId": 3.0, "shotType": None, "isOwn": True}],
        }
    )
    assert match.finished is False
    assert match.team_id == "t1"
    assert match.goals[0].player_id == "3"
    assert match.goals[0].player_name == "Onbekend"
    assert match.goals[0].shot_type == "other"


def test_non_object_records_raise_value_error():
    with pytest.raises(ValueError):
        normalize_match_record("not a match")


def test_non_object_list_entries_are_dropped():
    match = normalize_match_record(
        {
            "_id": "m1",
            "players": [None, "nope", {"id": 1, "name": "Anna", "stats": {"close": {"goals": 2, "attempts": 3}}}],
            "goals": [None, {"playerId": 1, "shotType": "close", "isOwn": True}],
            "opponent_goals": [7, {"type": "penalty", "time": "", "concededBy": "Anna"}],
            "score": 2,
            "opponent_score": 1,
        }
    )
    assert [p.id for p in match.players] == ["1"]
    assert [g.player_id for g in match.goals] == ["1"]
    assert [g.type for g in match.opponent_goals] == ["penalty"]
    assert normalize_roster([None, {"id": 2, "name": "Bram"}])[0].id == "2"


def test_team_record_normalization():
    team = normalize_team_record(
        {"_id": "t1", "team_name": "Korf A1", "players": [{"id": 1, "name": "Anna"}, {"name": "no id"}], "_creationTime": 1700000000000.5}
    )
    assert team.name == "Korf A1"
    assert [p.id for p in team.players] == ["1"]
    assert team.creation_time == 1700000000000.5


def test_roster_keeps_duplicate_names():
    roster = normalize_roster([{"id": "a", "name": "Sam"}, {"id": "b", "name": "Sam"}])
    assert [p.id for p in roster] == ["a", "b"]


def test_shot_type_parse_and_labels():
    assert ShotType.parse("Distance") is ShotType.DISTANCE
    assert ShotType.parse("ShotType.PENALTY") is ShotType.PENALTY
    assert ShotType.OUTSTART.short == "US"
    assert shot_type_label("freeball") == "Vrije bal"
    assert shot_type_label("lob") == "lob"
    with pytest.raises(ValueError):
        ShotType.parse("lob")
