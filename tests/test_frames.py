import pandas as pd

from korfstats.frames import MATCH_TABLE, classify_result, match_frame, player_shot_frame
from korfstats.migrations import normalize_matches


def _matches():
    return normalize_matches([
        {
            "_id": "m1",
            "opponent": "Alpha",
            "date": "2024-03-01T19:00:00Z",
            "players": [{"id": 7, "name": "Anna", "stats": {"distance": {"goals": 2, "attempts": 5}}}],
            "score": 4,
            "opponent_score": 4,
        },
        {"_id": "m2", "opponent": "Beta", "date": "not a date", "players": [], "score": 1, "opponent_score": 3},
    ])


def test_classify_result():
    assert classify_result(5, 3) == "W"
    assert classify_result(3, 3) == "D"
    assert classify_result(2, 3) == "V"


def test_match_frame_keeps_order_and_parses_dates_as_utc():
    df = match_frame(_matches())

    assert df["match_id"].tolist() == ["m1", "m2"]
    assert df["result"].tolist() == ["D", "V"]
    assert df["kickoff"].iloc[0] == pd.Timestamp("2024-03-01T19:00:00Z")
    assert pd.isna(df["kickoff"].iloc[1])


def test_empty_match_frame_has_contract_columns():
    df = match_frame([])
    assert df.empty
    assert list(df.columns) == list(MATCH_TABLE.columns)


def test_player_shot_frame_fills_every_shot_type():
    df = player_shot_frame(_matches())

    assert len(df) == 7
    assert set(df["player_id"]) == {"7"}
    assert int(df["goals"].sum()) == 2
    assert int(df.loc[df["shot_type"] == "distance", "attempts"].iloc[0]) == 5
    assert int(df.loc[df["shot_type"] == "outstart", "goals"].iloc[0]) == 0
