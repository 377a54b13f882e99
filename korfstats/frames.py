"""Flatten match snapshots into pandas frames for the team-level folds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

import pandas as pd

from constants import RESULT_DRAW, RESULT_LOSS, RESULT_WIN
from korfstats.models import CANONICAL_SHOT_TYPES, Match, get_stat


@dataclass(frozen=True)
class TableContract:
    name: str
    columns: Mapping[str, str]

    def empty(self) -> pd.DataFrame:
        return pd.DataFrame({col: pd.Series(dtype=dtype) for col, dtype in self.columns.items()})

    def build(self, rows: list[dict[str, object]]) -> pd.DataFrame:
        if not rows:
            return self.empty()
        return pd.DataFrame(rows, columns=list(self.columns)).astype(
            {col: dtype for col, dtype in self.columns.items() if not dtype.startswith("datetime")}
        )


MATCH_TABLE = TableContract(
    name="match",
    columns={
        "order": "int64",
        "match_id": "string",
        "opponent": "string",
        "date": "string",
        "kickoff": "datetime64[ns, UTC]",
        "score": "int64",
        "opponent_score": "int64",
        "result": "string",
    },
)

PLAYER_SHOT_TABLE = TableContract(
    name="player_shot",
    columns={
        "match_order": "int64",
        "appearance": "int64",
        "player_id": "string",
        "name": "string",
        "shot_type": "string",
        "goals": "int64",
        "attempts": "int64",
    },
)


def classify_result(score: int, opponent_score: int) -> str:
    if score > opponent_score:
        return RESULT_WIN
    if score == opponent_score:
        return RESULT_DRAW
    return RESULT_LOSS


def parse_match_dates(values: Iterable[object]) -> pd.Series:
    """Parse ISO-8601 strings as UTC; unparseable values become ``NaT``.

    Naive timestamps are read as UTC so every caller buckets and windows the
    same instant the same way.
    """
    series = pd.Series(list(values), dtype="object")
    if series.empty:
        return pd.Series(dtype="datetime64[ns, UTC]")
    return pd.to_datetime(series, errors="coerce", utc=True, format="ISO8601")


def match_frame(matches: Iterable[Match]) -> pd.DataFrame:
    """One row per match in snapshot order (``order`` keeps that position)."""
    rows = [
        {
            "order": order,
            "match_id": match.id,
            "opponent": match.opponent,
            "date": match.date,
            "score": int(match.score),
            "opponent_score": int(match.opponent_score),
            "result": classify_result(match.score, match.opponent_score),
        }
        for order, match in enumerate(matches)
    ]
    df = MATCH_TABLE.build(rows)
    if not df.empty:
        df["kickoff"] = parse_match_dates(df["date"].tolist())
    return df


def player_shot_frame(matches: Iterable[Match]) -> pd.DataFrame:
    """One row per match x player x shot type; missing shot types are zero rows."""
    rows: list[dict[str, object]] = []
    appearance = 0
    for match_order, match in enumerate(matches):
        for player in match.players:
            for shot_type in CANONICAL_SHOT_TYPES:
                stat = get_stat(player, shot_type)
                rows.append({
                    "match_order": match_order,
                    "appearance": appearance,
                    "player_id": str(player.id),
                    "name": player.name,
                    "shot_type": shot_type.value,
                    "goals": int(stat.goals),
                    "attempts": int(stat.attempts),
                })
            appearance += 1
    return PLAYER_SHOT_TABLE.build(rows)
