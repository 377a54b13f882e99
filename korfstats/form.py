"""Recent form and shot-type trend.

"Recent" always means the first ``n`` matches of
:func:`sort_most_recent_first`: newest date first, snapshot order among equal
dates, and unparseable dates after every valid one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from constants import SHOT_TYPE_ORDER, TREND_DEAD_ZONE_PCT
from korfstats.frames import match_frame, player_shot_frame
from korfstats.models import CANONICAL_SHOT_TYPES, Match, ShotStat, ShotType
from korfstats.totals import percentage
from utils import apply_categorical_order, stable_sort


@dataclass(frozen=True)
class FormEntry:
    match_id: str
    opponent: str
    score: int
    opponent_score: int
    date: str
    result: str

    def as_dict(self) -> dict[str, object]:
        return {
            "matchId": self.match_id,
            "opponent": self.opponent,
            "score": int(self.score),
            "opponentScore": int(self.opponent_score),
            "date": self.date,
            "result": self.result,
        }


@dataclass(frozen=True)
class ShotTypeWindow:
    goals: int
    attempts: int
    pct: int

    def as_dict(self) -> dict[str, int]:
        return {"goals": int(self.goals), "attempts": int(self.attempts), "pct": int(self.pct)}


@dataclass(frozen=True)
class ShotTypeTrend:
    shot_type: ShotType
    season: ShotTypeWindow
    recent: ShotTypeWindow
    diff: int
    trend: str
    used_matches: int

    def as_dict(self) -> dict[str, object]:
        return {
            "type": self.shot_type.value,
            "label": self.shot_type.label,
            "short": self.shot_type.short,
            "season": self.season.as_dict(),
            "recent": self.recent.as_dict(),
            "diff": int(self.diff),
            "trend": self.trend,
            "usedMatches": int(self.used_matches),
        }


def _check_window(n: int) -> int:
    if n is None or int(n) < 0:
        raise ValueError(f"window size must be non-negative, got {n!r}")
    return int(n)


def sort_most_recent_first(matches: Sequence[Match]) -> list[Match]:
    df = match_frame(matches)
    if df.empty:
        return []
    ordered = stable_sort(df, by="kickoff", ascending=False, na_position="last")
    return [matches[int(i)] for i in ordered["order"]]


def form_last_n(matches: Sequence[Match], n: int) -> list[FormEntry]:
    """W/D/V results of the ``n`` most recent matches, newest first."""
    n = _check_window(n)
    df = match_frame(matches)
    if df.empty or n == 0:
        return []
    recent = stable_sort(df, by="kickoff", ascending=False, na_position="last").head(n)
    return [
        FormEntry(
            match_id=str(row.match_id),
            opponent=str(row.opponent),
            score=int(row.score),
            opponent_score=int(row.opponent_score),
            date=str(row.date),
            result=str(row.result),
        )
        for row in recent.itertuples(index=False)
    ]


def form_string(entries: Sequence[FormEntry]) -> str:
    return " ".join(entry.result for entry in entries)


def classify_trend(diff: float, dead_zone: float = TREND_DEAD_ZONE_PCT) -> str:
    """``diff`` within ``±dead_zone`` (inclusive) is noise."""
    if diff > dead_zone:
        return "up"
    if diff < -dead_zone:
        return "down"
    return "stable"


def _windows_by_type(shots, match_orders=None) -> dict[str, ShotStat]:
    if match_orders is not None:
        shots = shots[shots["match_order"].isin(match_orders)]
    shots = apply_categorical_order(shots, "shot_type", SHOT_TYPE_ORDER)
    sums = shots.groupby("shot_type", observed=False)[["goals", "attempts"]].sum()
    totals = {str(shot_type): row for shot_type, row in sums.iterrows()}
    out = {}
    for shot_type in SHOT_TYPE_ORDER:
        row = totals.get(shot_type)
        out[shot_type] = ShotStat() if row is None else ShotStat(goals=int(row["goals"]), attempts=int(row["attempts"]))
    return out


def shot_type_trend(
    matches: Sequence[Match],
    n: int,
    *,
    dead_zone: float = TREND_DEAD_ZONE_PCT,
) -> list[ShotTypeTrend]:
    """Season vs. last-``n`` success rate for each of the seven shot types."""
    n = _check_window(n)
    df = match_frame(matches)
    shots = player_shot_frame(matches)
    if df.empty:
        recent_orders: list[int] = []
    else:
        ordered = stable_sort(df, by="kickoff", ascending=False, na_position="last")
        recent_orders = [int(i) for i in ordered["order"].head(n)]

    season = _windows_by_type(shots)
    recent = _windows_by_type(shots, recent_orders)
    used_matches = min(n, len(df))

    trends = []
    for shot_type in CANONICAL_SHOT_TYPES:
        season_stat = season[shot_type.value]
        recent_stat = recent[shot_type.value]
        season_pct = percentage(season_stat)
        recent_pct = percentage(recent_stat)
        diff = recent_pct - season_pct
        trends.append(
            ShotTypeTrend(
                shot_type=shot_type,
                season=ShotTypeWindow(goals=season_stat.goals, attempts=season_stat.attempts, pct=season_pct),
                recent=ShotTypeWindow(goals=recent_stat.goals, attempts=recent_stat.attempts, pct=recent_pct),
                diff=diff,
                trend=classify_trend(diff, dead_zone),
                used_matches=used_matches,
            )
        )
    return trends
