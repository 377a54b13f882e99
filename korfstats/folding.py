"""Season folds over a team's finished matches.

Every function takes the match list it should aggregate (already filtered to
one team and to finished matches) and returns new frozen aggregates. Grouped
outputs keep first-appearance order unless documented otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

import pandas as pd

from constants import MONTH_LABELS, RESULT_DRAW, RESULT_LOSS, RESULT_ORDER, RESULT_WIN
from korfstats.frames import match_frame, player_shot_frame
from korfstats.models import Match, Player
from korfstats.totals import PlayerCareerStat, PlayerSeasonStat, PlayerTotals
from utils import apply_categorical_order, safe_pct

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamSeasonSummary:
    total_matches: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    total_attempts: int = 0
    shot_percentage: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "totalMatches": int(self.total_matches),
            "totalWins": int(self.wins),
            "totalDraws": int(self.draws),
            "totalLosses": int(self.losses),
            "totalGoalsFor": int(self.goals_for),
            "totalGoalsAgainst": int(self.goals_against),
            "goalDifference": int(self.goal_difference),
            "shotPercentage": int(self.shot_percentage),
            "totalAttempts": int(self.total_attempts),
        }


@dataclass(frozen=True)
class OpponentRecord:
    name: str
    played: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    win_percentage: int

    def as_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "played": int(self.played),
            "wins": int(self.wins),
            "draws": int(self.draws),
            "losses": int(self.losses),
            "goalsFor": int(self.goals_for),
            "goalsAgainst": int(self.goals_against),
            "winPercentage": int(self.win_percentage),
        }


@dataclass(frozen=True)
class MonthlyTrendBucket:
    key: str
    month: str
    goals_for: int
    goals_against: int
    matches: int
    wins: int

    def as_dict(self) -> dict[str, object]:
        return {
            "key": self.key,
            "month": self.month,
            "goalsFor": int(self.goals_for),
            "goalsAgainst": int(self.goals_against),
            "matches": int(self.matches),
            "wins": int(self.wins),
        }


def _with_result_flags(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out["is_win"] = (out["result"] == RESULT_WIN).astype("int64")
    out["is_draw"] = (out["result"] == RESULT_DRAW).astype("int64")
    out["is_loss"] = (out["result"] == RESULT_LOSS).astype("int64")
    return out


def team_season_summary(matches: Sequence[Match]) -> TeamSeasonSummary:
    """Win/draw/loss counts, goal totals and team shot percentage.

    ``totalAttempts`` sums every player's attempts over all seven shot types;
    the shot percentage divides the team score (not player goals) by it.
    """
    df = match_frame(matches)
    if df.empty:
        return TeamSeasonSummary()

    results = apply_categorical_order(df, "result", RESULT_ORDER)["result"].value_counts(sort=False)
    shots = player_shot_frame(matches)
    goals_for = int(df["score"].sum())
    goals_against = int(df["opponent_score"].sum())
    total_attempts = int(shots["attempts"].sum())
    return TeamSeasonSummary(
        total_matches=len(df),
        wins=int(results[RESULT_WIN]),
        draws=int(results[RESULT_DRAW]),
        losses=int(results[RESULT_LOSS]),
        goals_for=goals_for,
        goals_against=goals_against,
        goal_difference=goals_for - goals_against,
        total_attempts=total_attempts,
        shot_percentage=safe_pct(goals_for, total_attempts),
    )


def opponent_records(matches: Sequence[Match]) -> list[OpponentRecord]:
    """Head-to-head records keyed by the exact opponent string."""
    df = _with_result_flags(match_frame(matches))
    if df.empty:
        return []

    grouped = df.groupby("opponent", sort=False).agg(
        played=("match_id", "size"),
        wins=("is_win", "sum"),
        draws=("is_draw", "sum"),
        losses=("is_loss", "sum"),
        goals_for=("score", "sum"),
        goals_against=("opponent_score", "sum"),
    )
    return [
        OpponentRecord(
            name=str(name),
            played=int(row.played),
            wins=int(row.wins),
            draws=int(row.draws),
            losses=int(row.losses),
            goals_for=int(row.goals_for),
            goals_against=int(row.goals_against),
            win_percentage=safe_pct(int(row.wins), int(row.played)),
        )
        for name, row in grouped.iterrows()
    ]


def month_label(year: int, month: int) -> str:
    """Short Dutch month label, e.g. ``"jan '24"``."""
    return f"{MONTH_LABELS[month - 1]} '{year % 100:02d}"


def monthly_trend(matches: Sequence[Match]) -> list[MonthlyTrendBucket]:
    """Per calendar month (UTC) totals, oldest month first."""
    df = _with_result_flags(match_frame(matches))
    if df.empty:
        return []

    dated = df[df["kickoff"].notna()].copy()
    skipped = len(df) - len(dated)
    if skipped:
        logger.debug("Monthly trend skipped %d match(es) with unparseable dates", skipped)
    if dated.empty:
        return []

    dated["year"] = dated["kickoff"].dt.year.astype("int64")
    dated["month_no"] = dated["kickoff"].dt.month.astype("int64")
    grouped = dated.groupby(["year", "month_no"], sort=True).agg(
        goals_for=("score", "sum"),
        goals_against=("opponent_score", "sum"),
        matches=("match_id", "size"),
        wins=("is_win", "sum"),
    )
    return [
        MonthlyTrendBucket(
            key=f"{int(year):04d}-{int(month_no):02d}",
            month=month_label(int(year), int(month_no)),
            goals_for=int(row.goals_for),
            goals_against=int(row.goals_against),
            matches=int(row.matches),
            wins=int(row.wins),
        )
        for (year, month_no), row in grouped.iterrows()
    ]


def _fold_players(matches: Iterable[Match], roster: Iterable[Player] | None = None) -> list[PlayerTotals]:
    roster_names = {str(p.id): p.name for p in (roster or ())}
    by_id: dict[str, PlayerTotals] = {}
    for match in matches:
        for player in match.players:
            player_id = str(player.id)
            totals = by_id.get(player_id)
            if totals is None:
                totals = PlayerTotals(player_id=player_id, name=roster_names.get(player_id, player.name))
                by_id[player_id] = totals
            totals.add_appearance(player)
    return list(by_id.values())


def player_season_totals(matches: Sequence[Match], roster: Iterable[Player] | None = None) -> list[PlayerSeasonStat]:
    """Per-player totals in order of first appearance.

    Players are keyed by id. The name comes from *roster* when it knows the id,
    otherwise from the player's first appearance.
    """
    return [totals.season_stat() for totals in _fold_players(matches, roster)]


def player_career_totals(matches: Sequence[Match], roster: Iterable[Player] | None = None) -> list[PlayerCareerStat]:
    return [totals.career_stat() for totals in _fold_players(matches, roster)]
