"""Shot-stat accumulation and per-player totals.

Percentages are integers in ``0..100`` (for sane input) rounded half-up;
goals per match keeps one decimal. Division by zero always reads as 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from korfstats.models import CANONICAL_SHOT_TYPES, MatchPlayer, ShotStat, ShotType, get_stat
from utils import safe_pct, safe_ratio


def accumulate(total: ShotStat, delta: ShotStat) -> ShotStat:
    return ShotStat(goals=total.goals + delta.goals, attempts=total.attempts + delta.attempts)


def percentage(stat: ShotStat) -> int:
    """``round(goals / attempts * 100)``, or 0 without attempts.

    ``goals > attempts`` is not rejected; the result is then simply above 100.
    """
    return safe_pct(stat.goals, stat.attempts)


def goals_per_match(goals: int, matches: int) -> float:
    return safe_ratio(goals, matches, digits=1)


def sum_stats(stats: Iterable[ShotStat]) -> ShotStat:
    total = ShotStat()
    for stat in stats:
        total = accumulate(total, stat)
    return total


def best_shot_type(by_type: dict[ShotType, ShotStat]) -> ShotType | None:
    """Shot type with the most goals; ties go to the earlier canonical type."""
    best: ShotType | None = None
    best_goals = 0
    for shot_type in CANONICAL_SHOT_TYPES:
        goals = by_type.get(shot_type, ShotStat()).goals
        if goals > best_goals:
            best, best_goals = shot_type, goals
    return best


@dataclass
class PlayerTotals:
    """Mutable accumulator for one player; folded into frozen results."""

    player_id: str
    name: str
    matches: int = 0
    by_type: dict[ShotType, ShotStat] = field(
        default_factory=lambda: {shot_type: ShotStat() for shot_type in CANONICAL_SHOT_TYPES}
    )

    def add_appearance(self, player: MatchPlayer) -> None:
        self.matches += 1
        for shot_type in CANONICAL_SHOT_TYPES:
            self.by_type[shot_type] = accumulate(self.by_type[shot_type], get_stat(player, shot_type))

    @property
    def total(self) -> ShotStat:
        return sum_stats(self.by_type.values())

    def season_stat(self) -> "PlayerSeasonStat":
        total = self.total
        return PlayerSeasonStat(
            player_id=self.player_id,
            name=self.name,
            goals=total.goals,
            attempts=total.attempts,
            matches=self.matches,
            percentage=percentage(total),
            goals_per_match=goals_per_match(total.goals, self.matches),
        )

    def career_stat(self) -> "PlayerCareerStat":
        season = self.season_stat()
        return PlayerCareerStat(
            player_id=season.player_id,
            name=season.name,
            goals=season.goals,
            attempts=season.attempts,
            matches=season.matches,
            percentage=season.percentage,
            goals_per_match=season.goals_per_match,
            by_type=tuple(
                ShotTypeBreakdown(
                    shot_type=shot_type,
                    goals=self.by_type[shot_type].goals,
                    attempts=self.by_type[shot_type].attempts,
                    percentage=percentage(self.by_type[shot_type]),
                )
                for shot_type in CANONICAL_SHOT_TYPES
            ),
            best_shot_type=best_shot_type(self.by_type),
        )


@dataclass(frozen=True)
class PlayerSeasonStat:
    player_id: str
    name: str
    goals: int
    attempts: int
    matches: int
    percentage: int
    goals_per_match: float

    def as_dict(self) -> dict[str, object]:
        return {
            "playerId": self.player_id,
            "name": self.name,
            "goals": int(self.goals),
            "attempts": int(self.attempts),
            "matches": int(self.matches),
            "percentage": int(self.percentage),
            "goalsPerMatch": self.goals_per_match,
        }


@dataclass(frozen=True)
class ShotTypeBreakdown:
    shot_type: ShotType
    goals: int
    attempts: int
    percentage: int

    def as_dict(self) -> dict[str, int]:
        return {"goals": int(self.goals), "attempts": int(self.attempts), "percentage": int(self.percentage)}


@dataclass(frozen=True)
class PlayerCareerStat(PlayerSeasonStat):
    by_type: tuple[ShotTypeBreakdown, ...] = ()
    best_shot_type: ShotType | None = None

    def as_dict(self) -> dict[str, object]:
        out = super().as_dict()
        out["byType"] = {item.shot_type.value: item.as_dict() for item in self.by_type}
        out["bestShotType"] = None if self.best_shot_type is None else self.best_shot_type.value
        return out
