"""Typed match records shared by every aggregation module.

Records are frozen; aggregation never mutates its input snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from constants import SHOT_TYPE_LABELS, SHOT_TYPE_SHORT
from utils import coerce_count

logger = logging.getLogger(__name__)


class ShotType(str, Enum):
    DISTANCE = "distance"
    CLOSE = "close"
    PENALTY = "penalty"
    FREEBALL = "freeball"
    RUNTHROUGH = "runthrough"
    OUTSTART = "outstart"
    OTHER = "other"

    @property
    def label(self) -> str:
        return SHOT_TYPE_LABELS[self.value]

    @property
    def short(self) -> str:
        return SHOT_TYPE_SHORT[self.value]

    @classmethod
    def parse(cls, raw: object) -> "ShotType":
        if isinstance(raw, cls):
            return raw
        if raw is None:
            raise ValueError("shot type is missing")

        token = str(raw).strip()
        if not token:
            raise ValueError("shot type is empty")

        if token.startswith("ShotType."):
            token = token.split(".", 1)[1]

        member = cls.__members__.get(token.upper())
        if member is not None:
            return member

        try:
            return cls(token.lower())
        except ValueError as exc:
            raise ValueError(f"unknown shot type: {raw}") from exc


# Enum definition order is the canonical order.
CANONICAL_SHOT_TYPES: tuple[ShotType, ...] = tuple(ShotType)


def shot_type_label(raw: object) -> str:
    """Display label for a stored shot type id; unknown ids are shown as-is."""
    try:
        return ShotType.parse(raw).label
    except ValueError:
        return "" if raw is None else str(raw)


@dataclass(frozen=True)
class ShotStat:
    goals: int = 0
    attempts: int = 0


ZERO_STAT = ShotStat()


def as_shot_stat(raw: object) -> ShotStat | None:
    """``ShotStat`` from a stat record or a ``{"goals", "attempts"}`` mapping, else ``None``."""
    if isinstance(raw, ShotStat):
        return raw
    if isinstance(raw, Mapping):
        return ShotStat(goals=coerce_count(raw.get("goals")), attempts=coerce_count(raw.get("attempts")))
    return None


@dataclass(frozen=True)
class Player:
    id: str
    name: str


@dataclass(frozen=True)
class MatchPlayer:
    id: str
    name: str
    is_starter: bool = False
    stats: Mapping[ShotType, ShotStat] = field(default_factory=dict)


def get_stat(player: MatchPlayer, shot_type: ShotType | str) -> ShotStat:
    """Total lookup: a shot type missing from ``player.stats`` reads as zero."""
    stats = player.stats or {}
    try:
        key = ShotType.parse(shot_type)
    except ValueError:
        return ZERO_STAT
    raw = stats.get(key)
    stat = as_shot_stat(raw)
    if stat is None:
        if raw is not None:
            logger.debug("Ignoring malformed %s stats for player %s: %r", key.value, player.id, raw)
        return ZERO_STAT
    return stat


@dataclass(frozen=True)
class Goal:
    player_id: str
    player_name: str
    shot_type: str
    timestamp: str
    is_own: bool


@dataclass(frozen=True)
class OpponentGoal:
    type: str
    time: str
    conceded_by: str


@dataclass(frozen=True)
class Match:
    id: str
    team_id: str
    team_name: str
    opponent: str
    date: str
    players: tuple[MatchPlayer, ...] = ()
    score: int = 0
    opponent_score: int = 0
    opponent_goals: tuple[OpponentGoal, ...] = ()
    goals: tuple[Goal, ...] = ()
    finished: bool = True
    shareable: bool = False

    @property
    def has_chronological_log(self) -> bool:
        return len(self.goals) > 0


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    players: tuple[Player, ...] = ()
    creation_time: float = 0.0
