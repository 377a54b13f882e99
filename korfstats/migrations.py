"""Normalize stored match and team documents into typed records.

Stored documents come in two generations: legacy matches (numeric player ids,
no ``outstart`` stats, no chronological ``goals`` log) and current matches.
Both normalize to the same :class:`~korfstats.models.Match` shape; absent
fields take the defaults below instead of raising.
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Mapping

import pandas as pd

from constants import DEFAULT_SHOT_TYPE, UNKNOWN_NAME
from korfstats.models import (
    CANONICAL_SHOT_TYPES,
    Goal,
    Match,
    MatchPlayer,
    OpponentGoal,
    Player,
    ShotStat,
    Team,
    as_shot_stat,
)
from utils import coerce_int

logger = logging.getLogger(__name__)

# Field aliases: stored documents use snake_case, client payloads camelCase.
MATCH_FIELD_ALIASES = {
    "id": ("_id", "id"),
    "team_id": ("team_id", "teamId"),
    "team_name": ("team_name", "teamName"),
    "opponent_score": ("opponent_score", "opponentScore"),
    "opponent_goals": ("opponent_goals", "opponentGoals"),
}

TEAM_FIELD_ALIASES = {
    "id": ("_id", "id"),
    "name": ("team_name", "teamName", "name"),
    "creation_time": ("_creationTime", "creation_time", "creationTime"),
}


def _field(record: Mapping[str, Any], name: str, aliases: Mapping[str, tuple[str, ...]], default: Any = None) -> Any:
    for key in aliases.get(name, (name,)):
        if key in record and record[key] is not None:
            return record[key]
    return default


def _as_id(value: Any) -> str | None:
    """Stringify player/team ids once; legacy numeric ids become strings."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _as_text(value: Any, default: str = "") -> str:
    return default if value is None else str(value)


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    raise TypeError(f"expected a list, got {type(value).__name__}")


def _require_mapping(record: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(record, Mapping):
        raise ValueError(f"{kind} record must be an object, got {type(record).__name__}")
    return record


def _object_entries(value: Any, kind: str) -> list[Mapping[str, Any]]:
    """Mapping entries of a stored list; other entries are dropped and logged."""
    entries = []
    for raw in _as_list(value):
        if not isinstance(raw, Mapping):
            logger.debug("Dropping %s entry that is not an object: %r", kind, raw)
            continue
        entries.append(raw)
    return entries


def normalize_shot_stats(raw_stats: Any) -> dict:
    """All seven shot types, each ``ShotStat``; missing/malformed entries are zero."""
    stats = raw_stats if isinstance(raw_stats, Mapping) else {}
    out = {}
    for shot_type in CANONICAL_SHOT_TYPES:
        raw = stats.get(shot_type.value)
        stat = as_shot_stat(raw)
        if stat is None:
            if raw is not None:
                logger.debug("Ignoring malformed %s stats: %r", shot_type.value, raw)
            stat = ShotStat()
        out[shot_type] = stat
    return out


def normalize_match_player(raw: Mapping[str, Any]) -> MatchPlayer | None:
    player_id = _as_id(raw.get("id"))
    if player_id is None:
        return None
    return MatchPlayer(
        id=player_id,
        name=_as_text(raw.get("name"), UNKNOWN_NAME),
        is_starter=bool(raw.get("isStarter", raw.get("is_starter", False))),
        stats=normalize_shot_stats(raw.get("stats")),
    )


def normalize_goal(raw: Mapping[str, Any]) -> Goal | None:
    player_id = _as_id(raw.get("playerId", raw.get("player_id")))
    if player_id is None:
        return None
    return Goal(
        player_id=player_id,
        player_name=_as_text(raw.get("playerName", raw.get("player_name")), UNKNOWN_NAME),
        shot_type=_as_text(raw.get("shotType", raw.get("shot_type")), DEFAULT_SHOT_TYPE),
        timestamp=_as_text(raw.get("timestamp")),
        is_own=bool(raw.get("isOwn", raw.get("is_own", False))),
    )


def normalize_opponent_goal(raw: Mapping[str, Any]) -> OpponentGoal:
    return OpponentGoal(
        type=_as_text(raw.get("type"), DEFAULT_SHOT_TYPE),
        time=_as_text(raw.get("time")),
        conceded_by=_as_text(raw.get("concededBy", raw.get("conceded_by")), UNKNOWN_NAME),
    )


def normalize_match_record(record: Any) -> Match:
    """Build a :class:`Match` from a stored or client-side match document.

    Players and goals without an id are dropped, like the write path does, and
    so are list entries that are not objects.
    ``finished`` defaults to ``True`` when absent; an explicit ``False`` is kept.
    """
    if isinstance(record, Match):
        return record
    record = _require_mapping(record, "match")

    players = []
    for raw in _object_entries(record.get("players"), "player"):
        player = normalize_match_player(raw)
        if player is None:
            logger.debug("Dropping match player without id: %r", raw)
            continue
        players.append(player)

    goals = []
    for raw in _object_entries(record.get("goals"), "goal"):
        goal = normalize_goal(raw)
        if goal is None:
            logger.debug("Dropping goal without player id: %r", raw)
            continue
        goals.append(goal)

    opponent_goals = [
        normalize_opponent_goal(raw)
        for raw in _object_entries(_field(record, "opponent_goals", MATCH_FIELD_ALIASES), "opponent goal")
    ]

    return Match(
        id=_as_text(_as_id(_field(record, "id", MATCH_FIELD_ALIASES))),
        team_id=_as_text(_as_id(_field(record, "team_id", MATCH_FIELD_ALIASES))),
        team_name=_as_text(_field(record, "team_name", MATCH_FIELD_ALIASES)),
        opponent=_as_text(record.get("opponent")),
        date=_as_text(record.get("date")),
        players=tuple(players),
        score=coerce_int(record.get("score")),
        opponent_score=coerce_int(_field(record, "opponent_score", MATCH_FIELD_ALIASES)),
        opponent_goals=tuple(opponent_goals),
        goals=tuple(goals),
        finished=record.get("finished") is not False,
        shareable=bool(record.get("shareable", False)),
    )


def normalize_player(raw: Any) -> Player | None:
    if isinstance(raw, Player):
        return raw
    raw = _require_mapping(raw, "player")
    player_id = _as_id(raw.get("id"))
    if player_id is None:
        return None
    return Player(id=player_id, name=_as_text(raw.get("name"), UNKNOWN_NAME))


def normalize_roster(raw_players: Any) -> tuple[Player, ...]:
    roster = []
    for raw in _as_list(raw_players):
        if not isinstance(raw, (Mapping, Player)):
            logger.debug("Dropping roster entry that is not an object: %r", raw)
            continue
        player = normalize_player(raw)
        if player is None:
            logger.debug("Dropping roster entry without id: %r", raw)
            continue
        roster.append(player)
    return tuple(roster)


def normalize_team_record(record: Any) -> Team:
    if isinstance(record, Team):
        return record
    record = _require_mapping(record, "team")
    raw_creation = _field(record, "creation_time", TEAM_FIELD_ALIASES, 0.0)
    creation_time = pd.to_numeric(raw_creation, errors="coerce") if isinstance(raw_creation, (Real, str)) else None
    return Team(
        id=_as_text(_as_id(_field(record, "id", TEAM_FIELD_ALIASES))),
        name=_as_text(_field(record, "name", TEAM_FIELD_ALIASES)),
        players=normalize_roster(record.get("players")),
        creation_time=0.0 if creation_time is None or pd.isna(creation_time) else float(creation_time),
    )


def normalize_matches(records: Any) -> list[Match]:
    return [normalize_match_record(record) for record in _as_list(records)]
