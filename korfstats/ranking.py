"""Rankings over folded aggregates, plus team de-duplication helpers.

All sorts are stable: among equal keys the first-seen record stays first.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Mapping, Sequence

import pandas as pd

from constants import PLAYER_OF_MONTH_WINDOW_DAYS
from korfstats.folding import OpponentRecord, opponent_records, player_season_totals
from korfstats.form import sort_most_recent_first
from korfstats.frames import parse_match_dates
from korfstats.models import Match, Player, Team
from korfstats.totals import PlayerSeasonStat


@dataclass(frozen=True)
class PlayerOfMonth:
    player_id: str
    name: str
    goals: int

    def as_dict(self) -> dict[str, object]:
        return {"playerId": self.player_id, "name": self.name, "goals": int(self.goals)}


def _check_limit(limit: int) -> int:
    if limit is None or int(limit) < 0:
        raise ValueError(f"limit must be non-negative, got {limit!r}")
    return int(limit)


def top_players(matches: Sequence[Match], limit: int, roster: Iterable[Player] | None = None) -> list[PlayerSeasonStat]:
    """Season scorers by goals, descending; equal scorers keep first-appearance order."""
    limit = _check_limit(limit)
    ranked = sorted(player_season_totals(matches, roster), key=lambda p: -p.goals)
    return ranked[:limit]


def rank_opponents(matches: Sequence[Match]) -> list[OpponentRecord]:
    return sorted(opponent_records(matches), key=lambda o: -o.win_percentage)


def _as_utc(now: datetime) -> pd.Timestamp:
    stamp = pd.Timestamp(now)
    return stamp.tz_localize("UTC") if stamp.tzinfo is None else stamp.tz_convert("UTC")


def player_of_month(
    matches: Sequence[Match],
    now: datetime | None = None,
    *,
    window_days: int = PLAYER_OF_MONTH_WINDOW_DAYS,
) -> PlayerOfMonth | None:
    """Top scorer over matches dated within the last ``window_days`` x 24h.

    The window start is inclusive. A naive *now* is read as UTC. Players who
    did not score are never candidates; ties go to the first player seen.
    """
    current = _as_utc(now if now is not None else datetime.now(timezone.utc))
    cutoff = current - timedelta(days=window_days)
    kickoffs = parse_match_dates(m.date for m in matches)
    recent = [m for m, kickoff in zip(matches, kickoffs) if pd.notna(kickoff) and kickoff >= cutoff]

    best: PlayerSeasonStat | None = None
    for candidate in player_season_totals(recent):
        if candidate.goals <= 0:
            continue
        if best is None or candidate.goals > best.goals:
            best = candidate
    if best is None:
        return None
    return PlayerOfMonth(player_id=best.player_id, name=best.name, goals=best.goals)


def _merge_key(team: Team, match_counts: Mapping[str, int]) -> tuple:
    return (
        -int(match_counts.get(team.id, 0)),
        -len(team.players),
        float(team.creation_time),
        team.id,
    )


def suggest_merge_target(duplicate_teams: Sequence[Team], match_counts: Mapping[str, int]) -> Team:
    """Team to keep when merging duplicates.

    Most matches wins, then most roster players, then the earliest creation
    time; the id settles anything left so the choice is always unique.
    """
    if not duplicate_teams:
        raise ValueError("cannot pick a merge target from an empty team group")
    return min(duplicate_teams, key=lambda team: _merge_key(team, match_counts))


def team_name_key(name: str) -> str:
    return str(name).strip().lower()


def group_duplicate_teams(teams: Iterable[Team]) -> list[list[Team]]:
    """Groups of two or more teams sharing a trimmed, case-insensitive name."""
    groups: dict[str, list[Team]] = {}
    for team in teams:
        groups.setdefault(team_name_key(team.name), []).append(team)
    return [group for group in groups.values() if len(group) > 1]


def count_matches_by_team(matches: Iterable[Match]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for match in matches:
        counts[match.team_id] = counts.get(match.team_id, 0) + 1
    return counts


def merge_rosters(target: Sequence[Player], source: Sequence[Player]) -> tuple[Player, ...]:
    """Target roster followed by source players whose name it does not have yet."""
    merged = list(target)
    seen = {team_name_key(p.name) for p in target}
    for player in source:
        key = team_name_key(player.name)
        if key in seen:
            continue
        seen.add(key)
        merged.append(player)
    return tuple(merged)


def find_duplicate_matches(matches: Sequence[Match], team_name: str, opponent: str) -> list[Match]:
    """Matches with this exact team name and opponent, most recent first."""
    candidates = [m for m in matches if m.team_name == team_name and m.opponent == opponent]
    return sort_most_recent_first(candidates)
