"""Goal-by-goal timeline and running score for a single match.

Two stored shapes exist. Matches with a chronological ``goals`` log replay it
as stored. Legacy matches only carry per-player counters and an opponent goal
list; they are replayed own goals first (player order, then canonical shot
type order), followed by opponent goals. That order is not the real match
order: the legacy data does not record how own and opponent goals
interleaved, so running scores on legacy timelines are approximate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from constants import TEAM_OPPONENT, TEAM_OWN
from korfstats.models import CANONICAL_SHOT_TYPES, Goal, Match, MatchPlayer, OpponentGoal, get_stat, shot_type_label


@dataclass(frozen=True)
class TimelineEvent:
    team: str
    player: str
    shot_type: str
    shot_type_label: str
    is_own: bool
    timestamp: str | None = None

    def as_dict(self) -> dict[str, object]:
        return {
            "team": self.team,
            "player": self.player,
            "shotType": self.shot_type,
            "shotTypeLabel": self.shot_type_label,
            "isOwn": bool(self.is_own),
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ChronologicalLog:
    goals: tuple[Goal, ...]


@dataclass(frozen=True)
class LegacyAggregate:
    players: tuple[MatchPlayer, ...]
    opponent_goals: tuple[OpponentGoal, ...]


GoalLog = Union[ChronologicalLog, LegacyAggregate]


def resolve_goal_log(match: Match) -> GoalLog:
    if match.has_chronological_log:
        return ChronologicalLog(goals=tuple(match.goals))
    return LegacyAggregate(players=tuple(match.players), opponent_goals=tuple(match.opponent_goals))


def _replay_chronological(log: ChronologicalLog) -> list[TimelineEvent]:
    return [
        TimelineEvent(
            team=TEAM_OWN if goal.is_own else TEAM_OPPONENT,
            player=goal.player_name,
            shot_type=goal.shot_type,
            shot_type_label=shot_type_label(goal.shot_type),
            is_own=bool(goal.is_own),
            timestamp=goal.timestamp or None,
        )
        for goal in log.goals
    ]


def _replay_legacy(log: LegacyAggregate) -> list[TimelineEvent]:
    events: list[TimelineEvent] = []
    for player in log.players:
        for shot_type in CANONICAL_SHOT_TYPES:
            event = TimelineEvent(
                team=TEAM_OWN,
                player=player.name,
                shot_type=shot_type.value,
                shot_type_label=shot_type.label,
                is_own=True,
            )
            events.extend([event] * max(0, int(get_stat(player, shot_type).goals)))
    for goal in log.opponent_goals:
        events.append(
            TimelineEvent(
                team=TEAM_OPPONENT,
                player=goal.conceded_by,
                shot_type=goal.type,
                shot_type_label=shot_type_label(goal.type),
                is_own=False,
                timestamp=goal.time or None,
            )
        )
    return events


def reconstruct_timeline(match: Match) -> list[TimelineEvent]:
    log = resolve_goal_log(match)
    if isinstance(log, ChronologicalLog):
        return _replay_chronological(log)
    return _replay_legacy(log)


def running_score(events: Sequence[TimelineEvent], index: int) -> tuple[int, int]:
    """``(own, opponent)`` goals in ``events[0..index]`` inclusive."""
    if index < 0 or index >= len(events):
        raise IndexError(f"event index {index} out of range for {len(events)} events")
    own = sum(1 for event in events[: index + 1] if event.is_own)
    return own, index + 1 - own


def running_scores(events: Sequence[TimelineEvent]) -> list[tuple[int, int]]:
    scores = []
    own = opponent = 0
    for event in events:
        if event.is_own:
            own += 1
        else:
            opponent += 1
        scores.append((own, opponent))
    return scores


def final_score(events: Sequence[TimelineEvent]) -> tuple[int, int]:
    scores = running_scores(events)
    return scores[-1] if scores else (0, 0)


def match_timeline(match: Match) -> list[dict[str, object]]:
    """JSON-ready timeline, each event annotated with the score after it."""
    events = reconstruct_timeline(match)
    out = []
    for event, (own, opponent) in zip(events, running_scores(events)):
        row = event.as_dict()
        row["score"] = {"own": own, "opponent": opponent}
        out.append(row)
    return out
