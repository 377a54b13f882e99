"""JSON-ready statistics queries over a team's match snapshot.

Each query accepts typed :class:`~korfstats.models.Match` records or raw
stored documents, keeps only finished matches, and returns plain dicts/lists
(camelCase keys) that serialize with :func:`json.dumps` as-is.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

from korfstats.config import StatsConfig
from korfstats.folding import monthly_trend, player_career_totals, team_season_summary
from korfstats.form import form_last_n, form_string, shot_type_trend
from korfstats.migrations import normalize_match_record, normalize_roster
from korfstats.models import Match, Player
from korfstats.ranking import player_of_month, rank_opponents, top_players
from korfstats.timeline import match_timeline


def finished_matches(matches: Iterable[Any]) -> list[Match]:
    return [m for m in (normalize_match_record(raw) for raw in matches or ()) if m.finished]


def _roster(roster: Iterable[Any] | None) -> tuple[Player, ...] | None:
    return None if roster is None else normalize_roster(list(roster))


def get_team_stats(matches: Iterable[Any]) -> dict[str, int]:
    return team_season_summary(finished_matches(matches)).as_dict()


def get_form_last_n(matches: Iterable[Any], n: int | None = None, *, config: StatsConfig | None = None) -> list[dict]:
    cfg = config or StatsConfig()
    window = cfg.form_window if n is None else n
    return [entry.as_dict() for entry in form_last_n(finished_matches(matches), window)]


def get_trend_by_month(matches: Iterable[Any]) -> list[dict]:
    return [bucket.as_dict() for bucket in monthly_trend(finished_matches(matches))]


def get_top_players(
    matches: Iterable[Any],
    limit: int | None = None,
    *,
    roster: Iterable[Any] | None = None,
    config: StatsConfig | None = None,
) -> list[dict]:
    cfg = config or StatsConfig()
    size = cfg.top_players_limit if limit is None else limit
    return [p.as_dict() for p in top_players(finished_matches(matches), size, _roster(roster))]


def get_opponent_stats(matches: Iterable[Any]) -> list[dict]:
    return [record.as_dict() for record in rank_opponents(finished_matches(matches))]


def get_player_of_month(
    matches: Iterable[Any],
    now: datetime | None = None,
    *,
    config: StatsConfig | None = None,
) -> dict | None:
    cfg = config or StatsConfig()
    winner = player_of_month(finished_matches(matches), now, window_days=cfg.player_of_month_days)
    return None if winner is None else winner.as_dict()


def get_player_career_stats(matches: Iterable[Any], *, roster: Iterable[Any] | None = None) -> list[dict]:
    """Career totals per player, top scorers first (ties keep first appearance)."""
    careers = player_career_totals(finished_matches(matches), _roster(roster))
    return [c.as_dict() for c in sorted(careers, key=lambda c: -c.goals)]


def get_shot_type_trend(matches: Iterable[Any], n: int | None = None, *, config: StatsConfig | None = None) -> list[dict]:
    cfg = config or StatsConfig()
    window = cfg.trend_window if n is None else n
    trends = shot_type_trend(finished_matches(matches), window, dead_zone=cfg.trend_dead_zone)
    return [t.as_dict() for t in trends]


def get_match_timeline(match: Any) -> list[dict]:
    """Timeline of one match, finished or not."""
    return match_timeline(normalize_match_record(match))


def build_season_report(
    matches: Iterable[Any],
    *,
    roster: Iterable[Any] | None = None,
    now: datetime | None = None,
    config: StatsConfig | None = None,
) -> dict[str, Any]:
    """Every season aggregate for one team in a single JSON-ready payload."""
    cfg = config or StatsConfig()
    finished = finished_matches(matches)
    players = _roster(roster)
    form = form_last_n(finished, cfg.form_window)
    winner = player_of_month(finished, now, window_days=cfg.player_of_month_days)
    careers = sorted(player_career_totals(finished, players), key=lambda c: -c.goals)
    return {
        "teamStats": team_season_summary(finished).as_dict(),
        "form": [entry.as_dict() for entry in form],
        "formString": form_string(form),
        "trendByMonth": [bucket.as_dict() for bucket in monthly_trend(finished)],
        "topPlayers": [p.as_dict() for p in top_players(finished, cfg.top_players_limit, players)],
        "opponents": [o.as_dict() for o in rank_opponents(finished)],
        "playerOfMonth": None if winner is None else winner.as_dict(),
        "careerStats": [c.as_dict() for c in careers],
        "shotTypeTrend": [
            t.as_dict() for t in shot_type_trend(finished, cfg.trend_window, dead_zone=cfg.trend_dead_zone)
        ],
    }
