"""Korfbal match statistics package."""

from korfstats.config import StatsConfig
from korfstats.models import Goal, Match, MatchPlayer, OpponentGoal, Player, ShotStat, ShotType, Team, get_stat
from korfstats.queries import (
    build_season_report,
    get_form_last_n,
    get_match_timeline,
    get_opponent_stats,
    get_player_career_stats,
    get_player_of_month,
    get_shot_type_trend,
    get_team_stats,
    get_top_players,
    get_trend_by_month,
)

__all__ = [
    "StatsConfig",
    "ShotType",
    "ShotStat",
    "Player",
    "MatchPlayer",
    "Goal",
    "OpponentGoal",
    "Match",
    "Team",
    "get_stat",
    "get_team_stats",
    "get_form_last_n",
    "get_trend_by_month",
    "get_top_players",
    "get_opponent_stats",
    "get_player_of_month",
    "get_player_career_stats",
    "get_shot_type_trend",
    "get_match_timeline",
    "build_season_report",
]
