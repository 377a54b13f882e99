"""Aggregation settings for the query layer."""

from __future__ import annotations

from dataclasses import dataclass

from constants import (
    FORM_WINDOW,
    PLAYER_OF_MONTH_WINDOW_DAYS,
    TOP_PLAYERS_LIMIT,
    TREND_DEAD_ZONE_PCT,
    TREND_WINDOW,
)


@dataclass(frozen=True)
class StatsConfig:
    form_window: int = FORM_WINDOW
    trend_window: int = TREND_WINDOW
    trend_dead_zone: float = TREND_DEAD_ZONE_PCT
    player_of_month_days: int = PLAYER_OF_MONTH_WINDOW_DAYS
    top_players_limit: int = TOP_PLAYERS_LIMIT

    def __post_init__(self) -> None:
        for name in ("form_window", "trend_window", "player_of_month_days", "top_players_limit"):
            if int(getattr(self, name)) < 0:
                raise ValueError(f"{name} must be non-negative")
        if float(self.trend_dead_zone) < 0:
            raise ValueError("trend_dead_zone must be non-negative")
