#!/usr/bin/env python3
"""Print a team's season statistics from exported matches/teams JSON files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from korfstats.config import StatsConfig
from korfstats.queries import build_season_report
from korfstats.snapshot import load_snapshot

logger = logging.getLogger("season_report")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("matches", type=Path, help="matches.json export")
    parser.add_argument("--teams", type=Path, default=None, help="teams.json export (roster names)")
    parser.add_argument("--team-id", required=True, help="team whose matches are aggregated")
    parser.add_argument("--form-window", type=int, default=None)
    parser.add_argument("--trend-window", type=int, default=None)
    parser.add_argument("--top", type=int, default=None, help="number of top scorers")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    defaults = StatsConfig()
    try:
        config = StatsConfig(
            form_window=defaults.form_window if args.form_window is None else args.form_window,
            trend_window=defaults.trend_window if args.trend_window is None else args.trend_window,
            top_players_limit=defaults.top_players_limit if args.top is None else args.top,
        )
        snapshot = load_snapshot(args.matches, args.teams)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    team = snapshot.team(args.team_id)
    if args.teams is not None and team is None:
        logger.warning("Team %s not found in %s; using names from matches", args.team_id, args.teams)

    report = build_season_report(
        snapshot.matches_for(args.team_id),
        roster=team.players if team is not None else None,
        config=config,
    )
    json.dump(report, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
