"""Load exported team/match documents from disk into typed records."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar

from korfstats.migrations import normalize_match_record, normalize_team_record
from korfstats.models import Match, Team

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Snapshot:
    teams: tuple[Team, ...] = ()
    matches: tuple[Match, ...] = ()
    skipped: int = 0

    def team(self, team_id: str) -> Team | None:
        return next((t for t in self.teams if t.id == team_id), None)

    def matches_for(self, team_id: str) -> list[Match]:
        return [m for m in self.matches if m.team_id == team_id]


def _read_array(path: Path) -> list[Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of documents")
    return data


def _normalize_all(records: list[Any], normalize: Callable[[Any], T], source: Path) -> tuple[list[T], int]:
    out: list[T] = []
    skipped = 0
    for position, record in enumerate(records):
        try:
            out.append(normalize(record))
        except (TypeError, ValueError) as e:
            skipped += 1
            logger.warning("Skipping record %d in %s: %s", position, source, e)
    return out, skipped


def load_snapshot(matches_path: Path, teams_path: Path | None = None) -> Snapshot:
    """Read ``matches.json`` (and optionally ``teams.json``) exports.

    Records that cannot be normalized are logged and skipped; a missing or
    non-JSON file raises.
    """
    matches, skipped_matches = _normalize_all(_read_array(matches_path), normalize_match_record, matches_path)
    teams: list[Team] = []
    skipped_teams = 0
    if teams_path is not None:
        teams, skipped_teams = _normalize_all(_read_array(teams_path), normalize_team_record, teams_path)
    logger.info("Loaded %d match(es) and %d team(s)", len(matches), len(teams))
    return Snapshot(teams=tuple(teams), matches=tuple(matches), skipped=skipped_matches + skipped_teams)
