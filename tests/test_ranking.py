import unittest
from datetime import datetime, timedelta, timezone

from korfstats.migrations import normalize_matches
from korfstats.models import Player, Team
from korfstats.ranking import (
    count_matches_by_team,
    find_duplicate_matches,
    group_duplicate_teams,
    merge_rosters,
    player_of_month,
    rank_opponents,
    suggest_merge_target,
    top_players,
)

NOW = datetime(2024, 6, 30, 12, 0, 0, tzinfo=timezone.utc)


def _iso(moment):
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _scorer(pid, goals, attempts=None):
    return {
        "id": pid,
        "name": f"Player {pid}",
        "isStarter": True,
        "stats": {"close": {"goals": goals, "attempts": goals if attempts is None else attempts}},
    }


def _match(mid, date, players=(), opponent="Alpha", score=0, opponent_score=0, team_name="Korf A1", team_id="t1"):
    return {
        "_id": mid,
        "team_id": team_id,
        "team_name": team_name,
        "opponent": opponent,
        "date": date,
        "players": list(players),
        "score": score,
        "opponent_score": opponent_score,
        "opponent_goals": [],
    }


class TopPlayersTests(unittest.TestCase):
    def test_truncates_and_keeps_insertion_order_for_ties(self):
        matches = normalize_matches([
            _match("m1", "2024-03-01", [_scorer("p1", 10), _scorer("p2", 8), _scorer("p3", 5)]),
            _match("m2", "2024-03-08", [_scorer("p4", 8), _scorer("p5", 2)]),
        ])
        ranked = top_players(matches, 3)
        self.assertEqual([p.player_id for p in ranked], ["p1", "p2", "p4"])
        self.assertEqual([p.goals for p in ranked], [10, 8, 8])

    def test_empty_and_zero_limit(self):
        self.assertEqual(top_players([], 3), [])
        matches = normalize_matches([_match("m1", "2024-03-01", [_scorer("p1", 1)])])
        self.assertEqual(top_players(matches, 0), [])
        with self.assertRaises(ValueError):
            top_players(matches, -2)


class OpponentRankingTests(unittest.TestCase):
    def test_sorted_by_win_percentage_with_stable_ties(self):
        matches = normalize_matches([
            _match("m1", "2024-03-01", opponent="Alpha", score=5, opponent_score=9),
            _match("m2", "2024-03-08", opponent="Beta", score=9, opponent_score=5),
            _match("m3", "2024-03-15", opponent="Gamma", score=9, opponent_score=5),
            _match("m4", "2024-03-22", opponent="Delta", score=6, opponent_score=6),
        ])
        self.assertEqual([o.name for o in rank_opponents(matches)], ["Beta", "Gamma", "Alpha", "Delta"])


class PlayerOfMonthTests(unittest.TestCase):
    def test_window_start_boundary(self):
        cutoff = NOW - timedelta(days=30)
        matches = normalize_matches([
            _match("old", _iso(cutoff - timedelta(seconds=1)), [_scorer("p1", 5)]),
            _match("edge", _iso(cutoff + timedelta(seconds=1)), [_scorer("p2", 1)]),
        ])
        winner = player_of_month(matches, NOW)
        self.assertIsNotNone(winner)
        self.assertEqual(winner.as_dict(), {"playerId": "p2", "name": "Player p2", "goals": 1})

    def test_exact_cutoff_is_included(self):
        matches = normalize_matches([_match("m", _iso(NOW - timedelta(days=30)), [_scorer("p1", 2)])])
        self.assertEqual(player_of_month(matches, NOW).player_id, "p1")

    def test_none_when_nobody_scored_in_window(self):
        self.assertIsNone(player_of_month([], NOW))
        matches = normalize_matches([
            _match("recent", _iso(NOW - timedelta(days=2)), [_scorer("p1", 0, attempts=6)]),
            _match("ancient", "2020-01-01T00:00:00Z", [_scorer("p2", 9)]),
            _match("broken", "soon", [_scorer("p3", 9)]),
        ])
        self.assertIsNone(player_of_month(matches, NOW))

    def test_ties_go_to_first_encountered_and_goals_are_summed(self):
        matches = normalize_matches([
            _match("a", _iso(NOW - timedelta(days=10)), [_scorer("p1", 2), _scorer("p2", 3)]),
            _match("b", _iso(NOW - timedelta(days=3)), [_scorer("p1", 1)]),
        ])
        self.assertEqual(player_of_month(matches, NOW).player_id, "p1")

    def test_naive_now_is_utc(self):
        matches = normalize_matches([_match("m", "2024-06-01T12:00:00Z", [_scorer("p1", 1)])])
        self.assertEqual(player_of_month(matches, datetime(2024, 6, 30, 12, 0, 0)).player_id, "p1")


class MergeTargetTests(unittest.TestCase):
    def _teams(self):
        roster = lambda n: tuple(Player(id=str(i), name=f"P{i}") for i in range(n))
        return [
            Team(id="a", name="Korf A1", players=roster(3), creation_time=100.0),
            Team(id="b", name="korf a1 ", players=roster(5), creation_time=200.0),
            Team(id="c", name="KORF A1", players=roster(5), creation_time=50.0),
        ]

    def test_most_matches_wins(self):
        teams = self._teams()
        self.assertEqual(suggest_merge_target(teams, {"a": 5, "b": 4, "c": 4}).id, "a")

    def test_tie_breaks_on_roster_size_then_earliest_creation(self):
        teams = self._teams()
        self.assertEqual(suggest_merge_target(teams, {"a": 4, "b": 4, "c": 4}).id, "c")
        self.assertEqual(suggest_merge_target(teams, {}).id, "c")

    def test_full_tie_is_settled_by_id(self):
        twins = [Team(id="z", name="X"), Team(id="y", name="X")]
        self.assertEqual(suggest_merge_target(twins, {}).id, "y")
        self.assertEqual(suggest_merge_target(list(reversed(twins)), {}).id, "y")

    def test_empty_group_raises(self):
        with self.assertRaises(ValueError):
            suggest_merge_target([], {})

    def test_duplicate_groups_use_trimmed_case_insensitive_names(self):
        teams = self._teams() + [Team(id="d", name="Korf B1")]
        groups = group_duplicate_teams(teams)
        self.assertEqual([[t.id for t in group] for group in groups], [["a", "b", "c"]])

    def test_count_matches_by_team(self):
        matches = normalize_matches([
            _match("m1", "2024-01-01", team_id="a"),
            _match("m2", "2024-01-02", team_id="b"),
            _match("m3", "2024-01-03", team_id="a"),
        ])
        self.assertEqual(count_matches_by_team(matches), {"a": 2, "b": 1})


def test_merge_rosters_skips_names_already_present():
    target = (Player(id="1", name="Anna"), Player(id="2", name="Bram"))
    source = (Player(id="9", name=" anna"), Player(id="8", name="Carla"), Player(id="7", name="CARLA"))
    merged = merge_rosters(target, source)
    assert [p.id for p in merged] == ["1", "2", "8"]


def test_find_duplicate_matches_most_recent_first():
    matches = normalize_matches([
        _match("m1", "2024-01-01", opponent="Alpha"),
        _match("m2", "2024-03-01", opponent="Alpha"),
        _match("m3", "2024-02-01", opponent="alpha"),
        _match("m4", "2024-02-01", opponent="Alpha", team_name="Korf A2"),
    ])
    assert [m.id for m in find_duplicate_matches(matches, "Korf A1", "Alpha")] == ["m2", "m1"]


if __name__ == "__main__":
    unittest.main()
