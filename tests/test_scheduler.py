"""
Tests for the season schedule generator.
Covers pairing, season extension, week distribution, slot assignment,
statistics and parameter validation.
"""

import sys
import os
import random
from collections import defaultdict
from itertools import combinations

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from league_scheduler.models import LeagueScheduleConfig, Matchup, ScheduleGame, League, Team
from league_scheduler.services.scheduler import SeasonScheduler


class FixedRandom(random.Random):
    """Random source that cycles through the given values."""

    def __init__(self, *values):
        super().__init__(0)
        self.values = list(values) or [0.0]
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def make_config(fields=1, times=None, weeks=6, day="Saturday", start="2025-01-04"):
    return LeagueScheduleConfig(
        day_of_week=day,
        start_date=start,
        available_fields=fields,
        game_start_times=times or ["8:30 PM"],
        season_weeks=weeks
    )


def team_names(count):
    return [f"T{i + 1}" for i in range(count)]


def assert_no_team_twice_per_week(schedule):
    seen = defaultdict(set)
    for game in schedule:
        assert game.home_team_id != game.away_team_id
        assert game.home_team_id not in seen[game.week], f"{game.home_team_id} twice in week {game.week}"
        assert game.away_team_id not in seen[game.week], f"{game.away_team_id} twice in week {game.week}"
        seen[game.week].add(game.home_team_id)
        seen[game.week].add(game.away_team_id)


def test_round_robin_pairs_every_team_once():
    """Every unordered pair appears exactly once."""
    for count in range(2, 11):
        teams = team_names(count)
        scheduler = SeasonScheduler(make_config(), teams)
        matchups = scheduler.generate_round_robin_matchups(teams)

        assert len(matchups) == count * (count - 1) // 2
        pairs = [frozenset((m.home, m.away)) for m in matchups]
        assert len(set(pairs)) == len(pairs)
        assert set(pairs) == {frozenset(p) for p in combinations(teams, 2)}


def test_round_robin_alternates_home_and_away():
    teams = ["A", "B", "C", "D"]
    scheduler = SeasonScheduler(make_config(), teams)

    assert scheduler.generate_round_robin_matchups(teams) == [
        Matchup("A", "B"),
        Matchup("C", "A"),
        Matchup("A", "D"),
        Matchup("C", "B"),
        Matchup("B", "D"),
        Matchup("D", "C"),
    ]


def test_round_robin_needs_two_teams():
    scheduler = SeasonScheduler(make_config(), [])
    assert scheduler.generate_round_robin_matchups([]) == []
    assert scheduler.generate_round_robin_matchups(["A"]) == []


def test_extended_matchups_truncate_to_slots():
    teams = ["A", "B", "C", "D"]
    scheduler = SeasonScheduler(make_config(), teams)

    assert len(scheduler.generate_extended_matchups(teams, 6)) == 6
    assert len(scheduler.generate_extended_matchups(teams, 4)) == 4
    assert len(scheduler.generate_extended_matchups(teams, 13)) == 13
    assert scheduler.generate_extended_matchups(teams, 0) == []


def test_extended_matchups_swap_home_away_each_round():
    teams = ["A", "B", "C", "D"]
    scheduler = SeasonScheduler(make_config(), teams)
    base = scheduler.generate_round_robin_matchups(teams)

    extended = scheduler.generate_extended_matchups(teams, 18)

    assert extended[0:6] == base
    assert extended[6:12] == [m.swapped() for m in base]
    assert extended[12:18] == base


def test_extended_matchups_empty_without_pairings():
    scheduler = SeasonScheduler(make_config(), ["A"])
    assert scheduler.generate_extended_matchups(["A"], 50) == []


def test_four_team_scenario():
    """4 teams, 1 field, 1 time, 6 weeks: one game a week, every pairing once."""
    teams = ["A", "B", "C", "D"]
    scheduler = SeasonScheduler(make_config(weeks=6), teams, rng=random.Random(1))

    schedule = scheduler.generate_season_schedule()
    stats = scheduler.get_schedule_stats(schedule)

    assert len(schedule) == 6
    assert sorted(game.week for game in schedule) == [1, 2, 3, 4, 5, 6]
    assert all(game.field_number == 1 and game.start_time == "8:30 PM" for game in schedule)
    assert {frozenset((g.home_team_id, g.away_team_id)) for g in schedule} == \
        {frozenset(p) for p in combinations(teams, 2)}

    assert sum(stats.bye_weeks_per_team.values()) == 6 * (4 - 2)
    for team_id in teams:
        assert stats.games_per_team[team_id] == 3
        assert stats.bye_weeks_per_team[team_id] >= 2


def test_no_team_plays_twice_in_a_week():
    for count in (2, 3, 4, 5, 7, 8, 11):
        for fields, times in ((1, ["7:00 PM"]), (2, ["7:00 PM", "8:30 PM"]), (3, ["6:00 PM"])):
            config = make_config(fields=fields, times=times, weeks=10)
            scheduler = SeasonScheduler(config, team_names(count), rng=random.Random(count))
            schedule = scheduler.generate_season_schedule()

            assert_no_team_twice_per_week(schedule)
            per_week = defaultdict(int)
            for game in schedule:
                assert 1 <= game.week <= 10
                per_week[game.week] += 1
            assert all(n <= min(config.games_per_week, count // 2) for n in per_week.values())


def test_odd_team_count_leaves_week_under_capacity():
    """Three teams can only fill one game a week even with two slots."""
    scheduler = SeasonScheduler(make_config(fields=2, weeks=4), ["A", "B", "C"], rng=random.Random(3))
    schedule = scheduler.generate_season_schedule()

    per_week = defaultdict(int)
    for game in schedule:
        per_week[game.week] += 1
    assert len(schedule) == 4
    assert all(count == 1 for count in per_week.values())


def test_stats_match_raw_schedule():
    teams = team_names(6)
    scheduler = SeasonScheduler(make_config(fields=2, weeks=8), teams, rng=random.Random(42))
    schedule = scheduler.generate_season_schedule()
    stats = scheduler.get_schedule_stats(schedule)

    assert stats.total_games == len(schedule)
    assert sum(stats.games_per_team.values()) == 2 * len(schedule)

    for team_id in teams:
        appearances = sum(
            (game.home_team_id == team_id) + (game.away_team_id == team_id) for game in schedule
        )
        weeks_played = {game.week for game in schedule if game.involves_team(team_id)}
        assert stats.games_per_team[team_id] == appearances
        assert stats.bye_weeks_per_team[team_id] + len(weeks_played) == 8

    assert stats.max_games_per_team == max(stats.games_per_team.values())
    assert stats.min_games_per_team == min(stats.games_per_team.values())


def test_stats_include_teams_without_games():
    scheduler = SeasonScheduler(make_config(weeks=5), ["A", "B", "C"])
    schedule = [ScheduleGame("A", "B", 1, "8:30 PM", 1)]

    stats = scheduler.get_schedule_stats(schedule)

    assert stats.games_per_team == {"A": 1, "B": 1, "C": 0}
    assert stats.bye_weeks_per_team == {"A": 4, "B": 4, "C": 5}
    assert stats.min_games_per_team == 0
    assert stats.max_games_per_team == 1


def test_stats_with_no_teams():
    scheduler = SeasonScheduler(make_config(), [])
    stats = scheduler.get_schedule_stats([])

    assert stats.total_games == 0
    assert stats.games_per_team == {}
    assert stats.max_games_per_team == 0
    assert stats.min_games_per_team == 0


def test_same_seed_gives_same_schedule():
    teams = team_names(7)
    config = make_config(fields=2, times=["7:00 PM", "8:00 PM"], weeks=12)

    first = SeasonScheduler(config, teams, rng=random.Random(2024)).generate_season_schedule()
    second = SeasonScheduler(config, teams, rng=random.Random(2024)).generate_season_schedule()

    assert first == second


def test_different_seeds_each_give_valid_schedules():
    teams = team_names(8)
    config = make_config(fields=1, times=["7:00 PM", "8:00 PM"], weeks=10)

    for seed in (1, 2, 3):
        scheduler = SeasonScheduler(config, teams, rng=random.Random(seed))
        schedule = scheduler.generate_season_schedule()
        stats = scheduler.get_schedule_stats(schedule)

        assert_no_team_twice_per_week(schedule)
        assert sum(stats.games_per_team.values()) == 2 * len(schedule)
        for team_id in teams:
            weeks = {g.week for g in schedule if g.involves_team(team_id)}
            assert stats.bye_weeks_per_team[team_id] == 10 - len(weeks)


def test_best_matchup_prefers_most_rested_teams():
    scheduler = SeasonScheduler(make_config(), ["A", "B", "C", "D"], rng=FixedRandom(0.0))
    matchups = [Matchup("A", "B"), Matchup("C", "D"), Matchup("A", "C")]
    last_played = {"A": 3, "B": 3, "C": 1, "D": 0}

    assert scheduler.find_best_matchup_for_week(matchups, set(), last_played, 4) == 1
    assert scheduler.find_best_matchup_for_week(matchups, {"C"}, last_played, 4) == 0
    assert scheduler.find_best_matchup_for_week(matchups, {"A", "C"}, last_played, 4) is None


def test_jitter_breaks_ties_only():
    """A rest advantage of two weeks always beats the jitter."""
    scheduler = SeasonScheduler(make_config(), ["A", "B", "C", "D"], rng=FixedRandom(0.999, 0.0))
    matchups = [Matchup("A", "B"), Matchup("C", "D")]
    last_played = {"A": 2, "B": 2, "C": 1, "D": 1}

    assert scheduler.find_best_matchup_for_week(matchups, set(), last_played, 3) == 1


def test_slots_fill_times_before_fields():
    config = make_config(fields=2, times=["6:00 PM", "7:00 PM", "8:00 PM"])
    scheduler = SeasonScheduler(config, team_names(12))
    week = [Matchup(f"T{2 * i + 1}", f"T{2 * i + 2}") for i in range(6)]

    games = scheduler.assign_slots(3, week)

    assert [g.field_number for g in games] == [1, 1, 1, 2, 2, 2]
    assert [g.start_time for g in games] == ["6:00 PM", "7:00 PM", "8:00 PM"] * 2
    assert all(g.week == 3 for g in games)


def test_fewer_than_two_teams_gives_empty_schedule():
    for teams in ([], ["Solo"]):
        scheduler = SeasonScheduler(make_config(), teams)
        assert scheduler.generate_season_schedule() == []
        assert "Need at least 2 teams to create a schedule" in scheduler.validate_scheduling_parameters()


def test_zero_capacity_gives_empty_schedule():
    scheduler = SeasonScheduler(make_config(fields=0), ["A", "B", "C", "D"])

    assert scheduler.generate_season_schedule() == []
    assert scheduler.validate_scheduling_parameters() == ["Need at least 1 field available"]


def test_validate_scheduling_parameters():
    good = SeasonScheduler(make_config(), ["A", "B"])
    assert good.validate_scheduling_parameters() == []

    config = make_config(weeks=0)
    config.game_start_times = []
    bad = SeasonScheduler(config, ["A"])
    assert bad.validate_scheduling_parameters() == [
        "Need at least 2 teams to create a schedule",
        "Need at least 1 game start time",
        "Season must be at least 1 week long",
    ]


def test_duplicate_team_ids_are_ignored():
    scheduler = SeasonScheduler(make_config(), ["A", "B", "A", "C"])
    assert scheduler.team_ids == ["A", "B", "C"]
    assert_no_team_twice_per_week(scheduler.generate_season_schedule())


def test_bye_week_flag():
    config = make_config(fields=1, times=["7:00 PM"])
    assert not SeasonScheduler(config, ["A", "B"]).will_have_bye_weeks
    assert SeasonScheduler(config, ["A", "B", "C"]).will_have_bye_weeks


def test_from_league_uses_active_teams_and_defaults():
    league = League(
        id="L1", name="Tuesday Coed", location="Riverside Park",
        day_of_week="Tuesday", time="7:00 PM", start_date="2025-03-04"
    )
    teams = [
        Team(id="t1", name="Hawks", league_id="L1"),
        Team(id="t2", name="Owls", league_id="L1"),
        Team(id="t3", name="Crows", league_id="L1", is_active=False),
    ]

    scheduler = SeasonScheduler.from_league(league, teams)

    assert scheduler.team_ids == ["t1", "t2"]
    assert scheduler.game_start_times == ["7:00 PM"]
    assert scheduler.available_fields == 1
    assert scheduler.season_weeks == 12


if __name__ == '__main__':
    import pytest
    sys.exit(pytest.main([__file__, "-v"]))
