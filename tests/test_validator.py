"""
Tests for the schedule validator.
"""

import sys
import os
import random

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from league_scheduler.models import LeagueScheduleConfig, ScheduleGame
from league_scheduler.services.scheduler import SeasonScheduler
from league_scheduler.services.validator import ScheduleValidator


def make_config(fields=1, times=None, weeks=4):
    return LeagueScheduleConfig(
        day_of_week="Thursday",
        start_date="2025-04-03",
        available_fields=fields,
        game_start_times=times or ["7:00 PM"],
        season_weeks=weeks
    )


def violation_types(result):
    return {v.constraint_type for v in result.hard_constraint_violations}


def test_generated_schedules_have_no_hard_violations():
    validator = ScheduleValidator()
    for count in (2, 4, 5, 6, 9):
        teams = [f"team-{i}" for i in range(count)]
        config = make_config(fields=2, times=["6:00 PM", "7:30 PM"], weeks=10)
        schedule = SeasonScheduler(config, teams, rng=random.Random(count)).generate_season_schedule()

        result = validator.validate_schedule(schedule, teams, config)

        assert result.is_valid, result.get_summary()
        assert result.hard_constraint_violations == []


def test_team_double_booking_is_flagged():
    schedule = [
        ScheduleGame("A", "B", 1, "7:00 PM", 1),
        ScheduleGame("A", "C", 1, "8:00 PM", 1),
    ]
    config = make_config(times=["7:00 PM", "8:00 PM"])

    result = ScheduleValidator().validate_schedule(schedule, ["A", "B", "C"], config)

    assert not result.is_valid
    assert violation_types(result) == {"team_double_booking"}
    assert result.hard_constraint_violations[0].affected_teams == ["A"]


def test_slot_conflict_is_flagged():
    schedule = [
        ScheduleGame("A", "B", 1, "7:00 PM", 1),
        ScheduleGame("C", "D", 1, "7:00 PM", 1),
    ]
    config = make_config(fields=2)

    result = ScheduleValidator().validate_schedule(schedule, ["A", "B", "C", "D"], config)

    assert violation_types(result) == {"slot_conflict"}


def test_week_range_and_capacity():
    schedule = [
        ScheduleGame("A", "B", 5, "7:00 PM", 1),
        ScheduleGame("C", "D", 2, "7:00 PM", 1),
        ScheduleGame("A", "E", 2, "7:00 PM", 2),
    ]

    result = ScheduleValidator().validate_schedule(schedule, ["A", "B", "C", "D", "E"], make_config())

    assert "week_out_of_range" in violation_types(result)
    assert "week_over_capacity" in violation_types(result)


def test_unknown_and_self_matchups():
    schedule = [
        ScheduleGame("A", "A", 1, "7:00 PM", 1),
        ScheduleGame("B", "Z", 2, "7:00 PM", 1),
    ]

    result = ScheduleValidator().validate_schedule(schedule, ["A", "B"], make_config())

    assert "self_matchup" in violation_types(result)
    unknown = [v for v in result.hard_constraint_violations if v.constraint_type == "unknown_team"]
    assert len(unknown) == 1
    assert unknown[0].affected_teams == ["Z"]


def test_soft_violations_keep_schedule_valid():
    # A plays three home games and never has a bye; C sits out every week
    schedule = [
        ScheduleGame("A", "B", 1, "7:00 PM", 1),
        ScheduleGame("A", "B", 2, "7:00 PM", 1),
        ScheduleGame("A", "B", 3, "7:00 PM", 1),
    ]

    result = ScheduleValidator().validate_schedule(schedule, ["A", "B", "C"], make_config(weeks=3))

    assert result.is_valid
    soft = {v.constraint_type for v in result.soft_constraint_violations}
    assert soft == {"home_away_imbalance", "bye_week_imbalance"}
    assert result.total_penalty_score > 0


def test_get_team_stats():
    schedule = [
        ScheduleGame("A", "B", 1, "7:00 PM", 1),
        ScheduleGame("C", "A", 3, "7:00 PM", 1),
        ScheduleGame("B", "C", 4, "7:00 PM", 1),
    ]

    stats = ScheduleValidator().get_team_stats("A", schedule, season_weeks=4)

    assert stats.total_games == 2
    assert stats.home_games == 1
    assert stats.away_games == 1
    assert stats.opponents == ["B", "C"]
    assert stats.games_by_week == {1: 1, 3: 1}
    assert stats.bye_weeks == 2
    assert stats.calculate_balance_score() == 0.0


def test_schedule_report_lists_weeks_and_byes():
    schedule = [ScheduleGame("A", "B", 1, "7:00 PM", 1)]

    report = ScheduleValidator().generate_schedule_report(schedule, ["A", "B", "C"], make_config(weeks=2))

    assert "Week 1: 1 games" in report
    assert "Field 1 7:00 PM: B @ A" in report
    assert "Bye: C" in report
    assert "Week 2: 0 games" in report
    assert "Bye: A, B, C" in report
