"""
Command-line entry point for the League Scheduling System.
Generates a season schedule, validates it and prints a report.
"""

import sys
import logging
import argparse
import random
from datetime import datetime
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from league_scheduler.models import LeagueScheduleConfig
from league_scheduler.services.scheduler import SeasonScheduler
from league_scheduler.services.validator import ScheduleValidator
from league_scheduler.services.date_mapper import calculate_game_dates, format_time
from league_scheduler.core.config import (
    DEFAULT_AVAILABLE_FIELDS, DEFAULT_SEASON_WEEKS, DEFAULT_GAME_TIME, DAYS_OF_WEEK
)
from league_scheduler.core.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='League Scheduling System - Generate a season of weekly games'
    )
    parser.add_argument(
        'teams',
        nargs='+',
        help='Team ids to schedule'
    )
    parser.add_argument(
        '--fields',
        type=int,
        default=DEFAULT_AVAILABLE_FIELDS,
        help='Number of fields available each week'
    )
    parser.add_argument(
        '--times',
        nargs='+',
        default=[DEFAULT_GAME_TIME],
        help='Game start times, e.g. "7:00 PM" "20:30"'
    )
    parser.add_argument(
        '--weeks',
        type=int,
        default=DEFAULT_SEASON_WEEKS,
        help='Season length in weeks'
    )
    parser.add_argument(
        '--day',
        default='Saturday',
        choices=DAYS_OF_WEEK,
        help='League game day'
    )
    parser.add_argument(
        '--start-date',
        default=datetime.now().strftime('%Y-%m-%d'),
        help='First possible game date (YYYY-MM-DD)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for a reproducible schedule'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def main(argv=None):
    """
    Generate, validate and print a schedule.
    """
    args = build_parser().parse_args(argv)

    if args.verbose:
        setup_logging(logging.DEBUG)

    print("\n" + "=" * 80)
    print("LEAGUE SCHEDULING SYSTEM")
    print("=" * 80)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 80)

    try:
        config = LeagueScheduleConfig(
            day_of_week=args.day,
            start_date=args.start_date,
            available_fields=args.fields,
            game_start_times=[format_time(t) for t in args.times],
            season_weeks=args.weeks
        )
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    rng = random.Random(args.seed) if args.seed is not None else None
    scheduler = SeasonScheduler(config, args.teams, rng=rng)

    # Step 1: Check parameters
    print("\n[STEP 1] Checking scheduling parameters...")
    issues = scheduler.validate_scheduling_parameters()
    if issues:
        for issue in issues:
            print(f"ERROR: {issue}")
        return 1

    print(f"  - {len(scheduler.team_ids)} teams")
    print(f"  - {scheduler.games_per_week} games per week ({config.available_fields} fields x {len(config.game_start_times)} times)")
    if scheduler.will_have_bye_weeks:
        print(f"  - Up to {scheduler.max_teams_per_week} teams can play each week; some teams will have bye weeks")

    # Step 2: Generate schedule
    print("\n[STEP 2] Generating schedule...")
    schedule = scheduler.generate_season_schedule()
    game_dates = calculate_game_dates(config, schedule)
    print(f"Generated schedule with {len(schedule)} games")

    # Step 3: Validate schedule
    print("\n[STEP 3] Validating schedule...")
    validator = ScheduleValidator()
    validation_result = validator.validate_schedule(schedule, scheduler.team_ids, config)
    print(validation_result.get_summary())

    # Step 4: Report
    print("[STEP 4] Schedule report...")
    print(validator.generate_schedule_report(schedule, scheduler.team_ids, config))

    print("\nGame Dates:")
    for game_date in game_dates:
        print(f"  {game_date.date.isoformat()} {game_date.time}  {game_date.game_id}")

    stats = scheduler.get_schedule_stats(schedule)
    print("\n" + "=" * 80)
    print("SCHEDULING COMPLETE")
    print("=" * 80)
    print(f"Total games scheduled: {stats.total_games}")
    print(f"Games per team: {stats.min_games_per_team} - {stats.max_games_per_team}")
    print(f"Schedule valid: {'Yes' if validation_result.is_valid else 'No (with violations)'}")
    print("=" * 80)

    return 0 if validation_result.is_valid else 1


if __name__ == '__main__':
    sys.exit(main())
