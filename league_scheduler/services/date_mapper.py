"""
Calendar helpers for generated schedules.
Maps schedule weeks onto real dates for a league's game day.
"""

import re
from collections import defaultdict
from datetime import date, timedelta
from typing import List, Dict

from league_scheduler.models import (
    DayOfWeek, GameDate, League, LeagueScheduleConfig, ScheduleGame, parse_date
)

TWELVE_HOUR_PATTERN = re.compile(r'^\d{1,2}:\d{2}\s?(AM|PM)$', re.IGNORECASE)
TWENTY_FOUR_HOUR_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')


def first_game_date(start_date, day_of_week) -> date:
    """First date on or after ``start_date`` that falls on ``day_of_week``."""
    start = parse_date(start_date)
    target = DayOfWeek.parse(day_of_week)
    return start + timedelta(days=(target.weekday - start.weekday()) % 7)


def calculate_game_dates(config: LeagueScheduleConfig, schedule: List[ScheduleGame]) -> List[GameDate]:
    """
    Calculate calendar dates for scheduled games.

    Week 1 is the first league game day on or after the start date and each
    following week is exactly 7 days later. Every game in a week shares that
    week's date; the time is copied from the game itself.

    Args:
        config: League schedule config (start date and game day are used)
        schedule: Generated games

    Returns:
        One GameDate per game, ordered by week, keyed by
        ``{home}_{away}_w{week}``.
    """
    first_date = first_game_date(config.start_date, config.day_of_week)

    games_by_week: Dict[int, List[ScheduleGame]] = defaultdict(list)
    for game in schedule:
        games_by_week[game.week].append(game)

    game_dates = []
    for week in sorted(games_by_week.keys()):
        week_date = first_date + timedelta(days=(week - 1) * 7)
        for game in games_by_week[week]:
            game_dates.append(GameDate(
                game_id=game.game_key,
                date=week_date,
                time=game.start_time
            ))

    return game_dates


def get_next_game_dates(start_date, day_of_week, number_of_weeks: int) -> List[date]:
    """Get the next ``number_of_weeks`` dates for a given day of the week."""
    first_date = first_game_date(start_date, day_of_week)
    return [first_date + timedelta(days=i * 7) for i in range(max(0, number_of_weeks))]


def format_time(time_string: str) -> str:
    """
    Normalize a time string to "H:MM AM/PM".

    12-hour input is upper-cased, 24-hour input is converted. Anything else
    is returned stripped but otherwise unchanged.
    """
    value = time_string.strip()

    if TWELVE_HOUR_PATTERN.match(value):
        return value.upper()

    match = TWENTY_FOUR_HOUR_PATTERN.match(value)
    if match:
        hours = int(match.group(1))
        minutes = match.group(2)
        ampm = "PM" if hours >= 12 else "AM"
        display_hours = hours - 12 if hours > 12 else (12 if hours == 0 else hours)
        return f"{display_hours}:{minutes} {ampm}"

    return value


def calculate_season_duration(start_date, end_date) -> int:
    """Number of days between two dates (order does not matter)."""
    return abs((parse_date(end_date) - parse_date(start_date)).days)


def is_date_in_season(check_date, league: League) -> bool:
    day = parse_date(check_date)
    if day < league.start_date:
        return False
    if league.end_date is not None and day > league.end_date:
        return False
    return True


def get_week_number(game_date, season_start_date) -> int:
    """1-based week of the season that ``game_date`` falls in."""
    days_diff = (parse_date(game_date) - parse_date(season_start_date)).days
    return days_diff // 7 + 1
