"""
Data models for the scheduling system.
"""

from .models import (
    DayOfWeek,
    GameStatus,
    LeagueScheduleConfig,
    Matchup,
    ScheduleGame,
    ScheduleStats,
    GameDate,
    League,
    Team,
    Game,
    SchedulingConstraint,
    ScheduleValidationResult,
    TeamScheduleStats,
    parse_date
)

__all__ = [
    "DayOfWeek",
    "GameStatus",
    "LeagueScheduleConfig",
    "Matchup",
    "ScheduleGame",
    "ScheduleStats",
    "GameDate",
    "League",
    "Team",
    "Game",
    "SchedulingConstraint",
    "ScheduleValidationResult",
    "TeamScheduleStats",
    "parse_date"
]
