"""
Services for schedule generation, date mapping, validation and league storage.
"""

from .scheduler import SeasonScheduler
from .validator import ScheduleValidator
from .league_store import LeagueStore
from .league_scheduling import (
    LeagueSchedulingService, LeagueNotFoundError, SchedulingError
)

__all__ = [
    "SeasonScheduler",
    "ScheduleValidator",
    "LeagueStore",
    "LeagueSchedulingService",
    "LeagueNotFoundError",
    "SchedulingError"
]
