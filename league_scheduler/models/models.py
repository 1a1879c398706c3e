"""
Data models for the League Scheduling System.
Defines all data structures used throughout the application.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from typing import List, Optional, Dict
from enum import Enum

from league_scheduler.core.config import (
    DEFAULT_AVAILABLE_FIELDS, DEFAULT_SEASON_WEEKS, DEFAULT_GAME_TIME
)


class DayOfWeek(Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def weekday(self) -> int:
        """Python weekday index (Monday=0, Sunday=6)."""
        return list(DayOfWeek).index(self)

    @classmethod
    def parse(cls, value) -> 'DayOfWeek':
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for day in cls:
                if day.value.lower() == value.strip().lower():
                    return day
        raise ValueError(f"Invalid day of week: {value!r}")


class GameStatus(Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


def parse_date(date_input) -> date:
    """Parse a date from an ISO string or date object."""
    if isinstance(date_input, datetime):
        return date_input.date()
    if isinstance(date_input, date):
        return date_input
    if isinstance(date_input, str):
        return datetime.strptime(date_input.strip(), '%Y-%m-%d').date()
    raise ValueError(f"Invalid date: {date_input!r}")


@dataclass
class LeagueScheduleConfig:
    day_of_week: DayOfWeek
    start_date: date
    available_fields: int = DEFAULT_AVAILABLE_FIELDS
    game_start_times: List[str] = field(default_factory=lambda: [DEFAULT_GAME_TIME])
    season_weeks: int = DEFAULT_SEASON_WEEKS

    def __post_init__(self):
        self.day_of_week = DayOfWeek.parse(self.day_of_week)
        self.start_date = parse_date(self.start_date)
        # A repeated time would put two games in the same field slot
        self.game_start_times = list(dict.fromkeys(self.game_start_times))

    @property
    def games_per_week(self) -> int:
        return max(0, self.available_fields) * len(self.game_start_times)

    @property
    def max_teams_per_week(self) -> int:
        return self.games_per_week * 2


@dataclass(frozen=True)
class Matchup:
    home: str
    away: str

    def __post_init__(self):
        if self.home == self.away:
            raise ValueError(f"A team cannot play itself: {self.home!r}")

    def swapped(self) -> 'Matchup':
        return Matchup(home=self.away, away=self.home)

    def involves(self, team_id: str) -> bool:
        return self.home == team_id or self.away == team_id


@dataclass(frozen=True)
class ScheduleGame:
    home_team_id: str
    away_team_id: str
    week: int
    start_time: str
    field_number: int

    @property
    def game_key(self) -> str:
        """Composite key used to join date records back to games."""
        return f"{self.home_team_id}_{self.away_team_id}_w{self.week}"

    def involves_team(self, team_id: str) -> bool:
        return self.home_team_id == team_id or self.away_team_id == team_id

    def is_home_game(self, team_id: str) -> bool:
        return self.home_team_id == team_id

    def get_opponent(self, team_id: str) -> Optional[str]:
        if self.home_team_id == team_id:
            return self.away_team_id
        elif self.away_team_id == team_id:
            return self.home_team_id
        return None


@dataclass
class ScheduleStats:
    total_games: int
    games_per_team: Dict[str, int] = field(default_factory=dict)
    bye_weeks_per_team: Dict[str, int] = field(default_factory=dict)
    max_games_per_team: int = 0
    min_games_per_team: int = 0


@dataclass(frozen=True)
class GameDate:
    game_id: str
    date: date
    time: str


@dataclass
class League:
    id: str
    name: str
    location: str
    day_of_week: DayOfWeek
    time: str
    start_date: date
    end_date: Optional[date] = None
    available_fields: Optional[int] = None
    season_weeks: Optional[int] = None
    game_start_times: List[str] = field(default_factory=list)
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        self.day_of_week = DayOfWeek.parse(self.day_of_week)
        self.start_date = parse_date(self.start_date)
        if self.end_date is not None:
            self.end_date = parse_date(self.end_date)

    def schedule_config(self) -> LeagueScheduleConfig:
        """Build the scheduling config, falling back to league defaults for unset values."""
        return LeagueScheduleConfig(
            day_of_week=self.day_of_week,
            start_date=self.start_date,
            available_fields=(
                DEFAULT_AVAILABLE_FIELDS if self.available_fields is None else self.available_fields
            ),
            game_start_times=self.game_start_times or [self.time],
            season_weeks=DEFAULT_SEASON_WEEKS if self.season_weeks is None else self.season_weeks
        )

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, League):
            return self.id == other.id
        return False


@dataclass
class Team:
    id: str
    name: str
    league_id: str
    players: List[str] = field(default_factory=list)
    captain: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Team):
            return self.id == other.id
        return False


@dataclass
class Game:
    id: str
    home_team: str
    away_team: str
    league_id: str
    week: int
    date: date
    time: str
    location: str
    status: GameStatus = GameStatus.SCHEDULED
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.now)

    def __str__(self):
        return f"{self.away_team} @ {self.home_team} on {self.date} {self.time} at {self.location}"

    def involves_team(self, team_id: str) -> bool:
        return self.home_team == team_id or self.away_team == team_id


@dataclass
class SchedulingConstraint:
    constraint_type: str
    severity: str
    description: str
    affected_teams: List[str] = field(default_factory=list)
    affected_games: List[ScheduleGame] = field(default_factory=list)
    penalty_score: float = 0.0


@dataclass
class ScheduleValidationResult:
    is_valid: bool
    hard_constraint_violations: List[SchedulingConstraint] = field(default_factory=list)
    soft_constraint_violations: List[SchedulingConstraint] = field(default_factory=list)
    total_penalty_score: float = 0.0

    def add_violation(self, constraint: SchedulingConstraint):
        if constraint.severity == 'hard':
            self.hard_constraint_violations.append(constraint)
            self.is_valid = False
        else:
            self.soft_constraint_violations.append(constraint)
        self.total_penalty_score += constraint.penalty_score

    def get_summary(self) -> str:
        summary = f"Schedule Valid: {self.is_valid}\n"
        summary += f"Hard Violations: {len(self.hard_constraint_violations)}\n"
        summary += f"Soft Violations: {len(self.soft_constraint_violations)}\n"
        summary += f"Total Penalty Score: {self.total_penalty_score:.2f}\n"
        return summary


@dataclass
class TeamScheduleStats:
    team_id: str
    total_games: int = 0
    home_games: int = 0
    away_games: int = 0
    bye_weeks: int = 0
    games_by_week: Dict[int, int] = field(default_factory=dict)
    opponents: List[str] = field(default_factory=list)

    def calculate_balance_score(self) -> float:
        if self.total_games == 0:
            return 0.0
        ideal_split = self.total_games / 2.0
        return abs(self.home_games - ideal_split) + abs(self.away_games - ideal_split)
