"""
League scheduling workflow.
Previews a season for a stored league and turns an approved preview into
Game records.
"""

import random
import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Dict, Optional

from league_scheduler.models import (
    League, Game, GameStatus, GameDate, ScheduleGame, ScheduleStats
)
from league_scheduler.services.scheduler import SeasonScheduler
from league_scheduler.services.date_mapper import calculate_game_dates, get_next_game_dates
from league_scheduler.services.league_store import LeagueStore
from league_scheduler.services.validator import ScheduleValidator
from league_scheduler.core.config import GAME_LOCATION_FORMAT
from league_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)


class LeagueNotFoundError(LookupError):
    pass


class SchedulingError(ValueError):
    pass


@dataclass
class WeekSummary:
    week: int
    date: date
    games: List[ScheduleGame] = field(default_factory=list)
    bye_teams: List[str] = field(default_factory=list)


@dataclass
class SchedulePreview:
    league: League
    team_ids: List[str]
    schedule: List[ScheduleGame]
    stats: ScheduleStats
    issues: List[str]
    games_per_week: int
    max_teams_per_week: int
    will_have_bye_weeks: bool
    weeks: List[WeekSummary] = field(default_factory=list)


def build_game_records(
    league: League,
    schedule: List[ScheduleGame],
    game_dates: List[GameDate]
) -> List[Game]:
    """
    Turn generated games into Game records for the store.

    Dates are joined through the ``{home}_{away}_w{week}`` key. A game with
    no matching date record falls back to today.
    """
    date_map: Dict[str, GameDate] = {game_date.game_id: game_date for game_date in game_dates}

    games = []
    for schedule_game in schedule:
        date_info = date_map.get(schedule_game.game_key)
        games.append(Game(
            id=f"game_{uuid.uuid4().hex[:12]}",
            home_team=schedule_game.home_team_id,
            away_team=schedule_game.away_team_id,
            league_id=league.id,
            week=schedule_game.week,
            date=date_info.date if date_info else date.today(),
            time=schedule_game.start_time,
            location=GAME_LOCATION_FORMAT.format(
                location=league.location,
                field_number=schedule_game.field_number or 1
            ),
            status=GameStatus.SCHEDULED
        ))
    return games


class LeagueSchedulingService:
    """Runs the admin scheduling flow against a LeagueStore."""

    def __init__(self, store: LeagueStore, rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng

    def _get_league(self, league_id: str) -> League:
        league = self.store.get_league(league_id)
        if league is None:
            raise LeagueNotFoundError(f"League not found: {league_id}")
        return league

    def _apply_overrides(
        self,
        league: League,
        available_fields: Optional[int],
        season_weeks: Optional[int],
        game_start_times: Optional[List[str]]
    ) -> League:
        """Copy of the league with any provided scheduling settings applied."""
        changes = {}
        if available_fields is not None:
            changes["available_fields"] = available_fields
        if season_weeks is not None:
            changes["season_weeks"] = season_weeks
        if game_start_times is not None:
            changes["game_start_times"] = list(dict.fromkeys(game_start_times))
        return replace(league, **changes) if changes else league

    def preview_schedule(
        self,
        league_id: str,
        available_fields: Optional[int] = None,
        season_weeks: Optional[int] = None,
        game_start_times: Optional[List[str]] = None
    ) -> SchedulePreview:
        """
        Generate a schedule for a league without saving anything.

        Args:
            league_id: League to schedule
            available_fields: Override for the league's field count
            season_weeks: Override for the league's season length
            game_start_times: Override for the league's start times

        Returns:
            SchedulePreview. When parameters are invalid, ``issues`` is
            non-empty and the schedule is empty.

        Raises:
            LeagueNotFoundError: If the league does not exist
        """
        league = self._apply_overrides(
            self._get_league(league_id), available_fields, season_weeks, game_start_times
        )
        teams = self.store.get_teams_by_league(league_id)
        scheduler = SeasonScheduler.from_league(league, teams, rng=self.rng)

        issues = scheduler.validate_scheduling_parameters()
        schedule = [] if issues else scheduler.generate_season_schedule()
        stats = scheduler.get_schedule_stats(schedule)

        if issues:
            logger.info("Cannot preview schedule for %s: %s", league_id, "; ".join(issues))

        return SchedulePreview(
            league=league,
            team_ids=scheduler.team_ids,
            schedule=schedule,
            stats=stats,
            issues=issues,
            games_per_week=scheduler.games_per_week,
            max_teams_per_week=scheduler.max_teams_per_week,
            will_have_bye_weeks=scheduler.will_have_bye_weeks,
            weeks=self._summarize_weeks(league, scheduler.team_ids, schedule)
        )

    def _summarize_weeks(self, league: League, team_ids: List[str], schedule: List[ScheduleGame]) -> List[WeekSummary]:
        if not schedule:
            return []

        config = league.schedule_config()
        week_dates = get_next_game_dates(config.start_date, config.day_of_week, config.season_weeks)

        summaries = []
        for week, week_date in enumerate(week_dates, start=1):
            week_games = [game for game in schedule if game.week == week]
            playing = {t for game in week_games for t in (game.home_team_id, game.away_team_id)}
            summaries.append(WeekSummary(
                week=week,
                date=week_date,
                games=week_games,
                bye_teams=[t for t in team_ids if t not in playing]
            ))
        return summaries

    def confirm_schedule(
        self,
        league_id: str,
        schedule: List[ScheduleGame],
        available_fields: Optional[int] = None,
        season_weeks: Optional[int] = None,
        game_start_times: Optional[List[str]] = None,
        replace_existing: bool = False
    ) -> List[Game]:
        """
        Save a previewed schedule as Game records.

        The scheduling settings are saved onto the league first so later
        previews start from them.

        Args:
            league_id: League the schedule belongs to
            schedule: Games returned by a preview
            replace_existing: Delete the league's current games first

        Returns:
            The created Game records

        Raises:
            LeagueNotFoundError: If the league does not exist
            SchedulingError: If the schedule is empty or has hard conflicts
        """
        if not schedule:
            raise SchedulingError("Cannot create games from an empty schedule")

        league = self._apply_overrides(
            self._get_league(league_id), available_fields, season_weeks, game_start_times
        )
        config = league.schedule_config()
        team_ids = [team.id for team in self.store.get_teams_by_league(league_id, active_only=True)]

        validation = ScheduleValidator().validate_schedule(schedule, team_ids, config)
        if not validation.is_valid:
            problems = "; ".join(v.description for v in validation.hard_constraint_violations[:5])
            raise SchedulingError(f"Schedule has conflicts: {problems}")

        self.store.update_league(league)

        game_dates = calculate_game_dates(config, schedule)
        games = build_game_records(league, schedule, game_dates)

        if replace_existing:
            removed = self.store.delete_games_by_league(league_id)
            logger.info("Removed %d existing games for league %s", removed, league_id)

        self.store.create_games(games)
        logger.info("Created %d games for %s", len(games), league.name)
        return games
