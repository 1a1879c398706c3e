"""
Plain-dict output for generated schedules.
Shared by the API routes and the Celery task so both return the same shape.
"""

import random
from datetime import datetime
from typing import List, Dict, Any, Optional

from league_scheduler.models import (
    LeagueScheduleConfig, ScheduleGame, ScheduleStats, GameDate, Game,
    ScheduleValidationResult
)
from league_scheduler.services.scheduler import SeasonScheduler
from league_scheduler.services.date_mapper import calculate_game_dates
from league_scheduler.services.validator import ScheduleValidator


def config_from_dict(data: Dict[str, Any]) -> LeagueScheduleConfig:
    """Build a config from a JSON-style dict; missing optional keys use defaults."""
    kwargs = {
        "day_of_week": data["day_of_week"],
        "start_date": data["start_date"]
    }
    for key in ("available_fields", "game_start_times", "season_weeks"):
        if data.get(key) is not None:
            kwargs[key] = data[key]
    return LeagueScheduleConfig(**kwargs)


def config_to_dict(config: LeagueScheduleConfig) -> Dict[str, Any]:
    return {
        "available_fields": config.available_fields,
        "game_start_times": list(config.game_start_times),
        "season_weeks": config.season_weeks,
        "day_of_week": config.day_of_week.value,
        "start_date": config.start_date.isoformat()
    }


def schedule_game_to_dict(game: ScheduleGame, game_date: Optional[GameDate] = None) -> Dict[str, Any]:
    data = {
        "id": game.game_key,
        "home_team_id": game.home_team_id,
        "away_team_id": game.away_team_id,
        "week": game.week,
        "start_time": game.start_time,
        "field_number": game.field_number
    }
    if game_date is not None:
        data["date"] = game_date.date.isoformat()
        data["day"] = game_date.date.strftime("%A")
    return data


def stats_to_dict(stats: ScheduleStats) -> Dict[str, Any]:
    return {
        "total_games": stats.total_games,
        "games_per_team": dict(stats.games_per_team),
        "bye_weeks_per_team": dict(stats.bye_weeks_per_team),
        "max_games_per_team": stats.max_games_per_team,
        "min_games_per_team": stats.min_games_per_team
    }


def validation_to_dict(result: ScheduleValidationResult) -> Dict[str, Any]:
    return {
        "is_valid": result.is_valid,
        "hard_violations": len(result.hard_constraint_violations),
        "soft_violations": len(result.soft_constraint_violations),
        "total_penalty": result.total_penalty_score,
        "messages": [
            f"{violation.constraint_type}: {violation.description}"
            for violation in result.hard_constraint_violations + result.soft_constraint_violations
        ]
    }


def game_to_dict(game: Game) -> Dict[str, Any]:
    return {
        "id": game.id,
        "home_team": game.home_team,
        "away_team": game.away_team,
        "league_id": game.league_id,
        "week": game.week,
        "date": game.date.isoformat(),
        "time": game.time,
        "location": game.location,
        "status": game.status.value,
        "home_score": game.home_score,
        "away_score": game.away_score
    }


def generate_schedule_payload(
    config: LeagueScheduleConfig,
    team_ids: List[str],
    seed: Optional[int] = None
) -> Dict[str, Any]:
    """
    Generate, date, validate and summarize a schedule in one call.

    Args:
        config: League schedule config
        team_ids: Active team ids
        seed: Seed for the tie-break jitter; None for a random season

    Returns:
        dict with ``success``, ``issues``, ``games``, ``stats``,
        ``validation`` and ``generation_time``. ``success`` is False and
        ``games`` empty when the parameters are invalid.
    """
    start_time = datetime.now()

    rng = random.Random(seed) if seed is not None else None
    scheduler = SeasonScheduler(config, team_ids, rng=rng)
    issues = scheduler.validate_scheduling_parameters()
    schedule = [] if issues else scheduler.generate_season_schedule()

    date_map = {game_date.game_id: game_date for game_date in calculate_game_dates(config, schedule)}
    validation = ScheduleValidator().validate_schedule(schedule, scheduler.team_ids, config)

    generation_time = (datetime.now() - start_time).total_seconds()

    if issues:
        message = "Cannot generate schedule: " + "; ".join(issues)
    else:
        message = f"Schedule generated successfully with {len(schedule)} games"

    return {
        "success": not issues,
        "message": message,
        "issues": issues,
        "config": config_to_dict(config),
        "games_per_week": scheduler.games_per_week,
        "max_teams_per_week": scheduler.max_teams_per_week,
        "will_have_bye_weeks": scheduler.will_have_bye_weeks,
        "total_games": len(schedule),
        "games": [schedule_game_to_dict(game, date_map.get(game.game_key)) for game in schedule],
        "stats": stats_to_dict(scheduler.get_schedule_stats(schedule)),
        "validation": validation_to_dict(validation),
        "generation_time": generation_time
    }
