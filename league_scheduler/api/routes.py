"""
API routes for league management and schedule generation.
"""

import random
import uuid
from datetime import datetime, date
from typing import List, Dict, Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from celery.result import AsyncResult

from league_scheduler.models import League, Team, ScheduleGame, LeagueScheduleConfig
from league_scheduler.services.league_store import LeagueStore
from league_scheduler.services.league_scheduling import (
    LeagueSchedulingService, LeagueNotFoundError, SchedulingError
)
from league_scheduler.services.serializers import (
    config_from_dict, config_to_dict, generate_schedule_payload,
    schedule_game_to_dict, stats_to_dict, game_to_dict
)
from league_scheduler.services.date_mapper import calculate_game_dates
from league_scheduler.core.config import DEFAULT_AVAILABLE_FIELDS, DEFAULT_SEASON_WEEKS
from league_scheduler.core.celery_app import celery_app
from league_scheduler.core.logging_config import get_logger
from league_scheduler.tasks.scheduler_tasks import generate_schedule_task

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["schedule"])

# Process-wide store backing the league endpoints
store = LeagueStore()
scheduling_service = LeagueSchedulingService(store)


class ScheduleConfigRequest(BaseModel):
    """League schedule settings."""
    available_fields: int = DEFAULT_AVAILABLE_FIELDS
    game_start_times: Optional[List[str]] = None
    season_weeks: int = DEFAULT_SEASON_WEEKS
    day_of_week: str
    start_date: date


class GenerateScheduleRequest(ScheduleConfigRequest):
    """Request model for stateless schedule generation."""
    team_ids: List[str]
    seed: Optional[int] = None


class LeagueRequest(BaseModel):
    """Request model for creating a league."""
    id: Optional[str] = None
    name: str
    location: str
    day_of_week: str
    time: str
    start_date: date
    end_date: Optional[date] = None
    available_fields: Optional[int] = None
    season_weeks: Optional[int] = None
    game_start_times: List[str] = []


class TeamRequest(BaseModel):
    """Request model for adding a team to a league."""
    id: Optional[str] = None
    name: str
    players: List[str] = []
    captain: str = ""
    is_active: bool = True


class SchedulePreviewRequest(BaseModel):
    """Overrides for the league's saved scheduling settings."""
    available_fields: Optional[int] = None
    season_weeks: Optional[int] = None
    game_start_times: Optional[List[str]] = None
    seed: Optional[int] = None


class ScheduleGameModel(BaseModel):
    home_team_id: str
    away_team_id: str
    week: int
    start_time: str
    field_number: int


class ScheduleConfirmRequest(BaseModel):
    """Request model for saving a previewed schedule."""
    games: List[ScheduleGameModel]
    available_fields: Optional[int] = None
    season_weeks: Optional[int] = None
    game_start_times: Optional[List[str]] = None
    replace_existing: bool = False


def _league_to_dict(league: League) -> Dict[str, Any]:
    return {
        "id": league.id,
        "name": league.name,
        "location": league.location,
        "day_of_week": league.day_of_week.value,
        "time": league.time,
        "start_date": league.start_date.isoformat(),
        "end_date": league.end_date.isoformat() if league.end_date else None,
        "available_fields": league.available_fields,
        "season_weeks": league.season_weeks,
        "game_start_times": list(league.game_start_times),
        "is_active": league.is_active
    }


def _team_to_dict(team: Team) -> Dict[str, Any]:
    return {
        "id": team.id,
        "name": team.name,
        "league_id": team.league_id,
        "players": list(team.players),
        "captain": team.captain,
        "is_active": team.is_active
    }


def _config_from_request(request: ScheduleConfigRequest) -> LeagueScheduleConfig:
    try:
        return config_from_dict({
            "available_fields": request.available_fields,
            "game_start_times": request.game_start_times,
            "season_weeks": request.season_weeks,
            "day_of_week": request.day_of_week,
            "start_date": request.start_date
        })
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _require_league(league_id: str) -> League:
    league = store.get_league(league_id)
    if league is None:
        raise HTTPException(status_code=404, detail=f"League not found: {league_id}")
    return league


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.post("/schedule/generate")
async def generate_schedule(request: GenerateScheduleRequest):
    """
    Generate a season schedule from explicit settings and team ids.

    Nothing is stored; the response carries games with calendar dates,
    per-team statistics and the validation summary.
    """
    config = _config_from_request(request)

    try:
        payload = generate_schedule_payload(config, request.team_ids, seed=request.seed)
    except Exception as e:
        logger.exception("Schedule generation failed")
        raise HTTPException(status_code=500, detail=f"Schedule generation failed: {str(e)}")

    if not payload["success"]:
        raise HTTPException(status_code=400, detail=payload["message"])

    return payload


@router.post("/schedule/async")
async def generate_schedule_async(request: GenerateScheduleRequest):
    """
    Start async schedule generation task.

    Returns:
        dict: Task ID for polling status
    """
    config = _config_from_request(request)

    try:
        task = generate_schedule_task.delay(config_to_dict(config), request.team_ids, request.seed)

        return {
            "task_id": task.id,
            "status": "PENDING",
            "message": "Schedule generation started"
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to start task: {str(e)}")


@router.get("/schedule/status/{task_id}")
async def get_schedule_status(task_id: str):
    """
    Get status of async schedule generation task.

    Args:
        task_id: Celery task ID

    Returns:
        dict: Task status and result (if complete)
    """
    try:
        task_result = AsyncResult(task_id, app=celery_app)

        if task_result.state == "PENDING":
            response = {
                "task_id": task_id,
                "status": "PENDING",
                "message": "Task is waiting to start..."
            }
        elif task_result.state == "PROGRESS":
            response = {
                "task_id": task_id,
                "status": "PROGRESS",
                "message": task_result.info.get("status", "Processing...")
            }
        elif task_result.state == "SUCCESS":
            response = {
                "task_id": task_id,
                "status": "SUCCESS",
                "result": task_result.result
            }
        elif task_result.state == "FAILURE":
            response = {
                "task_id": task_id,
                "status": "FAILURE",
                "message": str(task_result.info)
            }
        else:
            response = {
                "task_id": task_id,
                "status": task_result.state,
                "message": f"Task state: {task_result.state}"
            }

        return response
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {str(e)}")


@router.post("/leagues", status_code=201)
async def create_league(request: LeagueRequest):
    """Create a league."""
    try:
        league = League(
            id=request.id or f"league_{uuid.uuid4().hex[:8]}",
            name=request.name,
            location=request.location,
            day_of_week=request.day_of_week,
            time=request.time,
            start_date=request.start_date,
            end_date=request.end_date,
            available_fields=request.available_fields,
            season_weeks=request.season_weeks,
            game_start_times=request.game_start_times
        )
        store.create_league(league)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _league_to_dict(league)


@router.get("/leagues")
async def get_leagues(active_only: bool = False):
    """List leagues by start date."""
    return [_league_to_dict(league) for league in store.get_leagues(active_only=active_only)]


@router.get("/leagues/{league_id}")
async def get_league(league_id: str):
    return _league_to_dict(_require_league(league_id))


@router.post("/leagues/{league_id}/teams", status_code=201)
async def create_team(league_id: str, request: TeamRequest):
    """Add a team to a league."""
    _require_league(league_id)
    try:
        team = Team(
            id=request.id or f"team_{uuid.uuid4().hex[:8]}",
            name=request.name,
            league_id=league_id,
            players=request.players,
            captain=request.captain,
            is_active=request.is_active
        )
        store.create_team(team)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _team_to_dict(team)


@router.get("/leagues/{league_id}/teams")
async def get_league_teams(league_id: str, active_only: bool = False):
    _require_league(league_id)
    return [_team_to_dict(team) for team in store.get_teams_by_league(league_id, active_only=active_only)]


@router.post("/leagues/{league_id}/schedule/preview")
async def preview_league_schedule(league_id: str, request: SchedulePreviewRequest):
    """
    Generate a schedule preview for a league.

    Uses the league's saved settings unless the request overrides them.
    Nothing is stored until the preview is confirmed.
    """
    service = scheduling_service
    if request.seed is not None:
        service = LeagueSchedulingService(store, rng=random.Random(request.seed))

    try:
        preview = service.preview_schedule(
            league_id,
            available_fields=request.available_fields,
            season_weeks=request.season_weeks,
            game_start_times=request.game_start_times
        )
    except LeagueNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if preview.issues:
        raise HTTPException(status_code=400, detail="; ".join(preview.issues))

    config = preview.league.schedule_config()
    date_map = {gd.game_id: gd for gd in calculate_game_dates(config, preview.schedule)}
    team_names = {team.id: team.name for team in store.get_teams_by_league(league_id)}

    return {
        "league_id": league_id,
        "config": config_to_dict(config),
        "games_per_week": preview.games_per_week,
        "max_teams_per_week": preview.max_teams_per_week,
        "will_have_bye_weeks": preview.will_have_bye_weeks,
        "total_games": len(preview.schedule),
        "games": [schedule_game_to_dict(game, date_map.get(game.game_key)) for game in preview.schedule],
        "stats": stats_to_dict(preview.stats),
        "weeks": [
            {
                "week": summary.week,
                "date": summary.date.isoformat(),
                "games": len(summary.games),
                "bye_teams": [team_names.get(t, t) for t in summary.bye_teams]
            }
            for summary in preview.weeks
        ]
    }


@router.post("/leagues/{league_id}/schedule/confirm", status_code=201)
async def confirm_league_schedule(league_id: str, request: ScheduleConfirmRequest):
    """Save a previewed schedule as league games."""
    schedule = [
        ScheduleGame(
            home_team_id=game.home_team_id,
            away_team_id=game.away_team_id,
            week=game.week,
            start_time=game.start_time,
            field_number=game.field_number
        )
        for game in request.games
    ]

    try:
        games = scheduling_service.confirm_schedule(
            league_id,
            schedule,
            available_fields=request.available_fields,
            season_weeks=request.season_weeks,
            game_start_times=request.game_start_times,
            replace_existing=request.replace_existing
        )
    except LeagueNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SchedulingError as e:
        raise HTTPException(status_code=400, detail=str(e))

    league = store.get_league(league_id)
    return {
        "success": True,
        "message": f"Created {len(games)} games for {league.name}",
        "total_games": len(games),
        "games": [game_to_dict(game) for game in games]
    }


@router.get("/leagues/{league_id}/games")
async def get_league_games(league_id: str):
    _require_league(league_id)
    return [game_to_dict(game) for game in store.get_games_by_league(league_id)]


@router.delete("/leagues/{league_id}/games")
async def delete_league_games(league_id: str):
    _require_league(league_id)
    removed = store.delete_games_by_league(league_id)
    return {"success": True, "deleted": removed}
