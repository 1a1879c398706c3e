"""
Configuration constants for the League Scheduling System.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# League Defaults (applied when a league has no scheduling settings saved)
DEFAULT_AVAILABLE_FIELDS = int(os.getenv("DEFAULT_AVAILABLE_FIELDS", "1"))
DEFAULT_SEASON_WEEKS = int(os.getenv("DEFAULT_SEASON_WEEKS", "12"))
DEFAULT_GAME_TIME = os.getenv("DEFAULT_GAME_TIME", "8:30 PM")

# Days of Week (Python weekday() order: Monday=0 ... Sunday=6)
DAYS_OF_WEEK = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday"
]

# Week Distribution
# Upper bound (exclusive) of the random tie-break added to a matchup's rest score
MAX_REST_JITTER = 2.0
MIN_TEAMS_PER_SCHEDULE = 2

# Schedule Audit Rules
MAX_HOME_AWAY_IMBALANCE = 2
MAX_BYE_WEEK_SPREAD = 1

PENALTY_WEIGHTS = {
    "team_double_booking": 2000.0,   # Team plays twice in the same week
    "slot_conflict": 1500.0,          # Field/time used twice in the same week
    "week_out_of_range": 1000.0,      # Game outside the season
    "self_matchup": 1000.0,           # Home and away are the same team
    "unknown_team": 800.0,            # Team is not an active league team
    "week_over_capacity": 500.0,      # More games than fields x times
    "home_away_imbalance": 10.0,      # Per game of imbalance
    "bye_week_imbalance": 25.0        # Per week of spread beyond the limit
}

# Game Records
GAME_LOCATION_FORMAT = "{location} - Field {field_number}"

# API Settings
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8081").split(",")
    if origin.strip()
]

# Async Task Settings
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
TASK_TIME_LIMIT_SECONDS = 120

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
