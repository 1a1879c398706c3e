"""
Main FastAPI application for the League Scheduling System.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from league_scheduler.api import routes
from league_scheduler.core.config import CORS_ORIGINS
from league_scheduler.core.logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="League Scheduling API",
    description="API for managing club leagues and generating season schedules",
    version="1.0.0"
)

# Enable CORS for the mobile/web clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "League Scheduling API",
        "version": "1.0.0",
        "endpoints": {
            "generate": "/api/schedule/generate",
            "leagues": "/api/leagues",
            "health": "/api/health"
        }
    }
