"""
Celery configuration for async schedule generation.
"""

from celery import Celery

from league_scheduler.core.config import REDIS_URL, TASK_TIME_LIMIT_SECONDS

# Create Celery app
celery_app = Celery(
    "league_scheduler",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["league_scheduler.tasks.scheduler_tasks"]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=TASK_TIME_LIMIT_SECONDS,
    task_soft_time_limit=TASK_TIME_LIMIT_SECONDS - 10,
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,
)
