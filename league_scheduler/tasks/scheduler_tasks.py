"""
Celery tasks for schedule generation.
"""

import traceback
from typing import List, Dict, Optional

from league_scheduler.core.celery_app import celery_app
from league_scheduler.core.logging_config import get_logger
from league_scheduler.services.serializers import config_from_dict, generate_schedule_payload

logger = get_logger(__name__)


@celery_app.task(bind=True, name="generate_schedule")
def generate_schedule_task(self, config_data: Dict, team_ids: List[str], seed: Optional[int] = None):
    """
    Async task to generate a season schedule.

    Args:
        config_data: League schedule config as a JSON dict
        team_ids: Active team ids
        seed: Optional seed for the tie-break jitter

    Returns:
        dict: Schedule payload, or an error result on failure
    """
    try:
        self.update_state(
            state="PROGRESS",
            meta={"status": f"Generating schedule for {len(team_ids)} teams..."}
        )

        config = config_from_dict(config_data)
        return generate_schedule_payload(config, team_ids, seed=seed)

    except Exception as e:
        error_trace = traceback.format_exc()
        logger.error("Error in generate_schedule_task: %s", error_trace)

        return {
            "success": False,
            "message": f"Schedule generation failed: {str(e)}",
            "error": str(e),
            "traceback": error_trace
        }
