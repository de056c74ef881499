from fastapi import APIRouter
from typing import Dict

from flock.dependencies import AvailabilityConfig

router = APIRouter()


@router.get("/health")
async def health(config: AvailabilityConfig) -> Dict[str, str]:
    return {
        "status": "ok",
        "timezone": config.timezone,
        "recurrence_errors": config.recurrence_errors,
    }
