"""Dependency injection for FastAPI endpoints.

This module provides FastAPI dependencies for the settings the
availability endpoints read, so tests can override them per request.

Usage in controllers:
    from flock.dependencies import AvailabilityConfig

    @router.get("/example")
    async def example(config: AvailabilityConfig):
        return {"slot_minutes": config.slot_minutes}
"""

from typing import Annotated

from fastapi import Depends

from flock.config import AvailabilitySettings, get_settings


def get_availability_settings() -> AvailabilitySettings:
    """Get the availability engine settings.

    Returns:
        The cached AvailabilitySettings instance.
    """
    return get_settings().availability


AvailabilityConfig = Annotated[AvailabilitySettings, Depends(get_availability_settings)]
