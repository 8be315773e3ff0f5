"""
Feature flags API for runtime configuration management
"""

from fastapi import APIRouter, HTTPException, Request
import logging

from ..config import runtime_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

@router.get("/featureflags")
async def get_feature_flags():
    """Get current feature flags"""
    return runtime_config.get_all()

@router.patch("/featureflags")
async def update_feature_flags(request: Request):
    """Update feature flags (in memory, not persisted)"""
    try:
        payload = await request.json()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid feature flags payload: {e}")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid feature flags payload: expected an object")

    before_state = runtime_config.get_all()
    runtime_config.update(payload)
    after_state = runtime_config.get_all()

    for flag_name, new_value in after_state.items():
        if before_state[flag_name] != new_value:
            logger.info("feature flag %s changed %s -> %s", flag_name, before_state[flag_name], new_value,
                        extra={"component": "admin"})
    return after_state
