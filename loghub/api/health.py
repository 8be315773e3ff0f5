"""
Health check endpoints - no authentication required
"""

from fastapi import APIRouter

from ..config import API_VERSION

router = APIRouter()

@router.get("/health", include_in_schema=False)
async def health():
    return {"status": "ok", "service": "loghub-query", "version": API_VERSION}

# Optional probe for kube/docker HEALTHCHECKs:
@router.get("/healthz", include_in_schema=False)
async def healthz():
    return {"status": "ok"}
