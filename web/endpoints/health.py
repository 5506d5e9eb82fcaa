"""
Health check endpoints.
"""
import time
from fastapi import APIRouter, Depends

from web.context import AppContext, get_context

router = APIRouter()


@router.get("/health")
async def health_check(context: AppContext = Depends(get_context)):
    """Health check endpoint with pending attempt count"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "pending_attempts": len(context.store),
    }


@router.get("/healthz")
async def healthz_check():
    """Liveness probe (Kubernetes style)"""
    return {"status": "ok", "timestamp": time.time()}
