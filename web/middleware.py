"""
FastAPI middleware for request logging and timing.
"""
import time
import logging
from fastapi import Request

logger = logging.getLogger(__name__)

LOGGED_PREFIXES = ("/auth/", "/claims/")


async def log_requests_middleware(request: Request, call_next):
    """Log method, path, status and duration for flow endpoints

    Query strings are left out: they carry codes and state.
    """
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    if request.url.path.startswith(LOGGED_PREFIXES):
        logger.info(f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")

    return response
