"""
FastAPI application factory.
"""
import asyncio
import contextlib
import logging
from typing import Optional

from fastapi import FastAPI

from .context import AppContext
from .endpoints import auth_router, claims_router, health_router
from .middleware import log_requests_middleware

logger = logging.getLogger(__name__)

# Store hygiene only; expiry is enforced at consumption time
SWEEP_INTERVAL_SECONDS = 300


async def _sweep_forever(context: AppContext) -> None:
    while True:
        await asyncio.sleep(SWEEP_INTERVAL_SECONDS)
        removed = context.store.purge_expired() + context.sessions.purge_expired()
        if removed:
            logger.debug(f"Sweep removed {removed} expired records")


def create_app(context: Optional[AppContext] = None, sweep: bool = True) -> FastAPI:
    """Build the application

    Args:
        context: Pre-built components (tests); built from settings at startup otherwise
        sweep: Run the periodic expired-record sweep while serving
    """

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "context", None) is None:
            app.state.context = AppContext.build()
        sweeper = asyncio.create_task(_sweep_forever(app.state.context)) if sweep else None
        logger.debug("Claim service started")
        try:
            yield
        finally:
            if sweeper is not None:
                sweeper.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await sweeper
            await app.state.context.aclose()
            logger.debug("Claim service stopped")

    app = FastAPI(title="GameLab Creator Claims", version="1.0.0", lifespan=lifespan)
    app.state.context = context

    app.middleware("http")(log_requests_middleware)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(claims_router)
    return app


# Module-level instance for `uvicorn web.app:app`
app = create_app()
