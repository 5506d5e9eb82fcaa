"""
Routers for the claim service.
"""
from .auth import router as auth_router
from .claims import router as claims_router
from .health import router as health_router

__all__ = [
    'auth_router',
    'claims_router',
    'health_router',
]
