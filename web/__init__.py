"""
HTTP surface of the creator claim service.
"""
from .app import create_app
from .context import AppContext
from .server import ClaimServer

__version__ = "1.0.0"

__all__ = [
    'AppContext',
    'ClaimServer',
    'create_app',
]
