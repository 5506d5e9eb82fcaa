"""Application sessions backed by a server-side store

The browser only ever holds the opaque session id, in a Secure, HttpOnly,
host-only cookie scoped to "/". Tokens stay on the server.
"""

import logging
import secrets
import threading
import time
from typing import Any, Callable, Dict, Optional

from .models import IdentityProfile, Session
from .token_exchange import TokenResponse

logger = logging.getLogger(__name__)


class SessionStore:
    """Thread-safe in-memory session table with lazy expiry"""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}

    def establish(self, tokens: TokenResponse, profile: IdentityProfile) -> Session:
        """Create a session from a successful token exchange

        Args:
            tokens: Token response from the provider
            profile: Identity fetched with the access token

        Returns:
            The stored Session
        """
        session = Session(
            session_id=secrets.token_urlsafe(32),
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_at=self._clock() + tokens.expires_in,
            subject_id=profile.external_id,
            handle=profile.handle,
        )
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info(f"Session established for @{profile.handle} (expires in {tokens.expires_in}s)")
        return session

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        if not session_id:
            return None
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and session.is_expired(self._clock()):
                del self._sessions[session_id]
                session = None
        return session

    def destroy(self, session_id: Optional[str]) -> Optional[Session]:
        """Remove a session, returning it if it existed"""
        if not session_id:
            return None
        with self._lock:
            return self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
        return len(expired)

    def status(self, session_id: Optional[str]) -> Dict[str, Any]:
        """Session status without exposing secrets"""
        session = self.get(session_id)
        if session is None:
            return {"authenticated": False, "subject_id": None, "handle": None, "expires_in_seconds": 0}
        return {
            "authenticated": True,
            "subject_id": session.subject_id,
            "handle": session.handle,
            "expires_in_seconds": session.max_age(self._clock()),
        }


async def logout(session_id: Optional[str], sessions: SessionStore, provider_client) -> bool:
    """Destroy the local session and try to revoke its tokens

    Local logout always succeeds; revocation failures are only logged.

    Returns:
        True if a session existed
    """
    session = sessions.destroy(session_id)
    if session is None:
        return False

    try:
        revoked = await provider_client.revoke(session.access_token, session.refresh_token)
    except Exception as e:
        logger.warning(f"Token revocation raised during logout: {e}")
        revoked = False

    if not revoked:
        logger.warning(f"Provider-side revocation failed for @{session.handle}; local session removed")
    logger.info(f"Logged out @{session.handle}")
    return True
