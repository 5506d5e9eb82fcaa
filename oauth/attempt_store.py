"""Short-lived, single-use store for pending authentication attempts

The store is the only state shared between the start and callback
requests. Consumption is a get-and-delete under a lock, so two callbacks
racing on the same state cannot both receive the attempt.
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional

import settings
from .models import AuthAttempt
from .pkce import create_state, generate_pkce

logger = logging.getLogger(__name__)


class PendingAuthStore:
    """In-memory, TTL-keyed store of AuthAttempt records

    Consumed states are remembered for one TTL so that a replay can be told
    apart from an unknown or expired state.
    """

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.AUTH_ATTEMPT_TTL
        self._clock = clock
        self._lock = threading.Lock()
        self._attempts: Dict[str, AuthAttempt] = {}
        self._consumed: Dict[str, float] = {}

    def generate_attempt(
        self,
        target_entry_id: Optional[str] = None,
        target_entry_slug: Optional[str] = None,
    ) -> AuthAttempt:
        """Create and store a new attempt

        Args:
            target_entry_id: Catalog entry the user wants to claim
            target_entry_slug: Slug of the entry, used for redirects

        Returns:
            The stored AuthAttempt
        """
        pkce = generate_pkce()
        now = self._clock()

        with self._lock:
            state = create_state()
            # 256-bit states do not collide in practice; regenerate anyway
            while state in self._attempts or state in self._consumed:
                state = create_state()

            attempt = AuthAttempt(
                state=state,
                code_verifier=pkce.verifier,
                code_challenge=pkce.challenge,
                created_at=now,
                expires_at=now + self.ttl_seconds,
                target_entry_id=target_entry_id or None,
                target_entry_slug=target_entry_slug or None,
            )
            self._attempts[state] = attempt

        logger.debug(
            f"Created auth attempt {state[:8]}... "
            f"(entry={attempt.target_entry_id}, ttl={self.ttl_seconds}s)"
        )
        return attempt

    def consume_attempt(self, state: str) -> Optional[AuthAttempt]:
        """Atomically fetch and delete an attempt

        Args:
            state: State value returned by the provider

        Returns:
            The attempt, or None when it is unknown, already consumed or expired
        """
        if not state:
            return None

        now = self._clock()
        with self._lock:
            attempt = self._attempts.pop(state, None)
            if attempt is None:
                return None
            if attempt.is_expired(now):
                logger.info(f"Auth attempt {state[:8]}... expired before callback")
                return None
            self._consumed[state] = now
        return attempt

    def was_consumed(self, state: str) -> bool:
        """Whether the state was consumed within the last TTL"""
        if not state:
            return False
        with self._lock:
            consumed_at = self._consumed.get(state)
        return consumed_at is not None and self._clock() - consumed_at <= self.ttl_seconds

    def purge_expired(self) -> int:
        """Drop expired attempts and stale consumed markers

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._lock:
            expired = [s for s, a in self._attempts.items() if a.is_expired(now)]
            for state in expired:
                del self._attempts[state]
            stale = [s for s, t in self._consumed.items() if now - t > self.ttl_seconds]
            for state in stale:
                del self._consumed[state]

        removed = len(expired) + len(stale)
        if removed:
            logger.debug(f"Purged {len(expired)} expired attempts and {len(stale)} consumed markers")
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts)
