"""
OAuth callback handling as an explicit state machine

    RECEIVED -> STATE_VALIDATED -> CODE_EXCHANGED -> PROFILE_FETCHED -> COMPLETED

with FAILED reachable from every state. Nothing here is retried: the state
is consumed once and the authorization code is spent by the first exchange,
so every failure means restarting from the authorization redirect.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .attempt_store import PendingAuthStore
from .client import ProviderClient
from .errors import FailureReason, error_page_redirect, failure_redirect, sign_in_success_redirect
from .models import AuthAttempt, IdentityProfile, Session
from .session import SessionStore

if TYPE_CHECKING:
    from claims.service import ClaimService

logger = logging.getLogger(__name__)


class FlowState(str, Enum):
    RECEIVED = "received"
    STATE_VALIDATED = "state_validated"
    CODE_EXCHANGED = "code_exchanged"
    PROFILE_FETCHED = "profile_fetched"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class CallbackResult:
    """Outcome of one callback

    Attributes:
        state: Terminal state, COMPLETED or FAILED
        redirect_target: Where the browser goes next
        reason: Failure reason, None on success
        failed_at: Last state reached before failing
        profile: Identity, once fetched
        session: Session, when one was established
        claimed: True when a targeted entry was claimed
    """
    state: FlowState
    redirect_target: str
    reason: Optional[FailureReason] = None
    failed_at: Optional[FlowState] = None
    profile: Optional[IdentityProfile] = None
    session: Optional[Session] = None
    claimed: bool = False

    @property
    def success(self) -> bool:
        return self.state is FlowState.COMPLETED


class CallbackHandler:
    """Validates a provider callback and drives exchange, profile and claim"""

    def __init__(
        self,
        store: PendingAuthStore,
        provider_client: ProviderClient,
        sessions: SessionStore,
        claims: "ClaimService",
    ):
        self.store = store
        self.provider_client = provider_client
        self.sessions = sessions
        self.claims = claims

    async def handle(
        self,
        code: Optional[str],
        state: Optional[str],
        error: Optional[str] = None,
        error_description: Optional[str] = None,
        expected_state: Optional[str] = None,
    ) -> CallbackResult:
        """Process one callback request

        Args:
            code: Authorization code query parameter
            state: State query parameter
            error: Provider-reported error code
            error_description: Provider-reported error text, logged only
            expected_state: State bound to the browser (cookie), if any

        Returns:
            CallbackResult with the redirect target
        """
        current = FlowState.RECEIVED
        attempt: Optional[AuthAttempt] = None
        try:
            if error:
                logger.warning(f"Provider returned error {error!r}: {error_description or ''}")
                return self._fail(FailureReason.PROVIDER_DENIED, current)

            if expected_state and state and expected_state != state:
                logger.warning("Callback state does not match the state bound to this browser")
                return self._fail(FailureReason.INVALID_STATE, current)

            attempt = self.store.consume_attempt(state or "")
            if attempt is None:
                if self.store.was_consumed(state or ""):
                    logger.warning(f"Replayed state {state[:8]}...")
                    return self._fail(FailureReason.REPLAYED_STATE, current)
                logger.info("Callback state unknown or expired")
                return self._fail(FailureReason.SESSION_EXPIRED, current)
            current = self._advance(current, FlowState.STATE_VALIDATED)
            slug = attempt.target_entry_slug

            if not code:
                return self._fail(FailureReason.MISSING_CODE, current, slug)

            tokens = await self.provider_client.exchange_code(code, attempt.code_verifier)
            if tokens is None:
                return self._fail(FailureReason.TOKEN_EXCHANGE_FAILED, current, slug)
            current = self._advance(current, FlowState.CODE_EXCHANGED)

            profile = await self.provider_client.fetch_profile(tokens.access_token)
            if profile is None:
                return self._fail(FailureReason.PROFILE_FETCH_FAILED, current, slug)
            current = self._advance(current, FlowState.PROFILE_FETCHED)

            session = self.sessions.establish(tokens, profile)

            if not attempt.has_target:
                self._advance(current, FlowState.COMPLETED)
                return CallbackResult(
                    state=FlowState.COMPLETED,
                    redirect_target=sign_in_success_redirect(),
                    profile=profile,
                    session=session,
                )

            outcome = self.claims.claim_for_identity(attempt.target_entry_id, slug, profile)
            if not outcome.success:
                logger.info(f"Claim of entry {attempt.target_entry_id} by @{profile.handle} failed: {outcome.reason}")
                return CallbackResult(
                    state=FlowState.FAILED,
                    redirect_target=outcome.redirect_target,
                    reason=FailureReason(outcome.reason),
                    failed_at=current,
                    profile=profile,
                    session=session,
                )

            self._advance(current, FlowState.COMPLETED)
            return CallbackResult(
                state=FlowState.COMPLETED,
                redirect_target=outcome.redirect_target,
                profile=profile,
                session=session,
                claimed=True,
            )

        except Exception:
            logger.exception(f"Unexpected error in OAuth callback (state={current.value})")
            return CallbackResult(
                state=FlowState.FAILED,
                redirect_target=error_page_redirect(FailureReason.UNEXPECTED_ERROR),
                reason=FailureReason.UNEXPECTED_ERROR,
                failed_at=current,
            )

    @staticmethod
    def _advance(current: FlowState, nxt: FlowState) -> FlowState:
        logger.debug(f"Callback {current.value} -> {nxt.value}")
        return nxt

    @staticmethod
    def _fail(reason: FailureReason, current: FlowState, slug: Optional[str] = None) -> CallbackResult:
        logger.warning(f"Callback failed at {current.value}: {reason.code}")
        return CallbackResult(
            state=FlowState.FAILED,
            redirect_target=failure_redirect(reason, slug),
            reason=reason,
            failed_at=current,
        )
