"""Failure taxonomy and redirect targets for the sign-in and claim flow

Every failure carries a machine-readable code and a pre-built redirect.
Redirects only ever contain these codes, never provider text or tracebacks.
"""

from enum import Enum
from typing import Optional
from urllib.parse import quote, urlencode

import settings


class FailureReason(str, Enum):
    """Internal reason codes; the value is what appears in ?error="""
    SESSION_EXPIRED = "session_expired"
    INVALID_STATE = "invalid_state"
    REPLAYED_STATE = "replayed_state"
    PROVIDER_DENIED = "provider_denied"
    MISSING_CODE = "missing_code"
    TOKEN_EXCHANGE_FAILED = "token_exchange_failed"
    PROFILE_FETCH_FAILED = "profile_fetch_failed"
    ENTRY_NOT_FOUND = "entry_not_found"
    INVALID_OWNER_URL = "invalid_owner_url"
    HANDLE_MISMATCH = "not_your_game"
    ALREADY_CLAIMED = "already_claimed"
    UPDATE_FAILED = "update_failed"
    NOT_AUTHENTICATED = "not_authenticated"
    UNEXPECTED_ERROR = "unexpected_error"

    @property
    def code(self) -> str:
        return self.value


# Failures that happen before we know which entry was targeted
_STATE_LEVEL = {
    FailureReason.SESSION_EXPIRED,
    FailureReason.INVALID_STATE,
    FailureReason.REPLAYED_STATE,
    FailureReason.PROVIDER_DENIED,
    FailureReason.UNEXPECTED_ERROR,
}


def entry_page(slug: str) -> str:
    return f"{settings.ENTRY_PAGE_PREFIX}/{quote(slug, safe='')}"


def claim_success_redirect(slug: str) -> str:
    return f"{entry_page(slug)}?{urlencode({'success': 'game-claimed'})}"


def sign_in_success_redirect() -> str:
    return settings.LANDING_PAGE


def error_page_redirect(reason: FailureReason) -> str:
    return f"{settings.ERROR_PAGE}?{urlencode({'error': reason.code})}"


def failure_redirect(reason: FailureReason, slug: Optional[str] = None) -> str:
    """Redirect target for a failure

    Entry-level failures go back to the entry page when the slug is known;
    everything else lands on the generic error page.
    """
    if slug and reason not in _STATE_LEVEL:
        return f"{entry_page(slug)}?{urlencode({'error': reason.code})}"
    return error_page_redirect(reason)
