"""
Cookie helpers. All cookies are host-only (no Domain attribute) and HttpOnly.
"""
from starlette.responses import Response

import settings
from oauth import AuthAttempt, Session

STATE_COOKIE_PATH = "/auth"
SESSION_COOKIE_PATH = "/"


def set_state_cookie(response: Response, attempt: AuthAttempt, ttl_seconds: int) -> None:
    """Bind the attempt's state to this browser for the attempt's lifetime"""
    response.set_cookie(
        settings.STATE_COOKIE_NAME,
        attempt.state,
        max_age=ttl_seconds,
        path=STATE_COOKIE_PATH,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


def clear_state_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.STATE_COOKIE_NAME,
        path=STATE_COOKIE_PATH,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


def set_session_cookie(response: Response, session: Session) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        session.session_id,
        max_age=session.max_age(),
        path=SESSION_COOKIE_PATH,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        path=SESSION_COOKIE_PATH,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )
