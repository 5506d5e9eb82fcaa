"""
Sign-in endpoints: start, callback, logout and session status.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

import settings
from oauth import build_authorization_url, logout
from web.context import AppContext, get_context
from web.cookies import clear_session_cookie, clear_state_cookie, set_session_cookie, set_state_cookie
from web.models import SessionStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


@router.get("/start")
async def start_auth(
    entry_id: Optional[str] = None,
    entry_slug: Optional[str] = None,
    context: AppContext = Depends(get_context),
):
    """Create an attempt and redirect to the provider

    A claim target may be named by id, slug or both; a half that cannot be
    resolved is rejected before the user is sent to the provider.
    """
    if entry_id or entry_slug:
        target = context.claims.resolve_target(entry_id, entry_slug)
        if target is None:
            raise HTTPException(status_code=400, detail="unknown_entry")
        entry_id, entry_slug = target

    attempt = context.store.generate_attempt(entry_id, entry_slug)
    url = build_authorization_url(attempt, context.provider)

    response = RedirectResponse(url, status_code=307)
    set_state_cookie(response, attempt, context.store.ttl_seconds)
    return response


@router.get("/callback")
async def auth_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    error_description: Optional[str] = None,
    context: AppContext = Depends(get_context),
):
    """Provider redirect target"""
    result = await context.callback.handle(
        code=code,
        state=state,
        error=error,
        error_description=error_description,
        expected_state=request.cookies.get(settings.STATE_COOKIE_NAME),
    )

    response = RedirectResponse(result.redirect_target, status_code=303)
    clear_state_cookie(response)
    if result.session is not None:
        set_session_cookie(response, result.session)
    return response


@router.post("/logout")
async def auth_logout(request: Request, context: AppContext = Depends(get_context)):
    """Drop the local session; provider revocation is best effort"""
    await logout(
        request.cookies.get(settings.SESSION_COOKIE_NAME),
        context.sessions,
        context.provider_client,
    )
    response = RedirectResponse(settings.LANDING_PAGE, status_code=303)
    clear_session_cookie(response)
    return response


@router.get("/status", response_model=SessionStatus)
async def auth_status(request: Request, context: AppContext = Depends(get_context)):
    """Get session status without exposing tokens"""
    return context.sessions.status(request.cookies.get(settings.SESSION_COOKIE_NAME))
