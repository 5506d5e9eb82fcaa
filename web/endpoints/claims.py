"""
Claim endpoints for signed-in creators.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from oauth import Session
from web.context import AppContext, current_session, get_context
from web.models import ClaimResponse, EditAccess, OwnerStatus

router = APIRouter(prefix="/claims")


@router.post("/{entry_id}", response_model=ClaimResponse)
async def claim_entry(
    entry_id: str,
    entry_slug: Optional[str] = None,
    session: Optional[Session] = Depends(current_session),
    context: AppContext = Depends(get_context),
):
    """Verify the signed-in creator against the entry and claim it"""
    outcome = context.claims.verify_and_claim(entry_id, entry_slug, session)
    return outcome.to_dict()


@router.get("/{entry_id}/owner", response_model=OwnerStatus)
async def entry_owner(
    entry_id: str,
    session: Optional[Session] = Depends(current_session),
    context: AppContext = Depends(get_context),
):
    record = context.claims.repository.get_by_id(entry_id)
    if record is None:
        raise HTTPException(status_code=404, detail="entry_not_found")
    return OwnerStatus(
        entry_id=entry_id,
        claimed=record.claimed,
        is_owner=context.claims.is_entry_owner(entry_id, session),
    )


@router.get("/by-slug/{slug}/edit-access", response_model=EditAccess)
async def edit_access(
    slug: str,
    session: Optional[Session] = Depends(current_session),
    context: AppContext = Depends(get_context),
):
    authorization = context.claims.can_edit_entry(slug, session)
    return EditAccess(slug=slug, authorized=authorization.authorized, reason=authorization.reason)
