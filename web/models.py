"""
Pydantic response models for the JSON endpoints.
"""
from typing import Optional
from pydantic import BaseModel


class ClaimResponse(BaseModel):
    """Result of a claim attempt"""
    success: bool
    redirect_target: str
    reason: Optional[str] = None


class OwnerStatus(BaseModel):
    """Claim status of an entry from the caller's point of view"""
    entry_id: str
    claimed: bool
    is_owner: bool


class EditAccess(BaseModel):
    """Whether the caller may manage an entry"""
    slug: str
    authorized: bool
    reason: Optional[str] = None


class SessionStatus(BaseModel):
    """Session state without tokens"""
    authenticated: bool
    subject_id: Optional[str] = None
    handle: Optional[str] = None
    expires_in_seconds: int = 0
