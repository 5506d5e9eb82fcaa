"""Transport-agnostic claim entry points

`verify_and_claim` can be called from any thin UI action or route without
knowing how the request arrived; the OAuth callback uses
`claim_for_identity` directly with the freshly fetched profile.
"""

import logging
from typing import Optional, Tuple

from oauth.errors import FailureReason, claim_success_redirect, failure_redirect, sign_in_success_redirect
from oauth.models import IdentityProfile, Session
from .committer import ClaimCommitter
from .models import ClaimOutcome, ClaimResult, EditAuthorization, VerifyResult
from .ownership import OwnershipVerifier, extract_handle, handles_match
from .repository import EntryRepository

logger = logging.getLogger(__name__)

_VERIFY_FAILURES = {
    VerifyResult.ENTRY_NOT_FOUND: FailureReason.ENTRY_NOT_FOUND,
    VerifyResult.INVALID_OWNER_URL: FailureReason.INVALID_OWNER_URL,
    VerifyResult.MISMATCH: FailureReason.HANDLE_MISMATCH,
}

_CLAIM_FAILURES = {
    ClaimResult.ALREADY_CLAIMED: FailureReason.ALREADY_CLAIMED,
    ClaimResult.UPDATE_FAILED: FailureReason.UPDATE_FAILED,
}


def _failed(reason: FailureReason, slug: Optional[str], claim: Optional[ClaimResult] = None) -> ClaimOutcome:
    return ClaimOutcome(
        success=False,
        redirect_target=failure_redirect(reason, slug),
        reason=reason.code,
        claim=claim,
    )


class ClaimService:
    """Ownership verification followed by the atomic claim"""

    def __init__(self, repository: EntryRepository):
        self.repository = repository
        self.verifier = OwnershipVerifier(repository)
        self.committer = ClaimCommitter(repository)

    def claim_for_identity(
        self,
        entry_id: str,
        entry_slug: Optional[str],
        profile: IdentityProfile,
    ) -> ClaimOutcome:
        verdict, declared_handle = self.verifier.check(entry_id, profile.handle)
        if verdict is not VerifyResult.VERIFIED:
            return _failed(_VERIFY_FAILURES[verdict], entry_slug)

        # Store the handle exactly as declared on the entry
        result = self.committer.claim(entry_id, profile.external_id, declared_handle)
        if result is not ClaimResult.CLAIMED:
            return _failed(_CLAIM_FAILURES[result], entry_slug, claim=result)

        target = claim_success_redirect(entry_slug) if entry_slug else sign_in_success_redirect()
        return ClaimOutcome(success=True, redirect_target=target, claim=ClaimResult.CLAIMED)

    def verify_and_claim(
        self,
        entry_id: str,
        entry_slug: Optional[str],
        session: Optional[Session],
    ) -> ClaimOutcome:
        """Claim an entry for the signed-in creator

        Args:
            entry_id: Entry to claim
            entry_slug: Slug used to build the redirect target
            session: Current session, None when signed out

        Returns:
            ClaimOutcome with success flag and redirect target
        """
        if session is None or not session.subject_id or not session.handle:
            return _failed(FailureReason.NOT_AUTHENTICATED, entry_slug)

        profile = IdentityProfile(external_id=session.subject_id, handle=session.handle)
        try:
            return self.claim_for_identity(entry_id, entry_slug, profile)
        except Exception:
            logger.exception(f"Unexpected error claiming entry {entry_id}")
            return _failed(FailureReason.UNEXPECTED_ERROR, entry_slug)

    def resolve_target(
        self,
        entry_id: Optional[str],
        entry_slug: Optional[str],
    ) -> Optional[Tuple[str, str]]:
        """Complete a claim target given by id, slug or both

        The missing half is looked up so the callback can both claim the
        entry and redirect back to its page.

        Returns:
            (entry_id, slug), or None when the entry or its slug is unknown
        """
        if entry_id and entry_slug:
            return entry_id, entry_slug

        if entry_id:
            record = self.repository.get_by_id(entry_id)
        elif entry_slug:
            record = self.repository.get_by_slug(entry_slug)
        else:
            return None

        if record is None or not record.slug:
            logger.info(f"Cannot resolve claim target id={entry_id} slug={entry_slug}")
            return None
        return record.entry_id, record.slug

    def is_entry_owner(self, entry_id: str, session: Optional[Session]) -> bool:
        """True if the session's identity holds the claim on the entry"""
        if session is None:
            return False
        record = self.repository.get_by_id(entry_id)
        if record is None or not record.claimed:
            return False
        if record.claimed_by_external_id:
            return record.claimed_by_external_id == session.subject_id
        # Entries claimed before claimant ids were recorded
        declared = extract_handle(record.declared_owner_url)
        return bool(declared and session.handle and handles_match(declared, session.handle))

    def can_edit_entry(self, slug: str, session: Optional[Session]) -> EditAuthorization:
        if session is None:
            return EditAuthorization(authorized=False, reason="not_authenticated")

        record = self.repository.get_by_slug(slug)
        if record is None:
            return EditAuthorization(authorized=False, reason="entry_not_found")
        if not record.claimed:
            return EditAuthorization(authorized=False, reason="entry_not_claimed", record=record)
        if not self.is_entry_owner(record.entry_id, session):
            return EditAuthorization(authorized=False, reason="not_owner", record=record)
        return EditAuthorization(authorized=True, record=record)
