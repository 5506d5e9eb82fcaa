"""Ownership data for catalog entries"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


@dataclass
class OwnershipRecord:
    """Claim-relevant slice of a catalog entry

    Attributes:
        entry_id: Catalog entry id
        declared_owner_url: Profile URL of the declared developer
        claimed: Whether a creator has verified ownership
        claimed_by_external_id: Provider id of the claimant
        claimed_by_handle: Provider handle of the claimant
        slug: Entry slug, when known
    """
    entry_id: str
    declared_owner_url: str
    claimed: bool = False
    claimed_by_external_id: Optional[str] = None
    claimed_by_handle: Optional[str] = None
    slug: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "OwnershipRecord":
        """Build from a `games` table row

        The claimant is stored in developer_twitter_id / developer_handle.
        A NULL claimed column counts as unclaimed.
        """
        external_id = row.get("developer_twitter_id")
        return cls(
            entry_id=str(row["id"]),
            declared_owner_url=row.get("developer_url") or "",
            claimed=bool(row.get("claimed")),
            claimed_by_external_id=str(external_id) if external_id else None,
            claimed_by_handle=row.get("developer_handle") or None,
            slug=row.get("slug"),
        )


class VerifyResult(str, Enum):
    VERIFIED = "verified"
    MISMATCH = "mismatch"
    INVALID_OWNER_URL = "invalid_owner_url"
    ENTRY_NOT_FOUND = "entry_not_found"


class ClaimResult(str, Enum):
    CLAIMED = "claimed"
    ALREADY_CLAIMED = "already_claimed"
    UPDATE_FAILED = "update_failed"


@dataclass(frozen=True)
class ClaimOutcome:
    """Result handed back to whatever UI action triggered the claim"""
    success: bool
    redirect_target: str
    reason: Optional[str] = None
    claim: Optional[ClaimResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "redirect_target": self.redirect_target,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class EditAuthorization:
    """Whether a signed-in creator may manage an entry

    reason is one of not_authenticated, entry_not_found, entry_not_claimed,
    not_owner, or None when authorized.
    """
    authorized: bool
    reason: Optional[str] = None
    record: Optional[OwnershipRecord] = None
