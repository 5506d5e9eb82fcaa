"""
Catalog entry ownership: verification and the atomic claim
"""
from .models import (
    OwnershipRecord,
    VerifyResult,
    ClaimResult,
    ClaimOutcome,
    EditAuthorization,
)
from .repository import (
    EntryRepository,
    InMemoryEntryRepository,
    SupabaseEntryRepository,
)
from .ownership import OwnershipVerifier, extract_handle, handles_match
from .committer import ClaimCommitter
from .service import ClaimService

__all__ = [
    # Models
    "OwnershipRecord",
    "VerifyResult",
    "ClaimResult",
    "ClaimOutcome",
    "EditAuthorization",
    # Repositories
    "EntryRepository",
    "InMemoryEntryRepository",
    "SupabaseEntryRepository",
    # Verification and claim
    "OwnershipVerifier",
    "extract_handle",
    "handles_match",
    "ClaimCommitter",
    "ClaimService",
]
