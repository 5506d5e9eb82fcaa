"""Matching an authenticated handle against an entry's declared owner"""

import logging
from typing import Optional, Tuple
from urllib.parse import urlsplit

from .models import VerifyResult
from .repository import EntryRepository

logger = logging.getLogger(__name__)


def extract_handle(owner_url: Optional[str]) -> Optional[str]:
    """Pull the handle out of a profile URL

    The scheme is optional ("x.com/alice" works). The handle is the first
    non-empty path segment, with a leading "@" dropped.

    Args:
        owner_url: Declared developer profile URL

    Returns:
        The handle, or None for empty or unparseable input
    """
    if not owner_url:
        return None
    candidate = owner_url.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return None
    if "://" not in candidate:
        candidate = f"https://{candidate}"

    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
    except ValueError:
        return None
    if not hostname:
        return None

    for segment in parts.path.split("/"):
        handle = segment.lstrip("@")
        if handle:
            return handle
    return None


def handles_match(declared: str, identity: str) -> bool:
    return declared.casefold() == identity.casefold()


class OwnershipVerifier:
    """Checks that a provider identity is the declared owner of an entry"""

    def __init__(self, repository: EntryRepository):
        self.repository = repository

    def verify(self, entry_id: str, identity_handle: str) -> VerifyResult:
        result, _ = self.check(entry_id, identity_handle)
        return result

    def check(self, entry_id: str, identity_handle: str) -> Tuple[VerifyResult, Optional[str]]:
        """Verify and also return the declared handle that was matched

        Returns:
            Tuple of (result, declared handle or None)
        """
        record = self.repository.get_by_id(entry_id)
        if record is None:
            logger.info(f"Ownership check for unknown entry {entry_id}")
            return VerifyResult.ENTRY_NOT_FOUND, None

        declared = extract_handle(record.declared_owner_url)
        if declared is None:
            logger.info(f"Entry {entry_id} has no usable owner URL")
            return VerifyResult.INVALID_OWNER_URL, None

        if not handles_match(declared, identity_handle):
            logger.info(f"Handle mismatch on entry {entry_id}: declared @{declared}, got @{identity_handle}")
            return VerifyResult.MISMATCH, declared

        return VerifyResult.VERIFIED, declared
