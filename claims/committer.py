"""Atomic unclaimed -> claimed transition"""

import logging

from .models import ClaimResult
from .repository import EntryRepository

logger = logging.getLogger(__name__)


class ClaimCommitter:
    """Commits a claim with a single conditional write

    First claim wins: a conditional write that changes no rows because the
    entry is already claimed yields ALREADY_CLAIMED, not an error.
    """

    def __init__(self, repository: EntryRepository):
        self.repository = repository

    def claim(self, entry_id: str, external_id: str, handle: str) -> ClaimResult:
        try:
            changed = self.repository.update_claimed_if_unclaimed(entry_id, external_id, handle)
        except Exception as e:
            logger.error(f"Conditional claim write failed for entry {entry_id}: {e}")
            return ClaimResult.UPDATE_FAILED

        if not changed:
            return self._classify_no_change(entry_id, external_id)

        logger.info(f"Entry {entry_id} claimed by @{handle} ({external_id})")
        self._reconcile(entry_id, external_id, handle)
        return ClaimResult.CLAIMED

    def _classify_no_change(self, entry_id: str, external_id: str) -> ClaimResult:
        try:
            record = self.repository.get_by_id(entry_id)
        except Exception as e:
            logger.error(f"Could not re-read entry {entry_id} after a no-op claim: {e}")
            return ClaimResult.UPDATE_FAILED

        if record is not None and record.claimed:
            if record.claimed_by_external_id == external_id:
                logger.info(f"Entry {entry_id} was already claimed by the same identity")
            else:
                logger.info(f"Entry {entry_id} already claimed by another identity")
            return ClaimResult.ALREADY_CLAIMED

        logger.error(f"Conditional claim write changed no rows for entry {entry_id}")
        return ClaimResult.UPDATE_FAILED

    def _reconcile(self, entry_id: str, external_id: str, handle: str) -> None:
        """Best-effort redundancy write; never changes the verdict"""
        try:
            self.repository.reconcile_claim(entry_id, external_id, handle)
        except Exception as e:
            logger.warning(f"Claim reconciliation write failed for entry {entry_id}: {e}")
