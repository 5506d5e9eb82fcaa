"""Catalog entry repositories

Only the operations the claim flow needs: lookups and the conditional
unclaimed -> claimed write. The write must be a single atomic statement
(`... WHERE id = ? AND claimed IS NOT TRUE`), never a read followed by a write.
"""

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Protocol

import settings
from .models import OwnershipRecord

logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    def get_by_id(self, entry_id: str) -> Optional[OwnershipRecord]:
        ...

    def get_by_slug(self, slug: str) -> Optional[OwnershipRecord]:
        ...

    def update_claimed_if_unclaimed(self, entry_id: str, external_id: str, handle: str) -> bool:
        """Set the claim fields only if the entry is unclaimed

        Returns:
            True if exactly one row changed, False if none did
        """
        ...

    def reconcile_claim(self, entry_id: str, external_id: str, handle: str) -> None:
        """Secondary, idempotent backup write run after a successful claim"""
        ...


class InMemoryEntryRepository:
    """Lock-guarded dictionary repository for tests and local runs"""

    def __init__(self, records: Iterable[OwnershipRecord] = ()):
        self._lock = threading.Lock()
        self._records: Dict[str, OwnershipRecord] = {r.entry_id: r for r in records}
        self.reconciled_claims: Dict[str, str] = {}

    def add(self, record: OwnershipRecord) -> None:
        with self._lock:
            self._records[record.entry_id] = record

    def get_by_id(self, entry_id: str) -> Optional[OwnershipRecord]:
        with self._lock:
            record = self._records.get(entry_id)
            return replace(record) if record else None

    def get_by_slug(self, slug: str) -> Optional[OwnershipRecord]:
        with self._lock:
            for record in self._records.values():
                if record.slug == slug:
                    return replace(record)
        return None

    def update_claimed_if_unclaimed(self, entry_id: str, external_id: str, handle: str) -> bool:
        with self._lock:
            record = self._records.get(entry_id)
            if record is None or record.claimed:
                return False
            self._records[entry_id] = replace(
                record,
                claimed=True,
                claimed_by_external_id=external_id,
                claimed_by_handle=handle,
            )
            return True

    def reconcile_claim(self, entry_id: str, external_id: str, handle: str) -> None:
        with self._lock:
            record = self._records.get(entry_id)
            if record is not None and record.claimed_by_external_id == external_id:
                self.reconciled_claims[entry_id] = external_id


class SupabaseEntryRepository:
    """Repository over the `games` table via the Supabase service-role client

    The claimant lands in the existing developer_twitter_id and
    developer_handle columns. Rows whose claimed column is NULL are
    unclaimed, so the conditional write filters on `claimed IS NOT TRUE`.
    """

    COLUMNS = "id, slug, developer_url, claimed, developer_twitter_id, developer_handle"
    RECONCILE_RPC = "update_game_claimed_status"

    def __init__(self, client, table: Optional[str] = None):
        self.client = client
        self.table = table or settings.ENTRIES_TABLE

    @classmethod
    def from_settings(cls) -> "SupabaseEntryRepository":
        from supabase import create_client

        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be configured")
        return cls(create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY))

    def _first(self, field: str, value: str) -> Optional[OwnershipRecord]:
        response = (
            self.client.table(self.table)
            .select(self.COLUMNS)
            .eq(field, value)
            .limit(1)
            .execute()
        )
        return OwnershipRecord.from_row(response.data[0]) if response.data else None

    def get_by_id(self, entry_id: str) -> Optional[OwnershipRecord]:
        return self._first("id", entry_id)

    def get_by_slug(self, slug: str) -> Optional[OwnershipRecord]:
        return self._first("slug", slug)

    def update_claimed_if_unclaimed(self, entry_id: str, external_id: str, handle: str) -> bool:
        response = (
            self.client.table(self.table)
            .update({
                "claimed": True,
                "developer_twitter_id": external_id,
                "developer_handle": handle,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("id", entry_id)
            .not_.is_("claimed", "true")
            .execute()
        )
        return len(response.data or []) == 1

    def reconcile_claim(self, entry_id: str, external_id: str, handle: str) -> None:
        """Run the database-side claim status function as a backup"""
        self.client.rpc(self.RECONCILE_RPC, {"game_id": entry_id}).execute()
