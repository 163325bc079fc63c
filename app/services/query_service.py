"""Read-only queries over the reservation table.

None of these take the submission lock; they may observe a table that a
concurrent submit is about to append to.
"""
from collections import Counter
from typing import List

from app.core.config import settings
from app.models.reservation import COL_SLOT, COL_TREATMENT, DuplicateProbe, Registrant
from app.models.responses import DuplicateCheck, QuotaSummary
from app.services.reservation_service import is_duplicate
from app.services.store import TabularStore


class QueryService:
    def __init__(self, store: TabularStore, recent_limit: int = None):
        self.store = store
        self.recent_limit = settings.RECENT_REGISTRANTS_LIMIT if recent_limit is None else recent_limit

    async def get_quota_summary(self) -> QuotaSummary:
        """Counts per treatment and per arrival slot; empty cells are not counted."""
        rows = await self.store.scan_rows()
        treatments = Counter(row[COL_TREATMENT] for row in rows if row[COL_TREATMENT])
        slots = Counter(row[COL_SLOT] for row in rows if row[COL_SLOT])
        return QuotaSummary(treatmentCounts=dict(treatments), slotCounts=dict(slots))

    async def get_recent_registrants(self) -> List[Registrant]:
        """Newest first by append order, capped at `recent_limit`."""
        rows = await self.store.scan_rows()
        newest_first = list(reversed(rows))[:self.recent_limit]
        return [Registrant.from_row(row) for row in newest_first]

    async def check_duplicate(self, probe: DuplicateProbe) -> DuplicateCheck:
        rows = await self.store.scan_rows()
        found = is_duplicate(
            rows,
            (probe.booker_name or "").strip(),
            (probe.national_id or "").strip(),
            (probe.phone or "").strip(),
        )
        return DuplicateCheck(isDuplicate=found)
