from typing import List, Optional
from supabase import create_async_client, AsyncClient

from app.core.errors import StoreError
from app.core.logger import logger
from app.models.reservation import COLUMN_KEYS, normalize_row
from app.services.store import TabularStore

PAGE_SIZE = 1000  # PostgREST default max-rows

class SupabaseStore(TabularStore):
    """
    Reservation table kept in Supabase (Postgres via PostgREST).
    Columns are the snake_case COLUMN_KEYS plus a serial `id` that fixes append order.
    The table itself is created from sql/reservations.sql.
    """
    name = "supabase"

    def __init__(self, url: str, key: str, table: str):
        self.url = url
        self.key = key
        self.table = table
        self._client: Optional[AsyncClient] = None

    async def get_client(self) -> AsyncClient:
        if not self._client:
            if not (self.url and self.key):
                raise StoreError("Supabase credentials missing (SUPABASE_URL / SUPABASE_KEY)")
            try:
                self._client = await create_async_client(self.url, self.key)
                logger.info("✅ Supabase Async client initialized")
            except Exception as e:
                logger.error(f"❌ Failed to initialize Supabase Async: {e}")
                raise StoreError(f"Failed to initialize Supabase client: {e}") from e
        return self._client

    async def ensure_schema(self) -> None:
        client = await self.get_client()
        try:
            await client.table(self.table).select("id").limit(1).execute()
        except Exception as e:
            logger.error(f"❌ Table '{self.table}' not reachable: {e}")
            raise StoreError(f"Reservation table '{self.table}' is missing or not readable; apply sql/reservations.sql") from e
        logger.info(f"✅ Reservation table '{self.table}' ready")

    async def append_row(self, row: List[str]) -> None:
        client = await self.get_client()
        record = dict(zip(COLUMN_KEYS, normalize_row(row)))
        try:
            await client.table(self.table).insert(record).execute()
        except Exception as e:
            logger.error(f"❌ DB Error (append_row): {e}")
            raise StoreError(f"Could not save reservation: {e}") from e

    async def scan_rows(self) -> List[List[str]]:
        client = await self.get_client()
        rows = []
        start = 0
        try:
            while True:
                response = await client.table(self.table)\
                    .select(",".join(COLUMN_KEYS))\
                    .order("id", desc=False)\
                    .range(start, start + PAGE_SIZE - 1)\
                    .execute()
                page = response.data or []
                rows.extend(normalize_row(record.get(key) for key in COLUMN_KEYS) for record in page)
                if len(page) < PAGE_SIZE:
                    break
                start += PAGE_SIZE
        except Exception as e:
            logger.error(f"❌ DB Error (scan_rows): {e}")
            raise StoreError(f"Could not read reservations: {e}") from e
        return rows
