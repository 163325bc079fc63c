"""Tabular stores holding the reservation table.

A store is an append-only table with a header row. Rows are plain lists
of strings in ``SHEET_HEADERS`` order; the store never interprets them.
"""
import asyncio
import csv
import os
from typing import List

from app.core.config import Settings
from app.core.errors import StoreError
from app.core.logger import logger
from app.models.reservation import SHEET_HEADERS, normalize_row


class TabularStore:
    """Interface every backend implements."""

    name = "abstract"

    async def ensure_schema(self) -> None:
        """Create the table with its header row if it does not exist yet."""
        raise NotImplementedError

    async def append_row(self, row: List[str]) -> None:
        raise NotImplementedError

    async def scan_rows(self) -> List[List[str]]:
        """Return every data row (header excluded) in append order."""
        raise NotImplementedError


class MemoryStore(TabularStore):
    name = "memory"

    def __init__(self, rows=None):
        self.rows: List[List[str]] = [normalize_row(row) for row in rows or []]

    async def ensure_schema(self) -> None:
        return None

    async def append_row(self, row: List[str]) -> None:
        self.rows.append(normalize_row(row))

    async def scan_rows(self) -> List[List[str]]:
        return [list(row) for row in self.rows]


class CsvStore(TabularStore):
    name = "csv"

    def __init__(self, path: str):
        self.path = path

    def _create_if_missing(self) -> None:
        """Writes the header row when the file is missing or empty, else checks it."""
        if os.path.exists(self.path) and os.path.getsize(self.path) > 0:
            with open(self.path, newline="", encoding="utf-8") as f:
                header = next(csv.reader(f), [])
            if header != SHEET_HEADERS:
                raise StoreError(f"Unexpected header row in {self.path}: {header}")
            return

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerow(SHEET_HEADERS)
        logger.info(f"🆕 Created reservation table {self.path}")

    async def ensure_schema(self) -> None:
        await asyncio.to_thread(self._create_if_missing)

    async def append_row(self, row: List[str]) -> None:
        def _append():
            try:
                self._create_if_missing()
                with open(self.path, "a", newline="", encoding="utf-8") as f:
                    csv.writer(f).writerow(normalize_row(row))
            except OSError as e:
                raise StoreError(f"Could not write to {self.path}: {e}") from e

        await asyncio.to_thread(_append)

    async def scan_rows(self) -> List[List[str]]:
        def _scan():
            try:
                with open(self.path, newline="", encoding="utf-8") as f:
                    reader = csv.reader(f)
                    next(reader, None)  # header
                    return [normalize_row(row) for row in reader if row]
            except FileNotFoundError:
                return []
            except OSError as e:
                raise StoreError(f"Could not read {self.path}: {e}") from e

        return await asyncio.to_thread(_scan)


def build_store(config: Settings) -> TabularStore:
    backend = config.STORE_BACKEND.lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "csv":
        return CsvStore(config.CSV_PATH)
    if backend == "supabase":
        from app.services.db_service import SupabaseStore
        return SupabaseStore(config.SUPABASE_URL, config.SUPABASE_KEY, config.SUPABASE_TABLE)
    raise StoreError(f"Unknown STORE_BACKEND: {config.STORE_BACKEND}")
