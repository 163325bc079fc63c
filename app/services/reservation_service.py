import asyncio
from datetime import datetime
from typing import Any, Mapping
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.core.errors import DuplicateError, LockTimeout, ReservationError, UnexpectedError, ValidationError
from app.core.logger import logger
from app.models.reservation import (
    COL_NAME, COL_NATIONAL_ID, COL_PHONE, OPTIONAL_FIELDS, REQUIRED_FIELDS, Reservation,
)
from app.models.responses import ReservationCreated
from app.services.store import TabularStore

SUCCESS_MESSAGE = "Reservation saved successfully"


def _clean(value: Any) -> str:
    """Blank string means missing: None, booleans, zero and non-scalars count as missing."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(value) if value else ""
    if not isinstance(value, str):
        return ""
    return value.strip()


def is_duplicate(rows, booker_name: str = "", national_id: str = "", phone: str = "") -> bool:
    """
    True if ANY given field equals the same field of any stored row.
    Empty/None fields never match.
    """
    for row in rows:
        if booker_name and row[COL_NAME] == booker_name:
            return True
        if national_id and row[COL_NATIONAL_ID] == national_id:
            return True
        if phone and row[COL_PHONE] == phone:
            return True
    return False


def make_reservation_id(prefix: str, now: datetime) -> str:
    """
    PREFIX-<last 6 digits of epoch millis>.
    Not collision-free: two submissions whose millis share the suffix get the same id.
    """
    millis = int(now.timestamp()) * 1000 + now.microsecond // 1000
    return f"{prefix}-{str(millis)[-6:]}"


class ReservationService:
    """
    Creates reservations. The whole submit (validate, duplicate scan, append)
    runs under one lock per service instance; the app builds exactly one.
    """

    def __init__(self, store: TabularStore, lock_timeout: float = None, id_prefix: str = None,
                 default_staff: str = None, timezone: str = None):
        self.store = store
        self.lock_timeout = settings.LOCK_TIMEOUT_SECONDS if lock_timeout is None else lock_timeout
        self.id_prefix = id_prefix or settings.RESERVATION_ID_PREFIX
        self.default_staff = default_staff or settings.DEFAULT_ASSIGNED_STAFF
        self.tz = ZoneInfo(timezone or settings.TIMEZONE)
        self._lock = asyncio.Lock()

    async def _acquire(self):
        try:
            await asyncio.wait_for(self._lock.acquire(), timeout=self.lock_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"⏳ Submission lock not acquired within {self.lock_timeout}s")
            raise LockTimeout(self.lock_timeout)

    def validate(self, payload: Mapping[str, Any]) -> dict:
        """Returns cleaned attribute values; raises on the first missing required field."""
        values = {}
        for attr, wire_name in REQUIRED_FIELDS:
            value = _clean(payload.get(wire_name))
            if not value:
                raise ValidationError(wire_name)
            values[attr] = value
        for attr, wire_name in OPTIONAL_FIELDS:
            values[attr] = _clean(payload.get(wire_name))
        return values

    async def submit(self, payload: Mapping[str, Any]) -> ReservationCreated:
        await self._acquire()
        try:
            if not isinstance(payload, Mapping):
                raise UnexpectedError("Request body must be a JSON object")

            values = self.validate(payload)

            rows = await self.store.scan_rows()
            if is_duplicate(rows, values["booker_name"], values["national_id"], values["phone"]):
                logger.info(f"🚫 Duplicate registration rejected ({len(rows)} rows scanned)")
                raise DuplicateError()

            now = datetime.now(self.tz)
            reservation = Reservation(
                timestamp=now,
                reservation_id=make_reservation_id(self.id_prefix, now),
                assigned_staff=self.default_staff,
                **values,
            )
            await self.store.append_row(reservation.to_row())
            logger.info(f"✅ Reservation {reservation.reservation_id} saved ({values['treatment_type']} @ {values['arrival_slot']})")

            return ReservationCreated(reservationId=reservation.reservation_id, message=SUCCESS_MESSAGE)
        except ReservationError:
            raise
        except Exception as e:
            logger.exception(f"❌ Unexpected error while saving reservation: {e}")
            raise UnexpectedError(str(e)) from e
        finally:
            self._lock.release()
