from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

# Header row of the reservation table, in column order
SHEET_HEADERS = [
    "Timestamp", "ReservationID", "BookerName", "NationalID", "Phone",
    "Address", "ChildName", "ChildBirthDate", "TreatmentType",
    "ArrivalSlot", "Complaint", "AssignedStaff",
]

# Attribute / database column names, parallel to SHEET_HEADERS
COLUMN_KEYS = [
    "timestamp", "reservation_id", "booker_name", "national_id", "phone",
    "address", "child_name", "child_birth_date", "treatment_type",
    "arrival_slot", "complaint", "assigned_staff",
]

# Wire name of every submission field, in the order they are validated
REQUIRED_FIELDS = [
    ("booker_name", "namaPemesan"),
    ("national_id", "nik"),
    ("phone", "noHp"),
    ("address", "alamat"),
    ("child_name", "namaAnak"),
    ("child_birth_date", "tglLahir"),
    ("treatment_type", "treatment"),
    ("arrival_slot", "jamKedatangan"),
]
OPTIONAL_FIELDS = [
    ("complaint", "keluhan"),
]

COL_NAME = COLUMN_KEYS.index("booker_name")
COL_NATIONAL_ID = COLUMN_KEYS.index("national_id")
COL_PHONE = COLUMN_KEYS.index("phone")
COL_TREATMENT = COLUMN_KEYS.index("treatment_type")
COL_SLOT = COLUMN_KEYS.index("arrival_slot")


def normalize_row(row) -> List[str]:
    """Stringify cells and pad/truncate a stored row to the header width."""
    cells = ["" if cell is None else str(cell) for cell in list(row)[:len(SHEET_HEADERS)]]
    return cells + [""] * (len(SHEET_HEADERS) - len(cells))


class Reservation(BaseModel):
    timestamp: datetime
    reservation_id: str
    booker_name: str
    national_id: str
    phone: str
    address: str
    child_name: str
    child_birth_date: str
    treatment_type: str
    arrival_slot: str
    complaint: str = ""
    assigned_staff: str

    def to_row(self) -> List[str]:
        values = self.model_dump()
        values["timestamp"] = self.timestamp.isoformat()
        return [values[key] for key in COLUMN_KEYS]


class Registrant(BaseModel):
    """Public listing entry; assigned staff is intentionally left out."""
    model_config = ConfigDict(populate_by_name=True)

    timestamp: str
    reservation_id: str = Field(alias="idReservasi")
    booker_name: str = Field(alias="namaPemesan")
    national_id: str = Field(alias="nik")
    phone: str = Field(alias="noHp")
    address: str = Field(alias="alamat")
    child_name: str = Field(alias="namaAnak")
    child_birth_date: str = Field(alias="tglLahir")
    treatment_type: str = Field(alias="treatment")
    arrival_slot: str = Field(alias="jamKedatangan")
    complaint: str = Field(alias="keluhan")

    @classmethod
    def from_row(cls, row) -> "Registrant":
        values = dict(zip(COLUMN_KEYS, normalize_row(row)))
        values.pop("assigned_staff")
        return cls(**values)


class DuplicateProbe(BaseModel):
    """Fields a client can check before submitting. Absent fields never match."""
    booker_name: Optional[str] = None
    national_id: Optional[str] = None
    phone: Optional[str] = None
