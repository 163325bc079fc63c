import pytest

from app.models.reservation import COLUMN_KEYS


@pytest.fixture
def make_payload():
    """Complete, valid create payload in wire names; override any field."""
    def _make(**overrides):
        payload = {
            "namaPemesan": "Siti Aminah",
            "nik": "3201010101010001",
            "noHp": "081234567890",
            "alamat": "Jl. Merdeka 1",
            "namaAnak": "Budi",
            "tglLahir": "2019-05-04",
            "treatment": "Massage",
            "jamKedatangan": "08:00",
            "keluhan": "Batuk",
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def make_row():
    """Stored row in header order."""
    def _make(index=0, **overrides):
        values = {
            "timestamp": f"2024-03-01T08:{index % 60:02d}:00+07:00",
            "reservation_id": f"JBKNP-{index:06d}",
            "booker_name": f"Name {index}",
            "national_id": f"NIK{index}",
            "phone": f"0800{index}",
            "address": f"Street {index}",
            "child_name": f"Child {index}",
            "child_birth_date": "2020-01-01",
            "treatment_type": "Massage",
            "arrival_slot": "08:00",
            "complaint": "",
            "assigned_staff": "Unassigned",
        }
        values.update(overrides)
        return [values[key] for key in COLUMN_KEYS]
    return _make
