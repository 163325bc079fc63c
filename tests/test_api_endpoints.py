import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from app.main import app
from app.services.store import MemoryStore


class FailingReadStore(MemoryStore):
    async def scan_rows(self):
        raise RuntimeError("store offline")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store):
    with patch("app.main.build_store", return_value=store):
        with TestClient(app) as test_client:
            yield test_client


def assert_error(response, status_code, startswith):
    assert response.status_code == status_code
    body = response.json()
    assert body["result"] == "error"
    assert body["data"] is None
    assert body["error"].startswith(startswith)


def test_create_reservation(client, store, make_payload):
    response = client.post("/api/reservations", json=make_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["result"] == "success"
    assert body["error"] is None
    assert body["data"]["reservationId"].startswith("JBKNP-")
    assert body["data"]["message"] == "Reservation saved successfully"
    assert len(store.rows) == 1


def test_create_duplicate_is_tagged(client, store, make_payload):
    client.post("/api/reservations", json=make_payload())
    response = client.post("/api/reservations", json=make_payload(namaPemesan="Other", nik="999"))

    assert_error(response, 409, "duplicate:")
    assert len(store.rows) == 1


def test_create_missing_field(client, store, make_payload):
    response = client.post("/api/reservations", json=make_payload(treatment="", jamKedatangan=""))

    assert_error(response, 400, "Required field missing: treatment")
    assert store.rows == []


def test_create_invalid_json(client, store):
    response = client.post("/api/reservations", content=b"{not json", headers={"Content-Type": "application/json"})

    assert_error(response, 500, "Invalid JSON body")
    assert store.rows == []


def test_get_data(client, make_payload):
    client.post("/api/reservations", json=make_payload())
    client.post("/api/reservations", json=make_payload(namaPemesan="B", nik="2", noHp="2", treatment="Facial"))

    response = client.get("/api/reservations", params={"action": "getData"})

    assert response.status_code == 200
    assert response.json() == {
        "result": "success",
        "data": {"treatmentCounts": {"Massage": 1, "Facial": 1}, "slotCounts": {"08:00": 2}},
        "error": None,
    }


def test_get_registrants(client, make_payload):
    client.post("/api/reservations", json=make_payload(namaPemesan="First", nik="1", noHp="1"))
    client.post("/api/reservations", json=make_payload(namaPemesan="Second", nik="2", noHp="2"))

    response = client.get("/api/reservations", params={"action": "getRegistrants"})

    data = response.json()["data"]
    assert [r["namaPemesan"] for r in data] == ["Second", "First"]
    assert "idReservasi" in data[0]
    assert "timestamp" in data[0]


def test_check_duplicate(client, make_payload):
    client.post("/api/reservations", json=make_payload(noHp="0811"))

    response = client.get("/api/reservations", params={"action": "checkDuplicate", "noHp": "0811"})
    assert response.json()["data"] == {"isDuplicate": True}

    response = client.get("/api/reservations", params={"action": "checkDuplicate", "namaPemesan": "", "nik": "nope"})
    assert response.json()["data"] == {"isDuplicate": False}


def test_unknown_action(client):
    assert_error(client.get("/api/reservations", params={"action": "deleteAll"}), 400, "Unknown action: deleteAll")
    assert_error(client.get("/api/reservations"), 400, "Unknown action")


def test_read_failure_is_enveloped(make_payload):
    with patch("app.main.build_store", return_value=FailingReadStore()):
        with TestClient(app) as test_client:
            response = test_client.get("/api/reservations", params={"action": "getData"})
            assert_error(response, 500, "store offline")

            response = test_client.post("/api/reservations", json=make_payload())
            assert_error(response, 500, "store offline")


def test_lock_timeout_is_enveloped(client, store, make_payload):
    service = client.app.state.reservation_service
    service.lock_timeout = 0.05
    client.portal.call(service._lock.acquire)
    try:
        response = client.post("/api/reservations", json=make_payload())
    finally:
        client.portal.call(service._lock.release)

    assert_error(response, 503, "Server is busy")
    assert store.rows == []

    response = client.post("/api/reservations", json=make_payload())
    assert response.status_code == 200


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["store"] == "memory"
