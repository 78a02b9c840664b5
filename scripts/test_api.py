"""
HTTP API Tests

Drives the FastAPI app through TestClient over an in-memory store.

Tests:
1. Company/slot/student endpoints
2. Domain errors mapped to 404 / 409 / 422
3. Auto-assignment, schedule, offers, imports

Run: pytest scripts/test_api.py
"""

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.placement_system import PlacementSystem
from app.services.store import InMemoryStore


@pytest.fixture
def client():
    app = create_app(PlacementSystem(InMemoryStore()))
    return TestClient(app)


def _company(client, name="Acme"):
    resp = client.post("/api/companies", json={"name": name, "intake_number": 2})
    assert resp.status_code == 201
    return resp.json()


def _student(client, name="Ann", ref="ST001"):
    resp = client.post("/api/students", json={"name": name, "student_id": ref})
    assert resp.status_code == 201
    return resp.json()


def _slot(client, company_id, start="09:00", end="09:30"):
    resp = client.post(
        f"/api/companies/{company_id}/slots",
        json={"date": "2025-03-03", "start_time": start, "end_time": end},
    )
    assert resp.status_code == 201
    return resp.json()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["store"] == "InMemoryStore"


def test_company_crud_and_slots(client):
    company = _company(client)
    slot = _slot(client, company["id"])

    assert slot["start_time"] == "0900"
    fetched = client.get(f"/api/companies/{company['id']}").json()
    assert [s["id"] for s in fetched["available_slots"]] == [slot["id"]]

    # update without slots keeps them
    resp = client.put(f"/api/companies/{company['id']}", json={"id": company["id"], "name": "Acme Ltd"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Acme Ltd"
    assert len(resp.json()["available_slots"]) == 1

    assert client.delete(f"/api/companies/{company['id']}").status_code == 200
    assert client.get(f"/api/companies/{company['id']}").status_code == 404


def test_slot_time_format_validated_at_boundary(client):
    company = _company(client)
    resp = client.post(
        f"/api/companies/{company['id']}/slots",
        json={"date": "2025-03-03", "start_time": "9am", "end_time": "0930"},
    )
    assert resp.status_code == 422


def test_schedule_replacement_validates_times(client):
    company = _company(client)
    slot = _slot(client, company["id"])

    resp = client.put(f"/api/companies/{company['id']}", json={
        "id": company["id"], "name": "Acme",
        "available_slots": [
            {"id": slot["id"], "date": "2025-03-03", "start_time": "banana", "end_time": "9"},
        ],
    })
    assert resp.status_code == 422

    stored = client.get(f"/api/companies/{company['id']}/slots").json()
    assert [(s["start_time"], s["end_time"]) for s in stored] == [("0900", "0930")]

    resp = client.put(f"/api/companies/{company['id']}", json={
        "id": company["id"], "name": "Acme",
        "available_slots": [
            {"id": slot["id"], "date": "2025-03-03", "start_time": "08:45", "end_time": "0915"},
        ],
    })
    assert resp.status_code == 200
    assert resp.json()["available_slots"][0]["start_time"] == "0845"


def test_unknown_company_slot_is_404(client):
    resp = client.post(
        "/api/companies/c-missing/slots",
        json={"date": "2025-03-03", "start_time": "0900", "end_time": "0930"},
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "CompanyNotFoundError"


def test_booking_flow_and_invariant_errors(client):
    company = _company(client)
    student = _student(client)
    slot = _slot(client, company["id"])

    resp = client.post(f"/api/slots/{slot['id']}/book", json={"student_id": student["id"]})
    assert resp.status_code == 200
    assert resp.json()["student_id"] == student["id"]

    assert client.post(f"/api/slots/{slot['id']}/toggle").status_code == 409
    assert client.delete(f"/api/slots/{slot['id']}").status_code == 409

    assert client.post(f"/api/slots/{slot['id']}/release").json()["booked"] is False
    assert client.delete(f"/api/slots/{slot['id']}").status_code == 200
    assert client.get(f"/api/slots/{slot['id']}").status_code == 404


def test_preferences_and_auto_assign(client):
    company = _company(client)
    student = _student(client)
    first = _slot(client, company["id"], "0900", "0930")
    _slot(client, company["id"], "1000", "1030")

    resp = client.put(f"/api/students/{student['id']}/preferences", json={"company_id": company["id"], "rank": 1})
    assert resp.status_code == 200
    assert resp.json()["preferences"][0]["rank"] == 1

    report = client.post("/api/assignments/auto").json()
    assert report["assignments"] == [
        {"student_id": student["id"], "slot_id": first["id"], "company_id": company["id"]}
    ]

    schedule = client.get("/api/assignments/schedule", params={"order": "company"}).json()
    assert [s["id"] for s in schedule] == [first["id"]]

    available = client.get(f"/api/companies/{company['id']}/slots/available").json()
    assert len(available) == 1


def test_offers_endpoints(client):
    company = _company(client)
    student = _student(client)
    slot = _slot(client, company["id"])
    client.post(f"/api/slots/{slot['id']}/book", json={"student_id": student["id"]})

    resp = client.put("/api/offers", json={
        "student_id": student["id"], "company_id": company["id"], "status": "offered"
    })
    assert resp.status_code == 200
    assert client.get("/api/offers").json()[0]["status"] == "offered"

    bad = client.put("/api/offers", json={
        "student_id": student["id"], "company_id": company["id"], "status": "maybe"
    })
    assert bad.status_code == 422


def test_imports_endpoints(client):
    resp = client.post("/api/imports/companies", json=[{"name": "Acme"}, {"name": "Globex"}])
    assert resp.json()["processed"] == 2

    client.post("/api/imports/students", json=[{"name": "Ann", "student_id": "ST001"}])
    resp = client.post("/api/imports/preferences", json=[
        {"student_id": "ST001", "company_name": "Globex", "rank": 1},
        {"student_id": "ST404", "company_name": "Acme", "rank": 1},
    ])
    body = resp.json()
    assert body["processed"] == 1
    assert body["skipped"] == 1

    empty = client.post("/api/imports/companies", json=[])
    assert empty.status_code == 422
    assert empty.json()["error"] == "EmptyImportError"
