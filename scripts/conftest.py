"""
Shared fixtures: a PlacementSystem over a fresh InMemoryStore per test.
"""

from datetime import date

import pytest

from app.schemas.schemas import CompanyCreate, StudentCreate
from app.services.placement_system import PlacementSystem
from app.services.store import InMemoryStore

INTERVIEW_DAY = date(2025, 3, 3)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def system(store):
    return PlacementSystem(store)


@pytest.fixture
def acme(system):
    return system.add_company(CompanyCreate(name="Acme", intake_number=2, interview_place="Room 101"))


@pytest.fixture
def globex(system):
    return system.add_company(CompanyCreate(name="Globex", intake_number=1))


@pytest.fixture
def acme_slots(system, acme):
    """Two open Acme slots: 09:00 then 10:00."""
    first = system.add_timeslot(acme.id, INTERVIEW_DAY, "09:00", "09:30")
    second = system.add_timeslot(acme.id, INTERVIEW_DAY, "10:00", "10:30")
    return first, second


@pytest.fixture
def make_student(system):
    def _make(name: str, ref: str):
        return system.add_student(StudentCreate(name=name, student_id=ref, email=f"{name.lower()}@example.com"))
    return _make


@pytest.fixture
def ann(make_student):
    return make_student("Ann", "ST001")


@pytest.fixture
def bob(make_student):
    return make_student("Bob", "ST002")


@pytest.fixture
def carol(make_student):
    return make_student("Carol", "ST003")


def assert_invariants(state):
    """Booking invariants and preference uniqueness over the whole state."""
    company_ids = {c.id for c in state.companies}
    student_ids = {s.id for s in state.students}
    slot_ids = [s.id for s in state.slots]
    assert len(slot_ids) == len(set(slot_ids)), "duplicate slot ids"

    for slot in state.slots:
        assert slot.company_id in company_ids, f"orphan slot {slot.id}"
        if slot.booked:
            assert slot.student_id is not None
            assert slot.is_available
            assert slot.student_id in student_ids
        else:
            assert slot.student_id is None

    for student in state.students:
        companies = [p.company_id for p in student.preferences]
        assert len(companies) == len(set(companies)), f"duplicate preferences for {student.id}"
        assert all(p.rank >= 1 for p in student.preferences)
