"""
Store Tests

Tests:
1. Failed mutations and failed saves never publish partial state
2. Change notification (subscribe / unsubscribe)
3. SqlStore round trip through SQLite
4. build_store picks the backend and seeds demo data

Run: pytest scripts/test_store.py
"""

import pytest
from sqlalchemy.exc import OperationalError

from app.core.config import Settings
from app.core.errors import CompanyNotFoundError, SlotIsBookedError, StorageError
from app.schemas.schemas import CompanyCreate, OfferStatus, PlacementState, StudentCreate
from app.services.placement_system import PlacementSystem, build_store
from app.services.sql_store import SqlStore
from app.services.store import InMemoryStore, PlacementStore
from app.db.session import build_engine
from conftest import INTERVIEW_DAY


class FlakyStore(InMemoryStore):
    """In-memory store whose save() can be switched to fail."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False

    def _write(self, state):
        if self.fail_writes:
            raise OSError("disk full")
        super()._write(state)


# ============================================================
# TRANSACTIONS
# ============================================================

def test_failed_save_raises_storage_error_and_keeps_state():
    store = FlakyStore()
    system = PlacementSystem(store)
    acme = system.add_company(CompanyCreate(name="Acme"))
    before = store.state.model_copy(deep=True)

    store.fail_writes = True
    with pytest.raises(StorageError):
        system.add_timeslot(acme.id, INTERVIEW_DAY, "0900", "0930")
    with pytest.raises(StorageError):
        system.delete_company(acme.id)

    assert store.state == before
    store.fail_writes = False
    assert store.refresh() == before


def test_rejected_operation_leaves_no_partial_mutation(system, acme, acme_slots, ann):
    first, _ = acme_slots
    system.book_interview_slot(first.id, ann.id)
    before = system.state.model_copy(deep=True)

    with pytest.raises(SlotIsBookedError):
        system.toggle_slot_availability(first.id)

    assert system.state == before


def test_returned_views_do_not_alias_store(system, acme, acme_slots):
    company = system.get_company_by_id(acme.id)
    company.available_slots[0].is_available = False
    company.name = "Mutated"

    assert system.get_company_by_id(acme.id).name == "Acme"
    assert system.slots.get_slot(acme_slots[0].id).is_available is True


# ============================================================
# NOTIFICATION
# ============================================================

def test_subscribers_called_once_per_commit(system):
    seen = []
    unsubscribe = system.subscribe(lambda state: seen.append(len(state.companies)))

    system.add_company(CompanyCreate(name="Acme"))
    system.add_company(CompanyCreate(name="Globex"))
    unsubscribe()
    system.add_company(CompanyCreate(name="Initech"))

    assert seen == [1, 2]


def test_failed_operation_does_not_notify(system):
    seen = []
    system.subscribe(seen.append)

    with pytest.raises(CompanyNotFoundError):
        system.delete_company("c-missing")
    assert seen == []


def test_broken_listener_does_not_break_commit(system):
    def broken(state):
        raise RuntimeError("listener bug")

    system.subscribe(broken)
    company = system.add_company(CompanyCreate(name="Acme"))
    assert system.get_company_by_id(company.id) is not None


def test_listener_can_unsubscribe_during_notification(system):
    seen = []

    def once(state):
        seen.append(len(state.companies))
        unsubscribe()

    unsubscribe = system.subscribe(once)
    system.add_company(CompanyCreate(name="Acme"))
    system.add_company(CompanyCreate(name="Globex"))

    assert seen == [1]


def test_store_backend_must_implement_persistence():
    class HalfStore(PlacementStore):
        def _read(self):
            return PlacementState()

    with pytest.raises(TypeError):
        PlacementStore()
    with pytest.raises(TypeError):
        HalfStore()


# ============================================================
# SQL STORE
# ============================================================

@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'placement.db'}"


def test_sql_store_round_trip(sqlite_url):
    system = PlacementSystem(SqlStore(build_engine(sqlite_url)))
    acme = system.add_company(CompanyCreate(name="Acme", intake_number=3, remarks="Portfolio"))
    globex = system.add_company(CompanyCreate(name="Globex"))
    ann = system.add_student(StudentCreate(name="Ann", student_id="ST001"))
    nine = system.add_timeslot(acme.id, INTERVIEW_DAY, "0900", "0930")
    system.add_timeslot(acme.id, INTERVIEW_DAY, "1000", "1030")
    system.add_student_preference(ann.id, globex.id, 2)
    system.add_student_preference(ann.id, acme.id, 1)
    system.book_interview_slot(nine.id, ann.id)
    system.set_offer_status(ann.id, acme.id, OfferStatus.offered)

    reopened = SqlStore(build_engine(sqlite_url))

    assert reopened.state == system.state
    student = reopened.state.find_student(ann.id)
    assert [p.company_id for p in student.preferences] == [globex.id, acme.id]
    assert [s.start_time for s in reopened.state.slots] == ["0900", "1000"]
    assert reopened.state.find_slot(nine.id).booked is True


def test_sql_store_save_failure_is_storage_error(sqlite_url, monkeypatch):
    store = SqlStore(build_engine(sqlite_url))
    system = PlacementSystem(store)
    system.add_company(CompanyCreate(name="Acme"))

    def fail(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(store, "_write", fail)
    with pytest.raises(StorageError):
        system.add_company(CompanyCreate(name="Globex"))

    assert [c.name for c in store.state.companies] == ["Acme"]


# ============================================================
# FACTORY
# ============================================================

def test_build_store_defaults_to_memory():
    store = build_store(Settings(database_url="", postgres_host="", seed_demo_data=False, _env_file=None))
    assert isinstance(store, InMemoryStore)
    assert store.state.companies == []


def test_build_store_seeds_demo_data(sqlite_url):
    store = build_store(Settings(database_url=sqlite_url, seed_demo_data=True, _env_file=None))

    assert isinstance(store, SqlStore)
    assert [c.id for c in store.state.companies] == ["c1", "c2", "c3", "c4", "c5"]
    assert len(store.state.students) == 3

    # second start over the same database does not seed twice
    again = build_store(Settings(database_url=sqlite_url, seed_demo_data=True, _env_file=None))
    assert len(again.state.companies) == 5
