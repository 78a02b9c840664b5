"""
Placement System - the one object the outside world talks to.

Wires a single PlacementStore into every registry and exposes the whole
capability surface (companies, students, preferences, slots, matching,
imports, offers, schedule). Created once at startup (see app/main.py);
tests build one over an InMemoryStore.

Usage:
    system = PlacementSystem(InMemoryStore())
    acme = system.add_company(CompanyCreate(name="Acme"))
    slot = system.add_timeslot(acme.id, "2025-03-01", "0900", "0930")
"""

import logging
from datetime import date
from typing import Callable, Iterable, List, Optional, Union

from app.core.config import Settings, get_settings
from app.data.mock_data import demo_state
from app.db.session import build_engine
from app.schemas.schemas import (
    AssignmentReport, Company, CompanyCreate, CompanyImportData, CompanyUpdate,
    ImportReport, InterviewSlot, OfferRecord, OfferStatus, PlacementState,
    PreferenceImportData, ScheduleOrder, Student, StudentCreate, StudentImportData,
    StudentUpdate
)
from app.services.company_service import CompanyService
from app.services.import_service import ImportService
from app.services.matching_service import MatchingService
from app.services.offer_service import OfferService
from app.services.schedule_service import ScheduleService
from app.services.slot_service import SlotService
from app.services.sql_store import SqlStore
from app.services.store import InMemoryStore, PlacementStore
from app.services.student_service import StudentService

logger = logging.getLogger(__name__)


class PlacementSystem:

    def __init__(self, store: PlacementStore):
        self.store = store
        self.companies = CompanyService(store)
        self.students = StudentService(store)
        self.slots = SlotService(store)
        self.matching = MatchingService(store, self.slots)
        self.imports = ImportService(store)
        self.offers = OfferService(store)
        self.schedule = ScheduleService(store)

    # ----------------------------------------------------------
    # STATE
    # ----------------------------------------------------------

    @property
    def state(self) -> PlacementState:
        return self.store.state

    def refresh(self) -> PlacementState:
        return self.store.refresh()

    def subscribe(self, listener: Callable[[PlacementState], None]) -> Callable[[], None]:
        return self.store.subscribe(listener)

    # ----------------------------------------------------------
    # COMPANIES
    # ----------------------------------------------------------

    def add_company(self, data: CompanyCreate) -> Company:
        return self.companies.add_company(data)

    def update_company(self, company: Union[Company, CompanyUpdate]) -> Company:
        return self.companies.update_company(company)

    def delete_company(self, company_id: str) -> None:
        self.companies.delete_company(company_id)

    def get_company_by_id(self, company_id: str) -> Optional[Company]:
        return self.companies.get_company_by_id(company_id)

    def list_companies(self) -> List[Company]:
        return self.companies.list_companies()

    # ----------------------------------------------------------
    # STUDENTS
    # ----------------------------------------------------------

    def add_student(self, data: StudentCreate) -> Student:
        return self.students.add_student(data)

    def update_student(self, student: Union[Student, StudentUpdate]) -> Student:
        return self.students.update_student(student)

    def delete_student(self, student_id: str) -> None:
        self.students.delete_student(student_id)

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        return self.students.get_student_by_id(student_id)

    def list_students(self) -> List[Student]:
        return self.students.list_students()

    def add_student_preference(self, student_id: str, company_id: str, rank: int) -> Student:
        return self.students.add_student_preference(student_id, company_id, rank)

    # ----------------------------------------------------------
    # SLOTS
    # ----------------------------------------------------------

    def add_timeslot(self, company_id: str, slot_date: Union[date, str], start_time: str, end_time: str) -> InterviewSlot:
        return self.slots.add_timeslot(company_id, slot_date, start_time, end_time)

    def remove_timeslot(self, slot_id: str) -> bool:
        return self.slots.remove_timeslot(slot_id)

    def release_slot(self, slot_id: str) -> InterviewSlot:
        return self.slots.release_slot(slot_id)

    def toggle_slot_availability(self, slot_id: str) -> InterviewSlot:
        return self.slots.toggle_slot_availability(slot_id)

    def book_interview_slot(self, slot_id: str, student_id: str) -> InterviewSlot:
        return self.slots.book_interview_slot(slot_id, student_id)

    def get_available_slots_for_company(self, company_id: str) -> List[InterviewSlot]:
        return self.slots.get_available_slots_for_company(company_id)

    # ----------------------------------------------------------
    # MATCHING / IMPORTS / OFFERS / SCHEDULE
    # ----------------------------------------------------------

    def auto_assign_interviews(self) -> AssignmentReport:
        return self.matching.auto_assign_interviews()

    def import_companies(self, records: Iterable[Union[dict, CompanyImportData]]) -> ImportReport:
        return self.imports.import_companies(records)

    def import_students(self, records: Iterable[Union[dict, StudentImportData]]) -> ImportReport:
        return self.imports.import_students(records)

    def import_preferences(self, records: Iterable[Union[dict, PreferenceImportData]]) -> ImportReport:
        return self.imports.import_preferences(records)

    def set_offer_status(self, student_id: str, company_id: str, status: OfferStatus) -> OfferRecord:
        return self.offers.set_offer_status(student_id, company_id, status)

    def offer_matrix(self) -> List[OfferRecord]:
        return self.offers.offer_matrix()

    def booked_schedule(self, order: ScheduleOrder = ScheduleOrder.date) -> List[InterviewSlot]:
        return self.schedule.booked_schedule(order)


# ============================================================
# FACTORY
# ============================================================

def build_store(settings: Settings = None) -> PlacementStore:
    """SqlStore when a database is configured, otherwise InMemoryStore. Seeds demo data into an empty store if asked."""
    settings = settings or get_settings()

    if settings.sqlalchemy_url:
        store = SqlStore(build_engine(settings.sqlalchemy_url, echo=settings.debug))
    else:
        logger.info("No database configured, using in-memory store")
        store = InMemoryStore()

    if settings.seed_demo_data and not store.state.companies and not store.state.students:
        seed = demo_state()
        with store.transaction() as state:
            state.companies = seed.companies
            state.students = seed.students
        logger.info("Seeded %d demo companies and %d demo students", len(seed.companies), len(seed.students))

    return store
