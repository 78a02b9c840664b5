"""
SQL Store - persists the placement state through SQLAlchemy.

Tables (created on first use):
1. companies            - company records
2. students             - student records (student_ref = external student ID)
3. student_preferences  - ranked preferences, one row per (student, company)
4. interview_slots      - THE slot index; company and student views are derived from it
5. offers               - offer status per (student, company)

Every table carries a ``sort_order`` column so list order (which the matcher
depends on) survives a round trip.

save() rewrites the full snapshot inside ONE database transaction: either the
whole new state lands or (on any error) the rollback keeps the old one.
"""

import logging
from typing import Dict, List

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.db.session import get_db_session, session_factory_for
from app.schemas.schemas import (
    PlacementState, CompanyRecord, StudentRecord, StudentPreference,
    InterviewSlot, OfferRecord
)
from app.services.store import PlacementStore

logger = logging.getLogger(__name__)


SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS companies (
        id VARCHAR(64) PRIMARY KEY,
        sort_order INTEGER NOT NULL,
        name VARCHAR(200) NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        intake_number INTEGER NOT NULL DEFAULT 1,
        interview_place VARCHAR(200) NOT NULL DEFAULT '',
        contact_person VARCHAR(200) NOT NULL DEFAULT '',
        allowance VARCHAR(100) NOT NULL DEFAULT '',
        remarks TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS students (
        id VARCHAR(64) PRIMARY KEY,
        sort_order INTEGER NOT NULL,
        name VARCHAR(100) NOT NULL,
        email VARCHAR(200) NOT NULL DEFAULT '',
        student_ref VARCHAR(64) NOT NULL,
        tel VARCHAR(50) NOT NULL DEFAULT '',
        gpa VARCHAR(20) NOT NULL DEFAULT ''
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS student_preferences (
        student_id VARCHAR(64) NOT NULL,
        company_id VARCHAR(64) NOT NULL,
        sort_order INTEGER NOT NULL,
        pref_rank INTEGER NOT NULL,
        PRIMARY KEY (student_id, company_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS interview_slots (
        id VARCHAR(64) PRIMARY KEY,
        sort_order INTEGER NOT NULL,
        company_id VARCHAR(64) NOT NULL,
        slot_date VARCHAR(10) NOT NULL,
        start_time VARCHAR(8) NOT NULL,
        end_time VARCHAR(8) NOT NULL,
        booked BOOLEAN NOT NULL DEFAULT FALSE,
        is_available BOOLEAN NOT NULL DEFAULT TRUE,
        student_id VARCHAR(64)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS offers (
        student_id VARCHAR(64) NOT NULL,
        company_id VARCHAR(64) NOT NULL,
        status VARCHAR(20) NOT NULL,
        PRIMARY KEY (student_id, company_id)
    )
    """,
]

# Children first, so deletes never trip a future FK
TABLES = ["offers", "student_preferences", "interview_slots", "students", "companies"]


class SqlStore(PlacementStore):
    """Placement store backed by a SQL database (PostgreSQL in production, SQLite in tests)."""

    def __init__(self, engine: Engine):
        super().__init__()
        self.engine = engine
        self._factory = session_factory_for(engine)
        self.init_schema()
        self.state = self.load()

    def init_schema(self) -> None:
        with get_db_session(self._factory) as db:
            for stmt in SCHEMA_STATEMENTS:
                db.execute(text(stmt))
        logger.info("Placement tables verified on %s", self.engine.url.render_as_string(hide_password=True))

    # ----------------------------------------------------------
    # READ
    # ----------------------------------------------------------

    def _read(self) -> PlacementState:
        with get_db_session(self._factory) as db:
            company_rows = db.execute(text("""
                SELECT id, name, description, intake_number, interview_place,
                       contact_person, allowance, remarks
                FROM companies ORDER BY sort_order
            """)).mappings().all()

            student_rows = db.execute(text("""
                SELECT id, name, email, student_ref, tel, gpa
                FROM students ORDER BY sort_order
            """)).mappings().all()

            pref_rows = db.execute(text("""
                SELECT student_id, company_id, pref_rank
                FROM student_preferences ORDER BY student_id, sort_order
            """)).mappings().all()

            slot_rows = db.execute(text("""
                SELECT id, company_id, slot_date, start_time, end_time, booked, is_available, student_id
                FROM interview_slots ORDER BY sort_order
            """)).mappings().all()

            offer_rows = db.execute(text("""
                SELECT student_id, company_id, status FROM offers
            """)).mappings().all()

        prefs_by_student: Dict[str, List[StudentPreference]] = {}
        for r in pref_rows:
            prefs_by_student.setdefault(r["student_id"], []).append(
                StudentPreference(student_id=r["student_id"], company_id=r["company_id"], rank=r["pref_rank"])
            )

        return PlacementState(
            companies=[CompanyRecord(**dict(r)) for r in company_rows],
            students=[
                StudentRecord(
                    id=r["id"], name=r["name"], email=r["email"], student_id=r["student_ref"],
                    tel=r["tel"], gpa=r["gpa"], preferences=prefs_by_student.get(r["id"], [])
                ) for r in student_rows
            ],
            slots=[
                InterviewSlot(
                    id=r["id"], company_id=r["company_id"], date=r["slot_date"],
                    start_time=r["start_time"], end_time=r["end_time"],
                    booked=bool(r["booked"]), is_available=bool(r["is_available"]),
                    student_id=r["student_id"]
                ) for r in slot_rows
            ],
            offers=[OfferRecord(**dict(r)) for r in offer_rows],
        )

    # ----------------------------------------------------------
    # WRITE (full snapshot, one transaction)
    # ----------------------------------------------------------

    def _write(self, state: PlacementState) -> None:
        companies = [
            {**c.model_dump(), "sort_order": i} for i, c in enumerate(state.companies)
        ]
        students = [
            {
                "id": s.id, "sort_order": i, "name": s.name, "email": s.email,
                "student_ref": s.student_id, "tel": s.tel, "gpa": s.gpa
            } for i, s in enumerate(state.students)
        ]
        prefs = [
            {"student_id": s.id, "company_id": p.company_id, "sort_order": i, "pref_rank": p.rank}
            for s in state.students for i, p in enumerate(s.preferences)
        ]
        slots = [
            {
                "id": s.id, "sort_order": i, "company_id": s.company_id,
                "slot_date": s.date.isoformat(), "start_time": s.start_time, "end_time": s.end_time,
                "booked": s.booked, "is_available": s.is_available, "student_id": s.student_id
            } for i, s in enumerate(state.slots)
        ]
        offers = [
            {"student_id": o.student_id, "company_id": o.company_id, "status": o.status.value}
            for o in state.offers
        ]

        with get_db_session(self._factory) as db:
            for table in TABLES:
                db.execute(text(f"DELETE FROM {table}"))

            if companies:
                db.execute(text("""
                    INSERT INTO companies (id, sort_order, name, description, intake_number,
                                           interview_place, contact_person, allowance, remarks)
                    VALUES (:id, :sort_order, :name, :description, :intake_number,
                            :interview_place, :contact_person, :allowance, :remarks)
                """), companies)
            if students:
                db.execute(text("""
                    INSERT INTO students (id, sort_order, name, email, student_ref, tel, gpa)
                    VALUES (:id, :sort_order, :name, :email, :student_ref, :tel, :gpa)
                """), students)
            if prefs:
                db.execute(text("""
                    INSERT INTO student_preferences (student_id, company_id, sort_order, pref_rank)
                    VALUES (:student_id, :company_id, :sort_order, :pref_rank)
                """), prefs)
            if slots:
                db.execute(text("""
                    INSERT INTO interview_slots (id, sort_order, company_id, slot_date, start_time,
                                                 end_time, booked, is_available, student_id)
                    VALUES (:id, :sort_order, :company_id, :slot_date, :start_time,
                            :end_time, :booked, :is_available, :student_id)
                """), slots)
            if offers:
                db.execute(text("""
                    INSERT INTO offers (student_id, company_id, status)
                    VALUES (:student_id, :company_id, :status)
                """), offers)

        logger.debug(
            "Saved placement state: %d companies, %d students, %d slots",
            len(companies), len(students), len(slots)
        )
