"""
Student Registry

Create / update / delete students and manage their ranked preferences.

Preferences: at most one per company. Rank 1 = most preferred, no upper bound.
Rank 0 means "no preference" and removes the entry.

delete_student RELEASES the student's slots (booked=False, student_id=None);
the slots themselves survive and can be booked again.
"""

import logging
from typing import List, Optional, Union

from app.core.errors import CompanyNotFoundError, InvalidInputError, StudentNotFoundError
from app.schemas.schemas import (
    PlacementState, Student, StudentCreate, StudentPreference, StudentRecord, StudentUpdate
)
from app.services.slot_service import release
from app.services.store import PlacementStore
from app.utils.helpers import new_id

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = list(StudentCreate.model_fields)


def upsert_preference(record: StudentRecord, company_id: str, rank: int) -> None:
    """Replace-in-place if the company is already ranked, else append."""
    preference = StudentPreference(student_id=record.id, company_id=company_id, rank=rank)
    for i, existing in enumerate(record.preferences):
        if existing.company_id == company_id:
            record.preferences[i] = preference
            return
    record.preferences.append(preference)


def _get_student(state: PlacementState, student_id: str) -> StudentRecord:
    record = state.find_student(student_id)
    if record is None:
        raise StudentNotFoundError(student_id)
    return record


class StudentService:

    def __init__(self, store: PlacementStore):
        self.store = store

    # ----------------------------------------------------------
    # QUERIES
    # ----------------------------------------------------------

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        state = self.store.read()
        record = state.find_student(student_id)
        return state.student_view(record) if record else None

    def list_students(self) -> List[Student]:
        state = self.store.read()
        return [state.student_view(s) for s in state.students]

    # ----------------------------------------------------------
    # MUTATIONS
    # ----------------------------------------------------------

    def add_student(self, data: StudentCreate) -> Student:
        with self.store.transaction() as state:
            record = StudentRecord(id=new_id("s"), **data.model_dump())
            state.students.append(record)
            view = state.student_view(record)

        logger.info("Added student %s (%s)", record.id, record.student_id)
        return view

    def update_student(self, student: Union[Student, StudentUpdate]) -> Student:
        """
        Replace the editable fields of a stored student.

        Preferences are replaced only by a non-empty list; an omitted or empty
        list keeps the stored ones. Bookings are never taken from the payload.
        """
        if not isinstance(student, StudentUpdate):
            student = StudentUpdate.model_validate(student.model_dump())

        with self.store.transaction() as state:
            record = _get_student(state, student.id)
            for field in EDITABLE_FIELDS:
                setattr(record, field, getattr(student, field))

            if student.preferences:
                record.preferences = self._validated_preferences(state, record.id, student.preferences)
            view = state.student_view(record)

        logger.info("Updated student %s", record.id)
        return view

    def delete_student(self, student_id: str) -> None:
        with self.store.transaction() as state:
            record = _get_student(state, student_id)

            held = state.slots_for_student(student_id)
            for slot in held:
                release(slot)
            state.offers = [o for o in state.offers if o.student_id != student_id]
            state.students.remove(record)

        logger.info("Deleted student %s, released %d slots", student_id, len(held))

    def add_student_preference(self, student_id: str, company_id: str, rank: int) -> Student:
        """
        Set, replace or (rank 0) clear a student's preference for a company.

        Raises:
            StudentNotFoundError
            CompanyNotFoundError: unknown company with rank > 0
            InvalidInputError: negative rank
        """
        if rank < 0:
            raise InvalidInputError(f"Preference rank must be >= 0, got {rank}")

        with self.store.transaction() as state:
            record = _get_student(state, student_id)

            if rank == 0:
                record.preferences = [p for p in record.preferences if p.company_id != company_id]
                action = "Cleared"
            else:
                if state.find_company(company_id) is None:
                    raise CompanyNotFoundError(company_id)
                upsert_preference(record, company_id, rank)
                action = "Saved"
            view = state.student_view(record)

        logger.info("%s preference of student %s for company %s (rank %d)", action, student_id, company_id, rank)
        return view

    # ----------------------------------------------------------
    # HELPERS
    # ----------------------------------------------------------

    @staticmethod
    def _validated_preferences(
        state: PlacementState, student_id: str, preferences: List[StudentPreference]
    ) -> List[StudentPreference]:
        seen = set()
        result = []
        for pref in preferences:
            if pref.company_id in seen:
                raise InvalidInputError(f"Duplicate preference for company '{pref.company_id}'")
            if state.find_company(pref.company_id) is None:
                raise CompanyNotFoundError(pref.company_id)
            seen.add(pref.company_id)
            result.append(StudentPreference(student_id=student_id, company_id=pref.company_id, rank=pref.rank))
        return result
