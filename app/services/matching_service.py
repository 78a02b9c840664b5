"""
Matching Service - greedy interview auto-assignment

PURPOSE:
Book one interview per student, following each student's preference ranking.

HOW IT WORKS:
1. Order students by internal id (plain string order)
2. For each student, walk their preferences by ascending rank (1 first;
   equal ranks keep their list order)
3. For each preferred company, ask the Slot Registry for available slots
4. Book the FIRST one (stable slot order) and move on to the next student
5. A student none of whose companies has a free slot stays unassigned

WHAT IT IS NOT:
- Not a stable matching (no Gale-Shapley, no proposals, no backtracking)
- Not an optimizer: earlier students in id order win contested slots
- Single pass: every student is considered exactly once per run

"No slot found" is a normal outcome, reported as data in the
AssignmentReport, never raised.
"""

import logging

from app.schemas.schemas import Assignment, AssignmentReport
from app.services.slot_service import SlotService
from app.services.store import PlacementStore

logger = logging.getLogger(__name__)


class MatchingService:
    """Runs the greedy first-fit assignment over the current state."""

    def __init__(self, store: PlacementStore, slot_service: SlotService):
        self.store = store
        self.slots = slot_service

    def auto_assign_interviews(self) -> AssignmentReport:
        """
        Assign interviews in one transaction.

        Returns:
            AssignmentReport with one Assignment per booked student and the
            ids of students who received nothing in this pass.
        """
        report = AssignmentReport()

        with self.store.transaction() as state:
            students = sorted(state.students, key=lambda s: s.id)

            for student in students:
                assignment = self._assign_student(state, student)
                if assignment is None:
                    report.unassigned_student_ids.append(student.id)
                else:
                    report.assignments.append(assignment)

        logger.info(
            "Auto-assignment complete: %d assigned, %d unassigned",
            report.assigned_count, len(report.unassigned_student_ids)
        )
        return report

    def _assign_student(self, state, student):
        # sorted() is stable: equal ranks keep list order
        for preference in sorted(student.preferences, key=lambda p: p.rank):
            if state.find_company(preference.company_id) is None:
                continue

            available = self.slots.get_available_slots_for_company(preference.company_id)
            if not available:
                continue

            slot = available[0]
            self.slots.book_interview_slot(slot.id, student.id)
            logger.debug(
                "Student %s -> slot %s (company %s, rank %d)",
                student.id, slot.id, preference.company_id, preference.rank
            )
            return Assignment(student_id=student.id, slot_id=slot.id, company_id=preference.company_id)

        return None

