"""
Slot Registry

Sole authority for the interview-slot lifecycle and the booking invariants:

- booked  =>  student_id is set AND is_available is True
- a booked slot cannot be toggled unavailable
- a booked slot cannot be removed (release it first)
- booking a slot held by another student moves it (rebooking, never double-booking)
- a student who loses their last slot at a company loses the offer record too

Slots are stored ONCE, in ``state.slots``. A company's ``available_slots`` and a
student's ``booked_interviews`` are computed from that list, so there is no
second copy to keep in lockstep.
"""

import logging
from datetime import date
from typing import List, Union

from app.core.errors import (
    CompanyNotFoundError, StudentNotFoundError, SlotNotFoundError,
    SlotIsBookedError, SlotNotAvailableError
)
from app.schemas.schemas import InterviewSlot, PlacementState
from app.services.store import PlacementStore
from app.utils.helpers import new_id, parse_date, normalize_time

logger = logging.getLogger(__name__)


def _get_slot(state: PlacementState, slot_id: str) -> InterviewSlot:
    slot = state.find_slot(slot_id)
    if slot is None:
        raise SlotNotFoundError(slot_id)
    return slot


def release(slot: InterviewSlot) -> None:
    """Unbook in place. The slot survives and becomes offerable again."""
    slot.booked = False
    slot.student_id = None


def drop_stale_offer(state: PlacementState, student_id: str, company_id: str) -> None:
    """An offer only exists while the student still holds a slot at the company."""
    if any(s.company_id == company_id for s in state.slots_for_student(student_id)):
        return
    state.offers = [
        o for o in state.offers
        if not (o.student_id == student_id and o.company_id == company_id)
    ]


class SlotService:

    def __init__(self, store: PlacementStore):
        self.store = store

    def add_timeslot(
        self,
        company_id: str,
        slot_date: Union[date, str],
        start_time: str,
        end_time: str,
    ) -> InterviewSlot:
        """
        Create an unbooked, available slot for a company.

        Raises:
            CompanyNotFoundError: unknown company
            InvalidInputError: unparseable date or empty time
        """
        parsed_date = parse_date(slot_date)
        start = normalize_time(start_time, "start_time")
        end = normalize_time(end_time, "end_time")

        with self.store.transaction() as state:
            if state.find_company(company_id) is None:
                raise CompanyNotFoundError(company_id)

            slot = InterviewSlot(
                id=new_id("slot"),
                date=parsed_date,
                start_time=start,
                end_time=end,
                company_id=company_id,
                booked=False,
                is_available=True,
            )
            state.slots.append(slot)

        logger.info("Added slot %s for company %s on %s %s-%s", slot.id, company_id, parsed_date, start, end)
        return slot.model_copy()

    def remove_timeslot(self, slot_id: str) -> bool:
        """
        Delete a slot. Booked slots are refused: call release_slot() first.

        Raises:
            SlotNotFoundError, SlotIsBookedError
        """
        with self.store.transaction() as state:
            slot = _get_slot(state, slot_id)
            if slot.booked:
                raise SlotIsBookedError(slot_id, "remove")
            state.slots.remove(slot)

        logger.info("Removed slot %s", slot_id)
        return True

    def release_slot(self, slot_id: str) -> InterviewSlot:
        """Explicit unbook step. No-op on an unbooked slot."""
        with self.store.transaction() as state:
            slot = _get_slot(state, slot_id)
            previous = slot.student_id
            release(slot)
            if previous:
                drop_stale_offer(state, previous, slot.company_id)

        if previous:
            logger.info("Released slot %s from student %s", slot_id, previous)
        return slot.model_copy()

    def toggle_slot_availability(self, slot_id: str) -> InterviewSlot:
        """
        Flip is_available.

        Raises:
            SlotNotFoundError, SlotIsBookedError
        """
        with self.store.transaction() as state:
            slot = _get_slot(state, slot_id)
            if slot.booked:
                raise SlotIsBookedError(slot_id, "change availability of")
            slot.is_available = not slot.is_available

        logger.info("Slot %s is now %s", slot_id, "available" if slot.is_available else "unavailable")
        return slot.model_copy()

    def book_interview_slot(self, slot_id: str, student_id: str) -> InterviewSlot:
        """
        Book a slot for a student.

        If another student held the slot, their booking is released first.
        Booking a slot the student already holds is a no-op update.

        Raises:
            SlotNotFoundError, StudentNotFoundError, SlotNotAvailableError
        """
        with self.store.transaction() as state:
            slot = _get_slot(state, slot_id)
            if state.find_student(student_id) is None:
                raise StudentNotFoundError(student_id)
            if not slot.is_available:
                raise SlotNotAvailableError(slot_id)

            previous = slot.student_id if slot.booked else None
            slot.booked = True
            slot.student_id = student_id
            if previous and previous != student_id:
                drop_stale_offer(state, previous, slot.company_id)

        if previous and previous != student_id:
            logger.info("Rebooked slot %s from student %s to %s", slot_id, previous, student_id)
        else:
            logger.info("Booked slot %s for student %s", slot_id, student_id)
        return slot.model_copy()

    def get_available_slots_for_company(self, company_id: str) -> List[InterviewSlot]:
        """Unbooked, available slots of a company in insertion order."""
        state = self.store.read()
        return [
            s.model_copy() for s in state.slots_for_company(company_id)
            if not s.booked and s.is_available
        ]

    def get_slots_for_company(self, company_id: str) -> List[InterviewSlot]:
        state = self.store.read()
        if state.find_company(company_id) is None:
            raise CompanyNotFoundError(company_id)
        return [s.model_copy() for s in state.slots_for_company(company_id)]

    def get_slot(self, slot_id: str) -> InterviewSlot:
        return _get_slot(self.store.read(), slot_id).model_copy()
