"""
Schedule views - booked interviews sorted for display/export.
"""

from typing import List

from app.schemas.schemas import InterviewSlot, ScheduleOrder
from app.services.store import PlacementStore


def _time_key(slot: InterviewSlot):
    return (slot.date, slot.start_time)


class ScheduleService:

    def __init__(self, store: PlacementStore):
        self.store = store

    def sort_slots_by_date(self, slots: List[InterviewSlot]) -> List[InterviewSlot]:
        return sorted(slots, key=_time_key)

    def sort_slots_by_company_and_date(self, slots: List[InterviewSlot]) -> List[InterviewSlot]:
        state = self.store.read()
        names = {c.id: c.name for c in state.companies}
        return sorted(slots, key=lambda s: (names.get(s.company_id, ""),) + _time_key(s))

    def booked_schedule(self, order: ScheduleOrder = ScheduleOrder.date) -> List[InterviewSlot]:
        booked = [s.model_copy() for s in self.store.read().slots if s.booked]
        if ScheduleOrder(order) == ScheduleOrder.company:
            return self.sort_slots_by_company_and_date(booked)
        return self.sort_slots_by_date(booked)
