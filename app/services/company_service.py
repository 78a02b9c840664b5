"""
Company Registry

Create / update / delete companies.

update_company never clobbers the stored slot schedule: an omitted or empty
``available_slots`` keeps what is stored. Only a non-empty list replaces it.

delete_company cascades in one transaction: slots (and thereby the bookings on
them), preferences and offers for the company all go with it.
"""

import logging
from typing import List, Optional, Union

from app.core.errors import CompanyNotFoundError, InvalidInputError, SlotIsBookedError
from app.schemas.schemas import (
    Company, CompanyCreate, CompanyRecord, CompanyUpdate, InterviewSlot, PlacementState
)
from app.services.store import PlacementStore
from app.utils.helpers import new_id, parse_date, normalize_time

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = list(CompanyCreate.model_fields)


class CompanyService:

    def __init__(self, store: PlacementStore):
        self.store = store

    # ----------------------------------------------------------
    # QUERIES
    # ----------------------------------------------------------

    def get_company_by_id(self, company_id: str) -> Optional[Company]:
        state = self.store.read()
        record = state.find_company(company_id)
        return state.company_view(record) if record else None

    def list_companies(self) -> List[Company]:
        state = self.store.read()
        return [state.company_view(c) for c in state.companies]

    # ----------------------------------------------------------
    # MUTATIONS
    # ----------------------------------------------------------

    def add_company(self, data: CompanyCreate) -> Company:
        with self.store.transaction() as state:
            record = CompanyRecord(id=new_id("c"), **data.model_dump())
            state.companies.append(record)
            view = state.company_view(record)

        logger.info("Added company %s (%s)", record.id, record.name)
        return view

    def update_company(self, company: Union[Company, CompanyUpdate]) -> Company:
        """
        Replace the editable fields of a stored company.

        A non-empty ``available_slots`` replaces the slot schedule: listed slots
        are upserted (date, times, availability), unlisted ones are removed.
        Booking state is never taken from the payload.

        Raises:
            CompanyNotFoundError
            SlotIsBookedError: the replacement would drop or disable a booked slot
        """
        if not isinstance(company, CompanyUpdate):
            company = CompanyUpdate.model_validate(company.model_dump())

        with self.store.transaction() as state:
            record = state.find_company(company.id)
            if record is None:
                raise CompanyNotFoundError(company.id)

            for field in EDITABLE_FIELDS:
                setattr(record, field, getattr(company, field))

            if company.available_slots:
                self._replace_schedule(state, record.id, company.available_slots)
            view = state.company_view(record)

        logger.info("Updated company %s (%d slots)", record.id, len(view.available_slots))
        return view

    def delete_company(self, company_id: str) -> None:
        with self.store.transaction() as state:
            record = state.find_company(company_id)
            if record is None:
                raise CompanyNotFoundError(company_id)

            removed = len(state.slots_for_company(company_id))
            state.slots = [s for s in state.slots if s.company_id != company_id]
            for student in state.students:
                student.preferences = [p for p in student.preferences if p.company_id != company_id]
            state.offers = [o for o in state.offers if o.company_id != company_id]
            state.companies.remove(record)

        logger.info("Deleted company %s with %d slots", company_id, removed)

    # ----------------------------------------------------------
    # HELPERS
    # ----------------------------------------------------------

    @staticmethod
    def _replace_schedule(state: PlacementState, company_id: str, entries) -> None:
        current = {s.id: s for s in state.slots_for_company(company_id)}
        keep_ids = {e.id for e in entries if e.id}

        for slot_id, slot in current.items():
            if slot_id not in keep_ids and slot.booked:
                raise SlotIsBookedError(slot_id, "remove")

        # Drop unlisted slots, keeping global order of the rest
        state.slots = [
            s for s in state.slots
            if s.company_id != company_id or s.id in keep_ids
        ]

        for entry in entries:
            slot = current.get(entry.id) if entry.id else None
            if slot is None:
                if entry.id and state.find_slot(entry.id) is not None:
                    raise InvalidInputError(f"Slot '{entry.id}' belongs to another company")
                state.slots.append(InterviewSlot(
                    id=entry.id or new_id("slot"),
                    date=parse_date(entry.date),
                    start_time=normalize_time(entry.start_time, "start_time"),
                    end_time=normalize_time(entry.end_time, "end_time"),
                    company_id=company_id,
                    is_available=entry.is_available,
                ))
                continue

            if slot.booked and not entry.is_available:
                raise SlotIsBookedError(slot.id, "change availability of")
            slot.date = parse_date(entry.date)
            slot.start_time = normalize_time(entry.start_time, "start_time")
            slot.end_time = normalize_time(entry.end_time, "end_time")
            slot.is_available = entry.is_available
