"""
Offer Tracking

Offer status per (student, company) pair: pending -> offered -> accepted /
rejected / withdrawn. Only pairs with a booked interview are tracked; a pair
without an explicit record reads as ``pending``.
"""

import logging
from typing import List

from app.core.errors import CompanyNotFoundError, InvalidInputError, StudentNotFoundError
from app.schemas.schemas import OfferRecord, OfferStatus, PlacementState
from app.services.store import PlacementStore

logger = logging.getLogger(__name__)


def _find_offer(state: PlacementState, student_id: str, company_id: str):
    return next(
        (o for o in state.offers if o.student_id == student_id and o.company_id == company_id),
        None
    )


class OfferService:

    def __init__(self, store: PlacementStore):
        self.store = store

    def set_offer_status(self, student_id: str, company_id: str, status: OfferStatus) -> OfferRecord:
        try:
            status = OfferStatus(status)
        except ValueError:
            raise InvalidInputError(f"Unknown offer status {status!r}")

        with self.store.transaction() as state:
            if state.find_student(student_id) is None:
                raise StudentNotFoundError(student_id)
            if state.find_company(company_id) is None:
                raise CompanyNotFoundError(company_id)
            if not any(s.company_id == company_id for s in state.slots_for_student(student_id)):
                raise InvalidInputError(
                    f"Student '{student_id}' has no booked interview with company '{company_id}'"
                )

            offer = _find_offer(state, student_id, company_id)
            if offer is None:
                offer = OfferRecord(student_id=student_id, company_id=company_id)
                state.offers.append(offer)
            offer.status = status

        logger.info("Offer status of student %s at company %s is now %s", student_id, company_id, status.value)
        return offer.model_copy()

    def get_offer_status(self, student_id: str, company_id: str) -> OfferStatus:
        offer = _find_offer(self.store.read(), student_id, company_id)
        return offer.status if offer else OfferStatus.pending

    def offer_matrix(self) -> List[OfferRecord]:
        """One entry per interviewed (student, company) pair, in student then slot order."""
        state = self.store.read()
        matrix = []
        for student in state.students:
            seen = set()
            for slot in state.slots_for_student(student.id):
                if slot.company_id in seen:
                    continue
                seen.add(slot.company_id)
                offer = _find_offer(state, student.id, slot.company_id)
                matrix.append(OfferRecord(
                    student_id=student.id,
                    company_id=slot.company_id,
                    status=offer.status if offer else OfferStatus.pending,
                ))
        return matrix
