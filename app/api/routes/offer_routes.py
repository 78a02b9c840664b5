"""
Offer Routes

GET /offers - Offer status matrix (one entry per interviewed student/company pair)
PUT /offers - Set the offer status of a pair
"""

from fastapi import APIRouter, Depends
from typing import List

from app.core.dependencies import get_placement_system
from app.services.placement_system import PlacementSystem
from app.schemas.schemas import OfferRecord, OfferStatusUpdate

router = APIRouter(prefix="/offers", tags=["Offers"])


@router.get("", response_model=List[OfferRecord])
async def get_offer_matrix(system: PlacementSystem = Depends(get_placement_system)):
    return system.offer_matrix()


@router.put("", response_model=OfferRecord)
async def update_offer_status(data: OfferStatusUpdate, system: PlacementSystem = Depends(get_placement_system)):
    """Update offer status: pending, offered, accepted, rejected or withdrawn."""
    return system.set_offer_status(data.student_id, data.company_id, data.status)
