"""
Company Routes

GET /companies - List companies (with their slots)
POST /companies - Create company
GET /companies/{id} - Get one company
PUT /companies/{id} - Update company (stored slots kept unless replaced)
DELETE /companies/{id} - Delete company + its slots, preferences, offers
GET /companies/{id}/slots - All slots of a company
POST /companies/{id}/slots - Add an interview slot
GET /companies/{id}/slots/available - Unbooked, available slots
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from app.core.dependencies import get_placement_system
from app.services.placement_system import PlacementSystem
from app.schemas.schemas import (
    Company, CompanyCreate, CompanyUpdate, InterviewSlot, SlotCreate, MessageResponse
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("", response_model=List[Company])
async def list_companies(system: PlacementSystem = Depends(get_placement_system)):
    return system.list_companies()


@router.post("", response_model=Company, status_code=201)
async def create_company(data: CompanyCreate, system: PlacementSystem = Depends(get_placement_system)):
    """Create a company. It starts with no interview slots."""
    return system.add_company(data)


@router.get("/{company_id}", response_model=Company)
async def get_company(company_id: str, system: PlacementSystem = Depends(get_placement_system)):
    company = system.get_company_by_id(company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.put("/{company_id}", response_model=Company)
async def update_company(
    company_id: str,
    data: CompanyUpdate,
    system: PlacementSystem = Depends(get_placement_system)
):
    """
    Update company details.

    Omitting `available_slots` (or sending an empty list) keeps the stored
    slots. A non-empty list replaces the slot schedule.
    """
    if data.id != company_id:
        raise HTTPException(status_code=400, detail="Company id in path and body differ")
    return system.update_company(data)


@router.delete("/{company_id}", response_model=MessageResponse)
async def delete_company(company_id: str, system: PlacementSystem = Depends(get_placement_system)):
    system.delete_company(company_id)
    return MessageResponse(message="The company and all its associated data have been removed.")


@router.get("/{company_id}/slots", response_model=List[InterviewSlot])
async def get_company_slots(company_id: str, system: PlacementSystem = Depends(get_placement_system)):
    return system.slots.get_slots_for_company(company_id)


@router.post("/{company_id}/slots", response_model=InterviewSlot, status_code=201)
async def add_slot(
    company_id: str,
    data: SlotCreate,
    system: PlacementSystem = Depends(get_placement_system)
):
    """Add an interview slot. Times are 24h digits: "0930" or "09:30"."""
    return system.add_timeslot(company_id, data.date, data.start_time, data.end_time)


@router.get("/{company_id}/slots/available", response_model=List[InterviewSlot])
async def get_available_slots(company_id: str, system: PlacementSystem = Depends(get_placement_system)):
    if system.get_company_by_id(company_id) is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return system.get_available_slots_for_company(company_id)
