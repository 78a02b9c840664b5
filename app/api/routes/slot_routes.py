"""
Slot Routes

GET /slots/{id} - Get a slot
DELETE /slots/{id} - Remove a slot (refused while booked)
POST /slots/{id}/toggle - Flip availability (refused while booked)
POST /slots/{id}/book - Book for a student (moves it if someone else held it)
POST /slots/{id}/release - Unbook
"""

from fastapi import APIRouter, Depends

from app.core.dependencies import get_placement_system
from app.services.placement_system import PlacementSystem
from app.schemas.schemas import InterviewSlot, BookingRequest, MessageResponse

router = APIRouter(prefix="/slots", tags=["Interview Slots"])


@router.get("/{slot_id}", response_model=InterviewSlot)
async def get_slot(slot_id: str, system: PlacementSystem = Depends(get_placement_system)):
    return system.slots.get_slot(slot_id)


@router.delete("/{slot_id}", response_model=MessageResponse)
async def remove_slot(slot_id: str, system: PlacementSystem = Depends(get_placement_system)):
    system.remove_timeslot(slot_id)
    return MessageResponse(message="The interview timeslot has been removed.")


@router.post("/{slot_id}/toggle", response_model=InterviewSlot)
async def toggle_slot(slot_id: str, system: PlacementSystem = Depends(get_placement_system)):
    return system.toggle_slot_availability(slot_id)


@router.post("/{slot_id}/book", response_model=InterviewSlot)
async def book_slot(
    slot_id: str,
    data: BookingRequest,
    system: PlacementSystem = Depends(get_placement_system)
):
    return system.book_interview_slot(slot_id, data.student_id)


@router.post("/{slot_id}/release", response_model=InterviewSlot)
async def release_slot(slot_id: str, system: PlacementSystem = Depends(get_placement_system)):
    return system.release_slot(slot_id)
