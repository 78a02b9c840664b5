"""
Assignment Routes

POST /assignments/auto - Greedy auto-assignment by preference rank
GET /assignments/schedule - Booked interviews, sorted by date or by company
"""

from fastapi import APIRouter, Depends, Query
from typing import List

from app.core.dependencies import get_placement_system
from app.services.placement_system import PlacementSystem
from app.schemas.schemas import AssignmentReport, InterviewSlot, ScheduleOrder

router = APIRouter(prefix="/assignments", tags=["Assignments"])


@router.post("/auto", response_model=AssignmentReport)
async def auto_assign(system: PlacementSystem = Depends(get_placement_system)):
    """
    Auto-assign interviews.

    Process:
    1. Students in id order
    2. Each student's preferences by rank (1 first)
    3. First available slot of the best-ranked company with availability

    Students who get nothing are listed in `unassigned_student_ids`.
    """
    return system.auto_assign_interviews()


@router.get("/schedule", response_model=List[InterviewSlot])
async def get_schedule(
    order: ScheduleOrder = Query(ScheduleOrder.date, description="Sort by 'date' or by 'company' then date"),
    system: PlacementSystem = Depends(get_placement_system)
):
    return system.booked_schedule(order)
