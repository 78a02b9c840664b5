"""
Student Routes

GET /students - List students (with preferences and booked interviews)
POST /students - Create student
GET /students/{id} - Get one student
PUT /students/{id} - Update student
DELETE /students/{id} - Delete student (their slots are released, not deleted)
PUT /students/{id}/preferences - Set a preference (rank 0 removes it)
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from app.core.dependencies import get_placement_system
from app.services.placement_system import PlacementSystem
from app.schemas.schemas import (
    Student, StudentCreate, StudentUpdate, PreferenceSet, MessageResponse
)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("", response_model=List[Student])
async def list_students(system: PlacementSystem = Depends(get_placement_system)):
    return system.list_students()


@router.post("", response_model=Student, status_code=201)
async def create_student(data: StudentCreate, system: PlacementSystem = Depends(get_placement_system)):
    return system.add_student(data)


@router.get("/{student_id}", response_model=Student)
async def get_student(student_id: str, system: PlacementSystem = Depends(get_placement_system)):
    student = system.get_student_by_id(student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.put("/{student_id}", response_model=Student)
async def update_student(
    student_id: str,
    data: StudentUpdate,
    system: PlacementSystem = Depends(get_placement_system)
):
    if data.id != student_id:
        raise HTTPException(status_code=400, detail="Student id in path and body differ")
    return system.update_student(data)


@router.delete("/{student_id}", response_model=MessageResponse)
async def delete_student(student_id: str, system: PlacementSystem = Depends(get_placement_system)):
    system.delete_student(student_id)
    return MessageResponse(message="The student has been removed and their interview slots released.")


@router.put("/{student_id}/preferences", response_model=Student)
async def set_preference(
    student_id: str,
    data: PreferenceSet,
    system: PlacementSystem = Depends(get_placement_system)
):
    """Set a company preference. Rank 1 = most preferred; rank 0 removes the preference."""
    return system.add_student_preference(student_id, data.company_id, data.rank)
