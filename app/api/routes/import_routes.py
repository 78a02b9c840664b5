"""
Import Routes

Bodies are pre-parsed, field-mapped rows (spreadsheet parsing happens client side).

POST /imports/companies - Replace all companies
POST /imports/students - Replace all students
POST /imports/preferences - Upsert preferences by student ID + company name
"""

from fastapi import APIRouter, Depends
from typing import Any, Dict, List

from app.core.dependencies import get_placement_system
from app.services.placement_system import PlacementSystem
from app.schemas.schemas import ImportReport

router = APIRouter(prefix="/imports", tags=["Imports"])

# Raw dict rows: each row is validated individually so one bad row is skipped, not fatal
Rows = List[Dict[str, Any]]


@router.post("/companies", response_model=ImportReport)
async def import_companies(rows: Rows, system: PlacementSystem = Depends(get_placement_system)):
    return system.import_companies(rows)


@router.post("/students", response_model=ImportReport)
async def import_students(rows: Rows, system: PlacementSystem = Depends(get_placement_system)):
    return system.import_students(rows)


@router.post("/preferences", response_model=ImportReport)
async def import_preferences(rows: Rows, system: PlacementSystem = Depends(get_placement_system)):
    return system.import_preferences(rows)
