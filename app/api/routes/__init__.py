"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.company_routes import router as company_router
from app.api.routes.student_routes import router as student_router
from app.api.routes.slot_routes import router as slot_router
from app.api.routes.assignment_routes import router as assignment_router
from app.api.routes.import_routes import router as import_router
from app.api.routes.offer_routes import router as offer_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(company_router)
api_router.include_router(student_router)
api_router.include_router(slot_router)
api_router.include_router(assignment_router)
api_router.include_router(import_router)
api_router.include_router(offer_router)
