"""
FastAPI dependencies.

The PlacementSystem is created once in the app lifespan and stored on
``app.state``; routes receive it through ``Depends(get_placement_system)``.
Tests override this dependency with a system over an InMemoryStore.
"""

from fastapi import HTTPException, Request, status

from app.services.placement_system import PlacementSystem


def get_placement_system(request: Request) -> PlacementSystem:
    """
    FastAPI dependency - the application's PlacementSystem.

    Usage:
        @router.get("/companies")
        async def list_companies(system: PlacementSystem = Depends(get_placement_system)):
            ...
    """
    system = getattr(request.app.state, "placement_system", None)
    if system is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Placement system not initialized")
    return system
