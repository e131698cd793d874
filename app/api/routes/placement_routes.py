"""
Placement Routes (admin only)

GET /placements - List placements with student and job details
POST /placements - Mark a student as placed
GET /placements/available-students - Students not placed yet
"""

from fastapi import APIRouter, Depends
from typing import List

from app.core.auth import get_current_admin
from app.services.placement_service import get_placement_service
from app.schemas.schemas import PlacementCreate, PlacementResponse

router = APIRouter(prefix="/placements", tags=["Placements"])


@router.get("", response_model=List[PlacementResponse])
async def list_placements(admin: dict = Depends(get_current_admin)):
    return get_placement_service().list_placements()


@router.post("", response_model=PlacementResponse, status_code=201)
async def create_placement(data: PlacementCreate, admin: dict = Depends(get_current_admin)):
    """Mark a student as placed. A student can only be placed once."""
    return get_placement_service().create_placement(
        data.user_id, data.job_id, placed_by=admin["user_id"]
    )


@router.get("/available-students", response_model=List[dict])
async def available_students(admin: dict = Depends(get_current_admin)):
    return get_placement_service().list_available_students()
