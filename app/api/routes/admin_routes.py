"""
Admin Routes

GET /admin/overview - Student, active job and placement counts
GET /admin/students - Student directory with search/branch filter
GET /admin/analytics - Skill demand, branch distribution, placement stats
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.core.auth import get_current_admin
from app.services.admin_service import get_admin_service
from app.schemas.schemas import (
    AnalyticsResponse, BranchType, OverviewResponse, StudentSummary
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/overview", response_model=OverviewResponse)
async def overview(admin: dict = Depends(get_current_admin)):
    return get_admin_service().get_overview()


@router.get("/students", response_model=List[StudentSummary])
async def list_students(
    search: Optional[str] = Query(None, description="Match name or branch"),
    branch: Optional[BranchType] = Query(None),
    admin: dict = Depends(get_current_admin)
):
    """All students with skill/interest counts and profile completion."""
    return get_admin_service().list_students(
        search=search,
        branch=branch.value if branch else None
    )


@router.get("/analytics", response_model=AnalyticsResponse)
async def analytics(admin: dict = Depends(get_current_admin)):
    """
    Placement planning data:
    - top 10 skills required across postings
    - students per branch
    - placed vs. not yet placed
    """
    return get_admin_service().get_analytics()
