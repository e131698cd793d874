"""
Job Routes

GET /jobs - List active jobs (admins may include inactive)
GET /jobs/{job_id} - Get job details
POST /jobs - Create job posting (admin only)
PUT /jobs/{job_id} - Update job (admin only)
DELETE /jobs/{job_id} - Delete job (admin only)
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from app.core.auth import get_current_user, get_current_admin
from app.services.job_service import get_job_service
from app.schemas.schemas import JobCreate, JobUpdate, JobResponse, MessageResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=List[JobResponse])
async def list_jobs(
    search: Optional[str] = Query(None, description="Search in title or company"),
    include_inactive: bool = Query(False, description="Admins only"),
    user: dict = Depends(get_current_user)
):
    """List job postings with required skills, newest first."""
    if include_inactive and user["role"] != "admin":
        raise HTTPException(status_code=403, detail="Admins only")

    status = None if include_inactive else "active"
    return get_job_service().list_jobs(status=status, search=search)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, user: dict = Depends(get_current_user)):
    """Get details of a specific job."""
    job = get_job_service().get_job(job_id)
    if job["status"] != "active" and user["role"] != "admin":
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate, admin: dict = Depends(get_current_admin)):
    """Create a new job posting with its required skills."""
    return get_job_service().create_job(job.model_dump(mode="json"), created_by=admin["user_id"])


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(job_id: str, update: JobUpdate, admin: dict = Depends(get_current_admin)):
    """Update a job posting. Sending required_skill_ids replaces the list."""
    data = update.model_dump(exclude_unset=True, mode="json")
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")
    return get_job_service().update_job(job_id, data)


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: str, admin: dict = Depends(get_current_admin)):
    """Delete a job posting. Cascades to required skills and placements."""
    get_job_service().delete_job(job_id)
    return MessageResponse(message="Job deleted successfully")
