"""
Student Routes

GET /students/profile - Get own profile
PUT /students/profile - Create or update profile
GET /students/profile/completion - Profile completion
GET /students/skills - Get skills
POST /students/skills - Add skill
DELETE /students/skills/{skill_id} - Remove skill
GET /students/interests - Get interests
POST /students/interests - Add interest
DELETE /students/interests/{interest_id} - Remove interest
GET /students/skill-readiness - Skills vs. market demand
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from app.core.auth import get_current_student
from app.services.profile_service import get_profile_service
from app.services.readiness_service import get_readiness_service
from app.schemas.schemas import (
    ProfileUpdate, ProfileResponse, ProfileCompletionResponse, UserSkillAdd,
    UserInterestAdd, SkillResponse, InterestResponse, SkillReadinessResponse,
    MessageResponse
)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(student: dict = Depends(get_current_student)):
    """Get current student's profile."""
    profile = get_profile_service().get_profile(student["user_id"])
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found. Save your profile first.")
    return profile


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(data: ProfileUpdate, student: dict = Depends(get_current_student)):
    """Create profile on first save, afterwards update only provided fields."""
    fields = data.model_dump(exclude_unset=True, mode="json")
    return get_profile_service().upsert_profile(student["user_id"], fields)


@router.get("/profile/completion", response_model=ProfileCompletionResponse)
async def profile_completion(student: dict = Depends(get_current_student)):
    """Percentage of profile filled in and what is missing."""
    return get_profile_service().get_completion(student["user_id"])


@router.get("/skills", response_model=List[SkillResponse])
async def get_skills(student: dict = Depends(get_current_student)):
    """Get all skills for current student."""
    return get_profile_service().list_skills(student["user_id"])


@router.post("/skills", response_model=MessageResponse, status_code=201)
async def add_skill(data: UserSkillAdd, student: dict = Depends(get_current_student)):
    """Add a catalog skill to profile."""
    get_profile_service().add_skill(student["user_id"], data.skill_id)
    return MessageResponse(message="Skill added")


@router.delete("/skills/{skill_id}", response_model=MessageResponse)
async def remove_skill(skill_id: str, student: dict = Depends(get_current_student)):
    """Remove a skill from profile."""
    get_profile_service().remove_skill(student["user_id"], skill_id)
    return MessageResponse(message="Skill removed")


@router.get("/interests", response_model=List[InterestResponse])
async def get_interests(student: dict = Depends(get_current_student)):
    return get_profile_service().list_interests(student["user_id"])


@router.post("/interests", response_model=MessageResponse, status_code=201)
async def add_interest(data: UserInterestAdd, student: dict = Depends(get_current_student)):
    get_profile_service().add_interest(student["user_id"], data.interest_id)
    return MessageResponse(message="Interest added")


@router.delete("/interests/{interest_id}", response_model=MessageResponse)
async def remove_interest(interest_id: str, student: dict = Depends(get_current_student)):
    get_profile_service().remove_interest(student["user_id"], interest_id)
    return MessageResponse(message="Interest removed")


@router.get("/skill-readiness", response_model=SkillReadinessResponse)
async def skill_readiness(student: dict = Depends(get_current_student)):
    """
    How the student's skills line up with active job demand.

    Readiness = share of in-demand skills the student has.
    """
    return get_readiness_service().get_readiness(student["user_id"])
