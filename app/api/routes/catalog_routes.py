"""
Catalog Routes

GET /catalog/skills - List skills
POST /catalog/skills - Add skill (admin only)
GET /catalog/interests - List interests
POST /catalog/interests - Add interest (admin only)
"""

from fastapi import APIRouter, Depends
from typing import List

from app.core.auth import get_current_admin
from app.services.catalog_service import get_catalog_service
from app.schemas.schemas import SkillCreate, SkillResponse, InterestCreate, InterestResponse

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("/skills", response_model=List[SkillResponse])
async def list_skills():
    """All skills, by category then name."""
    return get_catalog_service().list_skills()


@router.post("/skills", response_model=SkillResponse, status_code=201)
async def create_skill(data: SkillCreate, admin: dict = Depends(get_current_admin)):
    return get_catalog_service().create_skill(data.name, data.category.value)


@router.get("/interests", response_model=List[InterestResponse])
async def list_interests():
    return get_catalog_service().list_interests()


@router.post("/interests", response_model=InterestResponse, status_code=201)
async def create_interest(data: InterestCreate, admin: dict = Depends(get_current_admin)):
    return get_catalog_service().create_interest(data.name)
