"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from app.models.recommendation import (
    InterestDetails, JobPosting, ScoredMatch, SkillDetails, StudentProfile
)


# ============================================================
# ENUMS
# ============================================================

class JobStatus(str, Enum):
    active = "active"
    inactive = "inactive"


class SkillCategory(str, Enum):
    technical = "technical"
    soft = "soft"


class BranchType(str, Enum):
    cse = "CSE"
    ece = "ECE"
    me = "ME"
    ee = "EE"
    ce = "CE"
    it = "IT"
    other = "Other"


# ============================================================
# CATALOG SCHEMAS
# ============================================================

class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: SkillCategory = SkillCategory.technical

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

class SkillResponse(BaseModel):
    id: str
    name: str
    category: str

class InterestCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

class InterestResponse(BaseModel):
    id: str
    name: str


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=200)
    branch: Optional[BranchType] = None
    year: Optional[int] = Field(None, ge=1, le=6)
    cgpa: Optional[float] = Field(None, ge=0, le=10)

class ProfileResponse(BaseModel):
    id: str
    user_id: str
    full_name: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[int] = None
    cgpa: Optional[float] = None
    created_at: datetime
    updated_at: datetime

class UserSkillAdd(BaseModel):
    skill_id: str

class UserInterestAdd(BaseModel):
    interest_id: str

class ProfileCompletionResponse(BaseModel):
    percentage: int
    missing_fields: List[str] = []


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=2, max_length=200)
    company_name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    min_cgpa: float = Field(0, ge=0, le=10)
    preferred_branches: List[BranchType] = []
    interest_id: Optional[str] = None
    status: JobStatus = JobStatus.active
    required_skill_ids: List[str] = []

    @field_validator("required_skill_ids")
    @classmethod
    def dedupe_skills(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))

class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=2, max_length=200)
    company_name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    min_cgpa: Optional[float] = Field(None, ge=0, le=10)
    preferred_branches: Optional[List[BranchType]] = None
    interest_id: Optional[str] = None
    status: Optional[JobStatus] = None
    required_skill_ids: Optional[List[str]] = None

    @field_validator("title", "company_name", "status")
    @classmethod
    def not_null(cls, v):
        # Omit the field to leave it unchanged
        if v is None:
            raise ValueError("cannot be null")
        return v

    @field_validator("required_skill_ids")
    @classmethod
    def dedupe_skills(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return list(dict.fromkeys(v))

class JobResponse(BaseModel):
    id: str
    title: str
    company_name: str
    description: Optional[str] = None
    min_cgpa: float = 0
    preferred_branches: List[str] = []
    interest_id: Optional[str] = None
    interest: Optional[InterestDetails] = None
    status: str
    created_by: Optional[str] = None
    required_skills: List[SkillDetails] = []
    created_at: datetime
    updated_at: datetime


# ============================================================
# RECOMMENDATION SCHEMAS
# ============================================================

class ScoreRequest(BaseModel):
    profile: Optional[StudentProfile] = None
    possessed_skill_ids: List[str] = []
    possessed_interest_ids: List[str] = []
    jobs: List[JobPosting] = []

class RecommendationListResponse(BaseModel):
    recommendations: List[ScoredMatch]
    total: int


# ============================================================
# SKILL READINESS SCHEMAS
# ============================================================

class SkillDemandItem(BaseModel):
    skill: SkillResponse
    demand_count: int
    is_owned: bool

class SkillReadinessResponse(BaseModel):
    readiness_score: int
    label: str
    skills: List[SkillDemandItem]
    strengths: List[SkillDemandItem]
    improvements: List[SkillDemandItem]


# ============================================================
# ADMIN SCHEMAS
# ============================================================

class OverviewResponse(BaseModel):
    total_students: int
    active_jobs: int
    total_placements: int

class StudentSummary(BaseModel):
    user_id: str
    full_name: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[int] = None
    cgpa: Optional[float] = None
    skills_count: int
    interests_count: int
    profile_completion: int

class NameCount(BaseModel):
    name: str
    count: int

class PlacementStats(BaseModel):
    placed: int
    active: int

class AnalyticsResponse(BaseModel):
    top_skills: List[NameCount]
    branch_distribution: List[NameCount]
    placement_stats: PlacementStats


# ============================================================
# PLACEMENT SCHEMAS
# ============================================================

class PlacementCreate(BaseModel):
    user_id: str
    job_id: str

class PlacementResponse(BaseModel):
    id: str
    user_id: str
    job_id: str
    placed_by: Optional[str] = None
    placed_at: datetime
    student_name: Optional[str] = None
    branch: Optional[str] = None
    job_title: Optional[str] = None
    company_name: Optional[str] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
