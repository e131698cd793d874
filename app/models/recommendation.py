"""
Recommendation models - the scorer's input snapshot and output.

These are internal data transfer objects: the recommendation service
builds them from database rows, the /recommendations/score endpoint
accepts them straight from the request body.
"""

from pydantic import BaseModel, Field
from typing import Optional, List

from app.core.config import Settings


class SkillDetails(BaseModel):
    id: str
    name: Optional[str] = None
    category: Optional[str] = None


class InterestDetails(BaseModel):
    id: str
    name: Optional[str] = None


class RequiredSkill(BaseModel):
    skill_id: str
    skill: Optional[SkillDetails] = None

    def details(self) -> SkillDetails:
        """Skill details, falling back to a bare id when not joined."""
        return self.skill or SkillDetails(id=self.skill_id)


class StudentProfile(BaseModel):
    cgpa: Optional[float] = None


class JobPosting(BaseModel):
    id: str
    title: Optional[str] = None
    company_name: Optional[str] = None
    min_cgpa: Optional[float] = None
    interest_id: Optional[str] = None
    interest: Optional[InterestDetails] = None
    required_skills: Optional[List[RequiredSkill]] = None


class ScoredMatch(BaseModel):
    job_id: str
    job: JobPosting
    total_score: int = Field(..., ge=0, le=100)
    skill_match_score: int = Field(..., ge=0, le=100)
    cgpa_score: int = Field(..., ge=0, le=100)
    interest_score: int = Field(..., ge=0, le=100)
    matched_skills: List[SkillDetails] = []
    missing_skills: List[SkillDetails] = []
    explanation: str


class ScoringPolicy(BaseModel):
    """
    Default priors used when the student has not supplied data yet.

    Cold start: a student with no skills/interests should not be
    scored as if they matched nothing.
    """
    cold_start_skill_score_with_skills: float = 50
    cold_start_skill_score_without_skills: float = 25
    cold_start_interest_score: float = 50
    unmatched_interest_score: float = 25

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScoringPolicy":
        return cls(
            cold_start_skill_score_with_skills=settings.cold_start_skill_score_with_skills,
            cold_start_skill_score_without_skills=settings.cold_start_skill_score_without_skills,
            cold_start_interest_score=settings.cold_start_interest_score,
            unmatched_interest_score=settings.unmatched_interest_score,
        )
