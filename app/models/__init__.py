"""
Models module - internal data transfer objects.

Difference from schemas:
- Models: what services pass around (scorer input/output)
- Schemas: API contract (what client sends/receives)
"""

from app.models.recommendation import (
    SkillDetails, InterestDetails, RequiredSkill, StudentProfile,
    JobPosting, ScoredMatch, ScoringPolicy
)

__all__ = [
    "SkillDetails",
    "InterestDetails",
    "RequiredSkill",
    "StudentProfile",
    "JobPosting",
    "ScoredMatch",
    "ScoringPolicy",
]
