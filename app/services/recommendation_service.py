"""
Recommendation Service

PURPOSE:
Produce a ranked list of active jobs for a student.

HOW IT WORKS:
1. Fetch a fresh snapshot: profile CGPA, possessed skill ids,
   possessed interest ids, active jobs with required skills + interest
2. Score every job with the shared scorer (app.services.scoring)
3. Append a recommendation log to MongoDB (best effort)
4. Return matches, highest score first
"""

import logging
from typing import List, Optional

from app.core.config import get_settings
from app.models.recommendation import (
    InterestDetails, JobPosting, RequiredSkill, ScoredMatch, ScoringPolicy,
    SkillDetails, StudentProfile
)
from app.services.job_service import JobService
from app.services.mongo_service import RecommendationLogService
from app.services.profile_service import ProfileService
from app.services.scoring import score

logger = logging.getLogger(__name__)


def to_scoring_job(job: dict) -> JobPosting:
    """Convert a JobService row into the scorer's input model."""
    interest = job.get("interest")
    return JobPosting(
        id=job["id"],
        title=job.get("title"),
        company_name=job.get("company_name"),
        min_cgpa=job.get("min_cgpa"),
        interest_id=job.get("interest_id"),
        interest=InterestDetails(**interest) if interest else None,
        required_skills=[
            RequiredSkill(skill_id=s["id"], skill=SkillDetails(**s))
            for s in job.get("required_skills") or []
        ]
    )


class RecommendationService:
    """
    Generates job recommendations for students.
    """

    def __init__(
        self,
        log_service: Optional[RecommendationLogService] = None,
        policy: Optional[ScoringPolicy] = None
    ):
        self.settings = get_settings()
        self.profile_service = ProfileService()
        self.job_service = JobService()
        self.log_service = log_service
        self.policy = policy or ScoringPolicy.from_settings(self.settings)

    def generate_recommendations(self, user_id: str) -> List[ScoredMatch]:
        """
        Score all active jobs for a student.

        Args:
            user_id: Identity provider user id

        Returns:
            List of ScoredMatch, highest total_score first
        """
        profile_row = self.profile_service.get_profile(user_id)
        profile = StudentProfile(cgpa=profile_row["cgpa"] if profile_row else None)

        skill_ids = self.profile_service.get_skill_ids(user_id)
        interest_ids = self.profile_service.get_interest_ids(user_id)
        jobs = [to_scoring_job(j) for j in self.job_service.list_jobs(status="active")]

        matches = score(profile, jobs, skill_ids, interest_ids, self.policy)

        logger.info(
            "Scored %d jobs for user %s (skills=%d, interests=%d)",
            len(matches), user_id, len(skill_ids), len(interest_ids)
        )

        if self.log_service is not None and self.settings.recommendation_log_enabled:
            self.log_service.log_matches(user_id, matches)

        return matches


def get_recommendation_service(
    log_service: Optional[RecommendationLogService] = None
) -> RecommendationService:
    """Get recommendation service instance."""
    return RecommendationService(log_service=log_service)
