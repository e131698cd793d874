"""
Skill Readiness Service

Compares a student's skills with what active job postings ask for.

- demand_count: number of active jobs requiring the skill
- readiness: share of in-demand skills the student has
- strengths: owned skills that are in demand
- improvements: top 5 in-demand skills the student lacks
"""

from typing import List

from app.db.postgres import execute_raw_sql
from app.services.profile_service import ProfileService, completion_percentage

IMPROVEMENT_LIMIT = 5


def readiness_label(score: int) -> str:
    if score >= 70:
        return "Strong"
    if score >= 40:
        return "Moderate"
    return "Needs Work"


def readiness_score(skills: List[dict], owns_any_skill: bool) -> int:
    """
    Share of in-demand skills owned. With no demand at all, a student who
    listed skills gets a neutral 50.
    """
    in_demand = [s for s in skills if s["demand_count"] > 0]
    if in_demand:
        owned = [s for s in in_demand if s["is_owned"]]
        return completion_percentage(len(owned), len(in_demand))
    return 50 if owns_any_skill else 0


class SkillReadinessService:

    def __init__(self):
        self.profile_service = ProfileService()

    def get_skill_demand(self) -> dict:
        """skill_id -> number of active jobs requiring it."""
        rows = execute_raw_sql("""
            SELECT jrs.skill_id, COUNT(*) AS demand
            FROM job_required_skills jrs
            JOIN job_postings j ON jrs.job_id = j.id
            WHERE j.status = 'active'
            GROUP BY jrs.skill_id
        """)
        return {r["skill_id"]: int(r["demand"]) for r in rows}

    def get_readiness(self, user_id: str) -> dict:
        demand = self.get_skill_demand()
        owned_ids = self.profile_service.get_skill_ids(user_id)
        catalog = execute_raw_sql("SELECT id, name, category FROM skills ORDER BY category, name")

        skills = [
            {
                "skill": skill,
                "demand_count": demand.get(skill["id"], 0),
                "is_owned": skill["id"] in owned_ids,
            }
            for skill in catalog
        ]
        # Highest demand first; at equal demand, skills to learn come first
        skills.sort(key=lambda s: (-s["demand_count"], s["is_owned"]))

        score = readiness_score(skills, bool(owned_ids))
        return {
            "readiness_score": score,
            "label": readiness_label(score),
            "skills": skills,
            "strengths": [s for s in skills if s["is_owned"] and s["demand_count"] > 0],
            "improvements": [
                s for s in skills if not s["is_owned"] and s["demand_count"] > 0
            ][:IMPROVEMENT_LIMIT],
        }


def get_readiness_service() -> SkillReadinessService:
    """Get skill readiness service instance."""
    return SkillReadinessService()
