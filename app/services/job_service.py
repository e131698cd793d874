"""
Job Service - job postings and their required skills.

Admins create and edit postings; students only see active ones.
Required skills keep the order the admin listed them in.
"""

import json
import logging
from typing import Dict, List, Optional

from sqlalchemy import text

from app.core.exceptions import NotFoundError, PortalError
from app.db.postgres import get_db_session, execute_raw_sql, like_pattern
from app.utils.ids import new_id

logger = logging.getLogger(__name__)

JOB_SELECT = """
    SELECT j.id, j.title, j.company_name, j.description, j.min_cgpa,
           j.preferred_branches, j.interest_id, i.name AS interest_name,
           j.status, j.created_by, j.created_at, j.updated_at
    FROM job_postings j
    LEFT JOIN interests i ON j.interest_id = i.id
"""

UPDATABLE_FIELDS = ["title", "company_name", "description", "min_cgpa", "interest_id", "status"]
REQUIRED_FIELDS = ["title", "company_name", "status"]


class JobService:

    # --------------------------------------------------------
    # Reads
    # --------------------------------------------------------

    def list_jobs(self, status: Optional[str] = "active", search: Optional[str] = None) -> List[dict]:
        """
        List postings (newest first) with required skills and interest attached.

        status=None lists every posting.
        """
        sql = JOB_SELECT + " WHERE 1 = 1"
        params = {}

        if status:
            sql += " AND j.status = :status"
            params["status"] = status
        if search:
            sql += " AND (LOWER(j.title) LIKE :search ESCAPE '\\' OR LOWER(j.company_name) LIKE :search ESCAPE '\\')"
            params["search"] = like_pattern(search)

        sql += " ORDER BY j.created_at DESC, j.title"
        jobs = [self._hydrate(r) for r in execute_raw_sql(sql, params)]

        skills_by_job = self._required_skills_for([j["id"] for j in jobs], status)
        for job in jobs:
            job["required_skills"] = skills_by_job.get(job["id"], [])
        return jobs

    def get_job(self, job_id: str) -> dict:
        rows = execute_raw_sql(JOB_SELECT + " WHERE j.id = :id", {"id": job_id})
        if not rows:
            raise NotFoundError("Job not found")

        job = self._hydrate(rows[0])
        job["required_skills"] = self._required_skills_for([job_id]).get(job_id, [])
        return job

    def _required_skills_for(self, job_ids: List[str], status: Optional[str] = None) -> Dict[str, List[dict]]:
        if not job_ids:
            return {}

        sql = """
            SELECT jrs.job_id, s.id, s.name, s.category
            FROM job_required_skills jrs
            JOIN skills s ON jrs.skill_id = s.id
            JOIN job_postings j ON jrs.job_id = j.id
        """
        params = {}
        if len(job_ids) == 1:
            sql += " WHERE jrs.job_id = :job_id"
            params["job_id"] = job_ids[0]
        elif status:
            sql += " WHERE j.status = :status"
            params["status"] = status
        sql += " ORDER BY jrs.position, s.name"

        wanted = set(job_ids)
        grouped: Dict[str, List[dict]] = {}
        for r in execute_raw_sql(sql, params):
            if r["job_id"] in wanted:
                grouped.setdefault(r["job_id"], []).append(
                    {"id": r["id"], "name": r["name"], "category": r["category"]}
                )
        return grouped

    @staticmethod
    def _hydrate(row: dict) -> dict:
        job = dict(row)
        job["min_cgpa"] = float(job["min_cgpa"]) if job["min_cgpa"] is not None else 0.0
        job["preferred_branches"] = json.loads(job["preferred_branches"] or "[]")
        interest_name = job.pop("interest_name", None)
        job["interest"] = (
            {"id": job["interest_id"], "name": interest_name} if job["interest_id"] else None
        )
        return job

    # --------------------------------------------------------
    # Writes
    # --------------------------------------------------------

    def create_job(self, data: dict, created_by: Optional[str] = None) -> dict:
        """
        data: title, company_name, description, min_cgpa, preferred_branches,
              interest_id, status, required_skill_ids
        """
        job_id = new_id()
        with get_db_session() as db:
            self._check_references(db, data.get("interest_id"), data.get("required_skill_ids") or [])

            db.execute(
                text("""
                    INSERT INTO job_postings (id, title, company_name, description, min_cgpa,
                        preferred_branches, interest_id, status, created_by)
                    VALUES (:id, :title, :company_name, :description, :min_cgpa,
                        :preferred_branches, :interest_id, :status, :created_by)
                """),
                {
                    "id": job_id,
                    "title": data["title"],
                    "company_name": data["company_name"],
                    "description": data.get("description"),
                    "min_cgpa": data.get("min_cgpa") or 0,
                    "preferred_branches": json.dumps(data.get("preferred_branches") or []),
                    "interest_id": data.get("interest_id"),
                    "status": data.get("status") or "active",
                    "created_by": created_by
                }
            )
            self._replace_required_skills(db, job_id, data.get("required_skill_ids") or [])

        logger.info("Job posted: %s at %s (%s)", data["title"], data["company_name"], job_id)
        return self.get_job(job_id)

    def update_job(self, job_id: str, data: dict) -> dict:
        """Update only the given fields. required_skill_ids, when given, replaces the list."""
        cleared = [f for f in REQUIRED_FIELDS if f in data and data[f] is None]
        if cleared:
            raise PortalError(f"Cannot clear required fields: {', '.join(cleared)}")

        with get_db_session() as db:
            if not db.execute(text("SELECT id FROM job_postings WHERE id = :id"), {"id": job_id}).fetchone():
                raise NotFoundError("Job not found")

            skill_ids = data.get("required_skill_ids")
            self._check_references(db, data.get("interest_id"), skill_ids or [])

            updates = []
            params = {"id": job_id}
            for field in UPDATABLE_FIELDS:
                if field in data:
                    updates.append(f"{field} = :{field}")
                    params[field] = data[field]
            if "preferred_branches" in data:
                updates.append("preferred_branches = :preferred_branches")
                params["preferred_branches"] = json.dumps(data["preferred_branches"] or [])

            if updates:
                db.execute(
                    text(f"UPDATE job_postings SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP WHERE id = :id"),
                    params
                )

            if skill_ids is not None:
                db.execute(text("DELETE FROM job_required_skills WHERE job_id = :id"), {"id": job_id})
                self._replace_required_skills(db, job_id, skill_ids)

        logger.info("Job updated: %s", job_id)
        return self.get_job(job_id)

    def delete_job(self, job_id: str) -> None:
        """Delete a posting with its required skills and placements."""
        with get_db_session() as db:
            db.execute(text("DELETE FROM job_required_skills WHERE job_id = :id"), {"id": job_id})
            db.execute(text("DELETE FROM placements WHERE job_id = :id"), {"id": job_id})
            result = db.execute(text("DELETE FROM job_postings WHERE id = :id"), {"id": job_id})
            if result.rowcount == 0:
                raise NotFoundError("Job not found")

        logger.info("Job deleted: %s", job_id)

    @staticmethod
    def _check_references(db, interest_id: Optional[str], skill_ids: List[str]) -> None:
        if interest_id and not db.execute(
            text("SELECT id FROM interests WHERE id = :id"), {"id": interest_id}
        ).fetchone():
            raise NotFoundError("Interest not found")

        for skill_id in skill_ids:
            if not db.execute(text("SELECT id FROM skills WHERE id = :id"), {"id": skill_id}).fetchone():
                raise NotFoundError(f"Skill not found: {skill_id}")

    @staticmethod
    def _replace_required_skills(db, job_id: str, skill_ids: List[str]) -> None:
        for position, skill_id in enumerate(skill_ids):
            db.execute(
                text("""
                    INSERT INTO job_required_skills (id, job_id, skill_id, position)
                    VALUES (:id, :job_id, :skill_id, :position)
                """),
                {"id": new_id(), "job_id": job_id, "skill_id": skill_id, "position": position}
            )


def get_job_service() -> JobService:
    """Get job service instance."""
    return JobService()
