"""
Placement Service - record which student was placed in which job.

A student can be placed once.
"""

import logging
from typing import List, Optional

from sqlalchemy import text

from app.core.exceptions import ConflictError, NotFoundError
from app.db.postgres import get_db_session, execute_raw_sql
from app.utils.ids import new_id

logger = logging.getLogger(__name__)

PLACEMENT_SELECT = """
    SELECT pl.id, pl.user_id, pl.job_id, pl.placed_by, pl.placed_at,
           p.full_name AS student_name, p.branch,
           j.title AS job_title, j.company_name
    FROM placements pl
    LEFT JOIN profiles p ON p.user_id = pl.user_id
    LEFT JOIN job_postings j ON j.id = pl.job_id
"""


class PlacementService:

    def list_placements(self) -> List[dict]:
        return execute_raw_sql(PLACEMENT_SELECT + " ORDER BY pl.placed_at DESC, p.full_name")

    def get_placement(self, placement_id: str) -> dict:
        rows = execute_raw_sql(PLACEMENT_SELECT + " WHERE pl.id = :id", {"id": placement_id})
        if not rows:
            raise NotFoundError("Placement not found")
        return rows[0]

    def list_available_students(self) -> List[dict]:
        """Student profiles without a placement yet."""
        return execute_raw_sql("""
            SELECT p.user_id, p.full_name, p.branch, p.year, p.cgpa
            FROM profiles p
            JOIN user_roles r ON r.user_id = p.user_id AND r.role = 'student'
            WHERE NOT EXISTS (SELECT 1 FROM placements pl WHERE pl.user_id = p.user_id)
            ORDER BY p.full_name
        """)

    def create_placement(self, user_id: str, job_id: str, placed_by: Optional[str] = None) -> dict:
        placement_id = new_id()
        with get_db_session() as db:
            if not db.execute(
                text("SELECT id FROM profiles WHERE user_id = :uid"), {"uid": user_id}
            ).fetchone():
                raise NotFoundError("Student profile not found")

            if not db.execute(
                text("SELECT id FROM job_postings WHERE id = :jid"), {"jid": job_id}
            ).fetchone():
                raise NotFoundError("Job not found")

            if db.execute(
                text("SELECT id FROM placements WHERE user_id = :uid"), {"uid": user_id}
            ).fetchone():
                raise ConflictError("Student is already placed")

            db.execute(
                text("""
                    INSERT INTO placements (id, user_id, job_id, placed_by)
                    VALUES (:id, :uid, :jid, :placed_by)
                """),
                {"id": placement_id, "uid": user_id, "jid": job_id, "placed_by": placed_by}
            )

        logger.info("Placement recorded: user %s -> job %s", user_id, job_id)
        return self.get_placement(placement_id)


def get_placement_service() -> PlacementService:
    """Get placement service instance."""
    return PlacementService()
