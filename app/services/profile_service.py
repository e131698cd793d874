"""
Profile Service - student profile, possessed skills and interests.

The identity provider creates the auth user; the profile row is created
on the student's first save (upsert) and updated in place after that.
"""

import logging
from typing import List, Optional, Set

from sqlalchemy import text

from app.core.exceptions import ConflictError, NotFoundError
from app.db.postgres import get_db_session, execute_raw_sql
from app.utils.ids import new_id

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ["full_name", "branch", "year", "cgpa"]

PROFILE_COLUMNS = "id, user_id, full_name, branch, year, cgpa, created_at, updated_at"


def completion_percentage(completed: int, total: int) -> int:
    """Share of completed fields, rounded half-up."""
    if total == 0:
        return 0
    return int(completed * 100 / total + 0.5)


class ProfileService:

    # --------------------------------------------------------
    # Profile
    # --------------------------------------------------------

    def get_profile(self, user_id: str) -> Optional[dict]:
        rows = execute_raw_sql(
            f"SELECT {PROFILE_COLUMNS} FROM profiles WHERE user_id = :uid",
            {"uid": user_id}
        )
        return rows[0] if rows else None

    def upsert_profile(self, user_id: str, fields: dict) -> dict:
        """
        Create the profile if missing, otherwise update only the given fields.

        `fields` holds only what the client sent; an explicit None clears
        the column.
        """
        fields = {k: v for k, v in fields.items() if k in PROFILE_FIELDS}

        with get_db_session() as db:
            existing = db.execute(
                text("SELECT id FROM profiles WHERE user_id = :uid"),
                {"uid": user_id}
            ).fetchone()

            if existing is None:
                params = {field: fields.get(field) for field in PROFILE_FIELDS}
                params.update({"id": new_id(), "user_id": user_id})
                db.execute(
                    text("""
                        INSERT INTO profiles (id, user_id, full_name, branch, year, cgpa)
                        VALUES (:id, :user_id, :full_name, :branch, :year, :cgpa)
                    """),
                    params
                )
                logger.info("Profile created for user %s", user_id)
            elif fields:
                updates = [f"{field} = :{field}" for field in fields]
                params = dict(fields, uid=user_id)
                db.execute(
                    text(f"UPDATE profiles SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP WHERE user_id = :uid"),
                    params
                )

        return self.get_profile(user_id)

    # --------------------------------------------------------
    # Skills
    # --------------------------------------------------------

    def list_skills(self, user_id: str) -> List[dict]:
        return execute_raw_sql("""
            SELECT s.id, s.name, s.category
            FROM user_skills us JOIN skills s ON us.skill_id = s.id
            WHERE us.user_id = :uid ORDER BY s.category, s.name
        """, {"uid": user_id})

    def get_skill_ids(self, user_id: str) -> Set[str]:
        rows = execute_raw_sql(
            "SELECT skill_id FROM user_skills WHERE user_id = :uid", {"uid": user_id}
        )
        return {r["skill_id"] for r in rows}

    def add_skill(self, user_id: str, skill_id: str) -> None:
        with get_db_session() as db:
            if not db.execute(text("SELECT id FROM skills WHERE id = :id"), {"id": skill_id}).fetchone():
                raise NotFoundError("Skill not found")

            if db.execute(
                text("SELECT id FROM user_skills WHERE user_id = :uid AND skill_id = :sid"),
                {"uid": user_id, "sid": skill_id}
            ).fetchone():
                raise ConflictError("Skill already in profile")

            db.execute(
                text("INSERT INTO user_skills (id, user_id, skill_id) VALUES (:id, :uid, :sid)"),
                {"id": new_id(), "uid": user_id, "sid": skill_id}
            )

    def remove_skill(self, user_id: str, skill_id: str) -> None:
        with get_db_session() as db:
            result = db.execute(
                text("DELETE FROM user_skills WHERE user_id = :uid AND skill_id = :sid"),
                {"uid": user_id, "sid": skill_id}
            )
            if result.rowcount == 0:
                raise NotFoundError("Skill not found in profile")

    # --------------------------------------------------------
    # Interests
    # --------------------------------------------------------

    def list_interests(self, user_id: str) -> List[dict]:
        return execute_raw_sql("""
            SELECT i.id, i.name
            FROM user_interests ui JOIN interests i ON ui.interest_id = i.id
            WHERE ui.user_id = :uid ORDER BY i.name
        """, {"uid": user_id})

    def get_interest_ids(self, user_id: str) -> Set[str]:
        rows = execute_raw_sql(
            "SELECT interest_id FROM user_interests WHERE user_id = :uid", {"uid": user_id}
        )
        return {r["interest_id"] for r in rows}

    def add_interest(self, user_id: str, interest_id: str) -> None:
        with get_db_session() as db:
            if not db.execute(text("SELECT id FROM interests WHERE id = :id"), {"id": interest_id}).fetchone():
                raise NotFoundError("Interest not found")

            if db.execute(
                text("SELECT id FROM user_interests WHERE user_id = :uid AND interest_id = :iid"),
                {"uid": user_id, "iid": interest_id}
            ).fetchone():
                raise ConflictError("Interest already in profile")

            db.execute(
                text("INSERT INTO user_interests (id, user_id, interest_id) VALUES (:id, :uid, :iid)"),
                {"id": new_id(), "uid": user_id, "iid": interest_id}
            )

    def remove_interest(self, user_id: str, interest_id: str) -> None:
        with get_db_session() as db:
            result = db.execute(
                text("DELETE FROM user_interests WHERE user_id = :uid AND interest_id = :iid"),
                {"uid": user_id, "iid": interest_id}
            )
            if result.rowcount == 0:
                raise NotFoundError("Interest not found in profile")

    # --------------------------------------------------------
    # Completion
    # --------------------------------------------------------

    def get_completion(self, user_id: str) -> dict:
        """
        Profile completion: name, branch, year, CGPA, skills, interests.
        Resumes live in external storage and are not counted.
        """
        profile = self.get_profile(user_id) or {}
        checks = [
            ("Full Name", profile.get("full_name")),
            ("Branch", profile.get("branch")),
            ("Year", profile.get("year")),
            ("CGPA", profile.get("cgpa")),
            ("Skills", bool(self.get_skill_ids(user_id))),
            ("Interests", bool(self.get_interest_ids(user_id))),
        ]

        missing = [name for name, value in checks if not value]
        completed = len(checks) - len(missing)

        return {
            "percentage": completion_percentage(completed, len(checks)),
            "missing_fields": missing,
        }


def get_profile_service() -> ProfileService:
    """Get profile service instance."""
    return ProfileService()
