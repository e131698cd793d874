"""
Catalog Service - skills and interests students pick from.
"""

import logging
from typing import List, Optional

from sqlalchemy import text

from app.core.exceptions import ConflictError
from app.db.postgres import get_db_session, execute_raw_sql
from app.utils.ids import new_id

logger = logging.getLogger(__name__)


class CatalogService:

    def list_skills(self) -> List[dict]:
        """All skills, grouped by category then alphabetical."""
        return execute_raw_sql(
            "SELECT id, name, category FROM skills ORDER BY category, name"
        )

    def list_interests(self) -> List[dict]:
        return execute_raw_sql("SELECT id, name FROM interests ORDER BY name")

    def get_skill(self, skill_id: str) -> Optional[dict]:
        rows = execute_raw_sql(
            "SELECT id, name, category FROM skills WHERE id = :id", {"id": skill_id}
        )
        return rows[0] if rows else None

    def get_interest(self, interest_id: str) -> Optional[dict]:
        rows = execute_raw_sql(
            "SELECT id, name FROM interests WHERE id = :id", {"id": interest_id}
        )
        return rows[0] if rows else None

    def create_skill(self, name: str, category: str) -> dict:
        with get_db_session() as db:
            existing = db.execute(
                text("SELECT id FROM skills WHERE LOWER(name) = LOWER(:name)"),
                {"name": name}
            ).fetchone()
            if existing:
                raise ConflictError(f"Skill '{name}' already exists")

            skill = {"id": new_id(), "name": name, "category": category}
            db.execute(
                text("INSERT INTO skills (id, name, category) VALUES (:id, :name, :category)"),
                skill
            )

        logger.info("Skill added to catalog: %s (%s)", name, category)
        return skill

    def create_interest(self, name: str) -> dict:
        with get_db_session() as db:
            existing = db.execute(
                text("SELECT id FROM interests WHERE LOWER(name) = LOWER(:name)"),
                {"name": name}
            ).fetchone()
            if existing:
                raise ConflictError(f"Interest '{name}' already exists")

            interest = {"id": new_id(), "name": name}
            db.execute(
                text("INSERT INTO interests (id, name) VALUES (:id, :name)"),
                interest
            )

        logger.info("Interest added to catalog: %s", name)
        return interest


def get_catalog_service() -> CatalogService:
    """Get catalog service instance."""
    return CatalogService()
