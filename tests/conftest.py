"""
Pytest configuration and shared fixtures.

Each test gets its own SQLite database file; MongoDB is replaced by a
MagicMock collection.
"""

import os

# Settings are read at import time, so configure before importing app
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["JWT_AUDIENCE"] = "authenticated"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DATABASE_URL"] = "sqlite://"

from typing import Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from app.core.auth import create_access_token
from app.db.postgres import get_db_session, init_engine
from app.db.tables import init_schema
from app.main import app
from app.services.catalog_service import CatalogService
from app.services.job_service import JobService
from app.services.mongo_service import RecommendationLogService, get_recommendation_log_service
from app.services.profile_service import ProfileService
from app.utils.ids import new_id


@pytest.fixture
def db(tmp_path):
    """Fresh database with all tables."""
    engine = init_engine(f"sqlite:///{tmp_path / 'portal.db'}")
    init_schema()
    yield engine
    engine.dispose()


@pytest.fixture
def log_collection() -> MagicMock:
    """Stand-in for the recommendation_logs collection."""
    collection = MagicMock()
    collection.insert_many.side_effect = lambda docs, ordered=False: MagicMock(
        inserted_ids=[new_id() for _ in docs]
    )
    return collection


@pytest.fixture
def log_service(log_collection) -> RecommendationLogService:
    return RecommendationLogService(collection=log_collection)


@pytest.fixture
def client(db, log_service):
    app.dependency_overrides[get_recommendation_log_service] = lambda: log_service
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================
# USERS & TOKENS
# ============================================================

def add_role(user_id: str, role: str) -> None:
    with get_db_session() as session:
        session.execute(
            text("INSERT INTO user_roles (id, user_id, role) VALUES (:id, :uid, :role)"),
            {"id": new_id(), "uid": user_id, "role": role}
        )


def auth_headers(user_id: str) -> Dict[str, str]:
    token = create_access_token({"sub": user_id, "email": f"{user_id}@college.edu"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for() -> Callable[[str], Dict[str, str]]:
    return auth_headers


@pytest.fixture
def student_id(db) -> str:
    user_id = new_id()
    add_role(user_id, "student")
    return user_id


@pytest.fixture
def admin_id(db) -> str:
    user_id = new_id()
    add_role(user_id, "admin")
    return user_id


@pytest.fixture
def student_headers(student_id) -> Dict[str, str]:
    return auth_headers(student_id)


@pytest.fixture
def admin_headers(admin_id) -> Dict[str, str]:
    return auth_headers(admin_id)


# ============================================================
# CATALOG & JOBS
# ============================================================

@pytest.fixture
def catalog(db) -> Dict[str, str]:
    """A small catalog: name -> id for skills and interests."""
    service = CatalogService()
    ids = {}
    for name, category in [
        ("Python", "technical"),
        ("SQL", "technical"),
        ("React", "technical"),
        ("Communication", "soft"),
    ]:
        ids[name] = service.create_skill(name, category)["id"]
    for name in ["Web Development", "Data Science"]:
        ids[name] = service.create_interest(name)["id"]
    return ids


@pytest.fixture
def make_job(db) -> Callable[..., dict]:
    service = JobService()

    def _make_job(
        title: str = "Backend Engineer",
        company_name: str = "Acme",
        min_cgpa: float = 0,
        interest_id: Optional[str] = None,
        required_skill_ids: Optional[List[str]] = None,
        status: str = "active",
    ) -> dict:
        return service.create_job({
            "title": title,
            "company_name": company_name,
            "min_cgpa": min_cgpa,
            "interest_id": interest_id,
            "required_skill_ids": required_skill_ids or [],
            "status": status,
        })

    return _make_job


@pytest.fixture
def make_student(db) -> Callable[..., str]:
    """Create a student with a profile, skills and interests; returns user id."""
    profiles = ProfileService()

    def _make_student(
        full_name: str = "Asha Rao",
        branch: Optional[str] = "CSE",
        year: Optional[int] = 3,
        cgpa: Optional[float] = 8.0,
        skill_ids: Optional[List[str]] = None,
        interest_ids: Optional[List[str]] = None,
    ) -> str:
        user_id = new_id()
        add_role(user_id, "student")
        profiles.upsert_profile(
            user_id, {"full_name": full_name, "branch": branch, "year": year, "cgpa": cgpa}
        )
        for skill_id in skill_ids or []:
            profiles.add_skill(user_id, skill_id)
        for interest_id in interest_ids or []:
            profiles.add_interest(user_id, interest_id)
        return user_id

    return _make_student
