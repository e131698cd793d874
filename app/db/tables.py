"""
Table definitions for the relational store.

Production schema is owned by the hosted database. These definitions
mirror it so a local or test database can be created with init_schema().
Services query these tables with raw SQL (see execute_raw_sql).
"""

from sqlalchemy import (
    Column, DateTime, Float, ForeignKey, Integer, MetaData, String, Table, Text,
    UniqueConstraint, func
)

from app.db.postgres import get_engine

metadata = MetaData()

profiles = Table(
    "profiles", metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), nullable=False, unique=True),
    Column("full_name", String(200)),
    Column("branch", String(10)),
    Column("year", Integer),
    Column("cgpa", Float),
    Column("created_at", DateTime, server_default=func.now(), nullable=False),
    Column("updated_at", DateTime, server_default=func.now(), nullable=False),
)

user_roles = Table(
    "user_roles", metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), nullable=False),
    Column("role", String(20), nullable=False, server_default="student"),
    Column("created_at", DateTime, server_default=func.now(), nullable=False),
    UniqueConstraint("user_id", "role"),
)

skills = Table(
    "skills", metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("category", String(20), nullable=False),
    Column("created_at", DateTime, server_default=func.now(), nullable=False),
)

interests = Table(
    "interests", metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("created_at", DateTime, server_default=func.now(), nullable=False),
)

user_skills = Table(
    "user_skills", metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), nullable=False),
    Column("skill_id", String(36), ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
    Column("created_at", DateTime, server_default=func.now(), nullable=False),
    UniqueConstraint("user_id", "skill_id"),
)

user_interests = Table(
    "user_interests", metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), nullable=False),
    Column("interest_id", String(36), ForeignKey("interests.id", ondelete="CASCADE"), nullable=False),
    Column("created_at", DateTime, server_default=func.now(), nullable=False),
    UniqueConstraint("user_id", "interest_id"),
)

job_postings = Table(
    "job_postings", metadata,
    Column("id", String(36), primary_key=True),
    Column("title", String(200), nullable=False),
    Column("company_name", String(200), nullable=False),
    Column("description", Text),
    Column("min_cgpa", Float, server_default="0"),
    # JSON-encoded list of branch codes
    Column("preferred_branches", Text, server_default="[]"),
    Column("interest_id", String(36), ForeignKey("interests.id", ondelete="SET NULL")),
    Column("status", String(20), nullable=False, server_default="active"),
    Column("created_by", String(36)),
    Column("created_at", DateTime, server_default=func.now(), nullable=False),
    Column("updated_at", DateTime, server_default=func.now(), nullable=False),
)

job_required_skills = Table(
    "job_required_skills", metadata,
    Column("id", String(36), primary_key=True),
    Column("job_id", String(36), ForeignKey("job_postings.id", ondelete="CASCADE"), nullable=False),
    Column("skill_id", String(36), ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
    # Order the admin listed the skills in
    Column("position", Integer, nullable=False, server_default="0"),
    Column("created_at", DateTime, server_default=func.now(), nullable=False),
    UniqueConstraint("job_id", "skill_id"),
)

placements = Table(
    "placements", metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), nullable=False, unique=True),
    Column("job_id", String(36), ForeignKey("job_postings.id", ondelete="CASCADE"), nullable=False),
    Column("placed_by", String(36)),
    Column("placed_at", DateTime, server_default=func.now(), nullable=False),
)


def init_schema() -> None:
    """Create any missing tables. Local development and tests only."""
    metadata.create_all(get_engine())

