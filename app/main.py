"""
Student Placement Portal - Main Application

FastAPI backend with:
- Relational store (PostgreSQL) for profiles, skills, jobs, placements
- MongoDB for recommendation logs
- JWT verification for tokens issued by the identity provider
- Weighted job recommendation scorer

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.exceptions import PortalError
from app.core.logging_config import configure_logging
from app.db.mongodb import init_mongo_indexes

settings = get_settings()

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Student Placement Portal",
    description="""
    Placement cell backend.

    ## Features
    - **Students**: Profile, skills, interests, profile completion, skill readiness
    - **Jobs**: Postings with required skills, minimum CGPA and domain interest
    - **Recommendations**: 50% skill match + 25% CGPA + 25% interest, with explanations
    - **Placements**: Admins record which student was placed where
    - **Admin**: Overview counts, student directory, analytics data

    ## Authentication
    Bearer tokens from the identity provider (verified, never issued here).
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create local tables if asked to, then MongoDB indexes."""
    if settings.auto_create_schema:
        from app.db.tables import init_schema
        init_schema()
        logger.info("Database schema ensured")

    try:
        init_mongo_indexes()
    except PyMongoError as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Student Placement Portal"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    from app.db.postgres import test_postgres_connection
    from app.db.mongodb import test_mongo_connection

    return {
        "status": "healthy",
        "database": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
