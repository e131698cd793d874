"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.catalog_routes import router as catalog_router
from app.api.routes.student_routes import router as student_router
from app.api.routes.job_routes import router as job_router
from app.api.routes.recommendation_routes import router as recommendation_router
from app.api.routes.placement_routes import router as placement_router
from app.api.routes.admin_routes import router as admin_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(catalog_router)
api_router.include_router(student_router)
api_router.include_router(job_router)
api_router.include_router(recommendation_router)
api_router.include_router(placement_router)
api_router.include_router(admin_router)
