"""
Recommendation Routes

GET /recommendations - Ranked active jobs for the current student
POST /recommendations/score - Score a supplied snapshot (stateless)
GET /recommendations/history - Recent recommendation log entries
"""

from fastapi import APIRouter, Depends, Query
from typing import List

from app.core.auth import get_current_user, get_current_student
from app.core.config import get_settings
from app.models.recommendation import ScoringPolicy
from app.services.mongo_service import RecommendationLogService, get_recommendation_log_service
from app.services.recommendation_service import get_recommendation_service
from app.services.scoring import score
from app.schemas.schemas import ScoreRequest, RecommendationListResponse

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


@router.get("", response_model=RecommendationListResponse)
async def get_recommendations(
    student: dict = Depends(get_current_student),
    log_service: RecommendationLogService = Depends(get_recommendation_log_service)
):
    """
    Score every active job for the current student.

    Score = 50% skill match + 25% CGPA + 25% interest, 0-100.
    Each match explains why it was recommended.
    """
    service = get_recommendation_service(log_service=log_service)
    matches = service.generate_recommendations(student["user_id"])
    return RecommendationListResponse(recommendations=matches, total=len(matches))


@router.post("/score", response_model=RecommendationListResponse)
async def score_snapshot(request: ScoreRequest, user: dict = Depends(get_current_user)):
    """
    Score a caller-supplied snapshot with the same scorer.

    Nothing is read from or written to the database.
    """
    matches = score(
        request.profile,
        request.jobs,
        request.possessed_skill_ids,
        request.possessed_interest_ids,
        ScoringPolicy.from_settings(get_settings())
    )
    return RecommendationListResponse(recommendations=matches, total=len(matches))


@router.get("/history", response_model=List[dict])
async def recommendation_history(
    limit: int = Query(50, ge=1, le=200),
    student: dict = Depends(get_current_student),
    log_service: RecommendationLogService = Depends(get_recommendation_log_service)
):
    """Most recent recommendation log entries for the current student."""
    return log_service.get_by_user(student["user_id"], limit=limit)
