"""
MongoDB Service - recommendation log collection.

Every time recommendations are generated for a student, one document per
scored job is appended:

{
    "user_id": "...",
    "job_id": "...",
    "score": 67,
    "skill_match_score": 50,
    "cgpa_score": 67,
    "interest_score": 100,
    "explanation_data": {
        "matched_skill_ids": [...],
        "missing_skill_ids": [...],
        "explanation": "You have 1 of 2 required skills. ..."
    },
    "logged_at": datetime
}

The log is a side channel: a failed write is logged and swallowed so the
student still gets their recommendations.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.db.mongodb import get_collection, COLLECTIONS
from app.models.recommendation import ScoredMatch

logger = logging.getLogger(__name__)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


# ============================================================
# RECOMMENDATION LOGS COLLECTION
# ============================================================

class RecommendationLogService:
    """
    Handles recommendation log storage.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        # Resolved lazily so constructing the service never touches the network
        if self._collection is None:
            self._collection = get_collection(COLLECTIONS["recommendation_logs"])
        return self._collection

    @staticmethod
    def build_document(user_id: str, match: ScoredMatch, logged_at: datetime) -> dict:
        return {
            "user_id": user_id,
            "job_id": match.job_id,
            "score": match.total_score,
            "skill_match_score": match.skill_match_score,
            "cgpa_score": match.cgpa_score,
            "interest_score": match.interest_score,
            "explanation_data": {
                "matched_skill_ids": [s.id for s in match.matched_skills],
                "missing_skill_ids": [s.id for s in match.missing_skills],
                "explanation": match.explanation,
            },
            "logged_at": logged_at,
        }

    def log_matches(self, user_id: str, matches: List[ScoredMatch]) -> int:
        """
        Append one log document per match.

        Returns:
            Number of documents written (0 on failure)
        """
        if not matches:
            return 0

        logged_at = datetime.now(timezone.utc)
        docs = [self.build_document(user_id, m, logged_at) for m in matches]

        try:
            result = self.collection.insert_many(docs, ordered=False)
        except PyMongoError as e:
            logger.warning("Recommendation log write failed for user %s: %s", user_id, e)
            return 0

        return len(result.inserted_ids)

    def get_by_user(self, user_id: str, limit: int = 50) -> List[dict]:
        """Most recent log entries for a student."""
        cursor = self.collection.find(
            {"user_id": user_id},
            sort=[("logged_at", DESCENDING)],
            limit=limit
        )
        return serialize_docs(list(cursor))


def get_recommendation_log_service() -> RecommendationLogService:
    """Get recommendation log service instance."""
    return RecommendationLogService()
