"""
MongoDB Service - resume versions and the resume analytics log.

Collections in this database:
1. resume_versions   - Generated resume content (insert-only, many per user)
2. resume_analytics  - Append-only user action log

Both collections are keyed by the PostgreSQL user_id.
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection

from placement_portal.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    for key, value in doc.items():
        if isinstance(value, datetime):
            doc[key] = value.isoformat()
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# RESUME VERSIONS COLLECTION
# ============================================================

class ResumeVersionService:
    """
    Stores every generated resume.
    Versions are never updated; a new generation inserts a new document.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["resume_versions"])

    def insert(
        self,
        user_id: int,
        content: Dict[str, Any],
        target_role: Optional[str] = None,
        ats_score: Optional[float] = None,
        degraded: bool = False,
    ) -> str:
        """
        Insert a resume version.

        resume_type is "role-based" when a target role was given,
        otherwise "general".

        Returns:
            MongoDB ObjectId as string
        """
        doc = {
            "user_id": user_id,
            "resume_type": "role-based" if target_role else "general",
            "target_role": target_role or None,
            "ats_score": ats_score,
            "metadata": content,
            "degraded": degraded,
            "generated_at": _utcnow(),
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def get_for_user(self, user_id: int, version_id: str) -> Optional[dict]:
        """Fetch one version; None when the id is malformed or belongs to someone else."""
        try:
            oid = ObjectId(version_id)
        except (InvalidId, TypeError):
            return None
        doc = self.collection.find_one({"_id": oid, "user_id": user_id})
        return serialize_doc(doc)

    def list_for_user(self, user_id: int, limit: int = 20) -> List[dict]:
        """Latest versions first, content omitted."""
        cursor = self.collection.find(
            {"user_id": user_id},
            {"metadata": 0},
            sort=[("generated_at", -1)],
            limit=limit,
        )
        return serialize_docs(list(cursor))

    def count_for_user(self, user_id: int) -> int:
        return self.collection.count_documents({"user_id": user_id})

    def latest_ats_score(self, user_id: int) -> Optional[float]:
        doc = self.collection.find_one(
            {"user_id": user_id, "ats_score": {"$ne": None}},
            {"ats_score": 1},
            sort=[("generated_at", -1)],
        )
        return doc.get("ats_score") if doc else None


# ============================================================
# RESUME ANALYTICS COLLECTION
# ============================================================

class ResumeAnalyticsService:
    """
    Append-only log of resume actions.

    action_type is one of: generate, ats_check, cover_letter, parse_document.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["resume_analytics"])

    def log(self, user_id: int, action_type: str, details: Dict[str, Any] = None) -> str:
        doc = {
            "user_id": user_id,
            "action_type": action_type,
            "action_details": details or {},
            "created_at": _utcnow(),
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def list_for_user(self, user_id: int, action_type: str = None) -> List[dict]:
        query = {"user_id": user_id}
        if action_type:
            query["action_type"] = action_type
        cursor = self.collection.find(query, sort=[("created_at", 1)])
        return serialize_docs(list(cursor))
