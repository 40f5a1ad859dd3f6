"""
MongoDB access.

Holds what does not fit fixed columns:
- resume_versions   generated resume content, one document per generation
- resume_analytics  append-only log of resume actions (generate, ats_check, ...)
- GridFS buckets    uploaded files, addressed by "<user_id>/..." paths

The client is created lazily on first use and shared by the process.
"""
import logging
from typing import Optional

from gridfs import GridFSBucket
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from placement_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

COLLECTIONS = {
    "resume_versions": "resume_versions",
    "resume_analytics": "resume_analytics",
}

_client: Optional[MongoClient] = None


def get_mongo_client() -> MongoClient:
    global _client
    if _client is None:
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
            tz_aware=True,
        )
    return _client


def get_mongo_db() -> Database:
    return get_mongo_client()[settings.mongodb_db]


def get_collection(name: str) -> Collection:
    return get_mongo_db()[name]


def get_bucket(name: str) -> GridFSBucket:
    """File bucket; the resume bucket name comes from RESUME_BUCKET."""
    return GridFSBucket(get_mongo_db(), bucket_name=name)


def test_mongo_connection() -> bool:
    """Ping the server; False when it cannot be reached."""
    try:
        get_mongo_client().admin.command("ping")
        return True
    except Exception as e:
        logger.warning("MongoDB unreachable: %s", e)
        return False


def init_mongo_indexes():
    """Create the per-user lookup indexes. Safe to run on every startup."""
    db = get_mongo_db()

    db[COLLECTIONS["resume_versions"]].create_index(
        [("user_id", ASCENDING), ("generated_at", DESCENDING)]
    )
    analytics = db[COLLECTIONS["resume_analytics"]]
    analytics.create_index([("user_id", ASCENDING), ("created_at", ASCENDING)])
    analytics.create_index([("user_id", ASCENDING), ("action_type", ASCENDING)])

    # GridFS looks files up by name when downloading
    db[f"{settings.resume_bucket}.files"].create_index([("filename", ASCENDING), ("uploadDate", ASCENDING)])

    logger.info("MongoDB indexes ready")
