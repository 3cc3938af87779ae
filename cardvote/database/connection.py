import logging
from typing import Any, Dict, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from cardvote.config import (
    MONGO_DB_NAME,
    MONGO_URI,
    SETTINGS_COLLECTION_NAME,
    USERS_COLLECTION_NAME,
    VOTES_COLLECTION_NAME,
)

logger = logging.getLogger(__name__)


def ensure_indexes(db: Database) -> None:
    users = db[USERS_COLLECTION_NAME]
    votes = db[VOTES_COLLECTION_NAME]
    users.create_index("uid", unique=True)
    users.create_index("email", unique=True)
    # One vote per voter per participant
    votes.create_index(
        [("voterId", ASCENDING), ("participantId", ASCENDING)],
        unique=True,
    )
    votes.create_index("voterId")
    votes.create_index("participantId")


class MongoConnector:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            instance = super(MongoConnector, cls).__new__(cls)
            try:
                instance.client = MongoClient(MONGO_URI)
                instance.db = instance.client[MONGO_DB_NAME]
                ensure_indexes(instance.db)
                instance.client.server_info()
                logger.info(f"Connected to MongoDB: {MONGO_DB_NAME}")
            except Exception as e:
                logger.error(f"Failed to connect to MongoDB: {e}")
                raise
            cls._instance = instance
        return cls._instance

    @classmethod
    def close(cls):
        if cls._instance is not None:
            cls._instance.client.close()
            cls._instance = None
            logger.info("MongoDB connection closed")


def get_database() -> Database:
    """FastAPI dependency returning the shared database handle."""
    return MongoConnector().db


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    out = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
    return out
