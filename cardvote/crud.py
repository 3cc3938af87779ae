import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from cardvote.config import ADMIN_EMAILS, ADMIN_ROLE, DEFAULT_ROLE, USERS_COLLECTION_NAME
from cardvote.database.connection import serialize_doc
from cardvote.schemas import UserIn, UserUpdate

logger = logging.getLogger(__name__)


class UserConflictError(Exception):
    """Raised when the email is already bound to a different uid."""


def _users(db: Database):
    return db[USERS_COLLECTION_NAME]


def resolve_role(email: str, requested: Optional[str]) -> str:
    """Admin comes from configuration only; anything else the client asks for is kept."""
    if email.lower() in ADMIN_EMAILS:
        return ADMIN_ROLE
    if not requested or requested == ADMIN_ROLE:
        return DEFAULT_ROLE
    return requested


# Create the user on first sign-in, refresh profile fields afterwards
def upsert_user(db: Database, data: UserIn) -> Tuple[Dict[str, Any], bool]:
    users = _users(db)
    now = datetime.now(timezone.utc)
    email = str(data.email)

    existing = users.find_one({"$or": [{"uid": data.uid}, {"email": email}]})
    if existing:
        if existing["uid"] != data.uid:
            logger.warning(f"Sign-in for {email} with uid {data.uid} does not match stored uid")
            raise UserConflictError(email)
        role = existing.get("role")
        if role != ADMIN_ROLE:
            role = resolve_role(email, data.role)
        update_data = {
            "name": data.name,
            "photo": data.photo,
            "role": role,
            "lastLogin": now,
        }
        updated = users.find_one_and_update(
            {"_id": existing["_id"]},
            {"$set": update_data},
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"User {updated['uid']} signed in again")
        return serialize_doc(updated), False

    new_user = {
        "name": data.name,
        "email": email,
        "photo": data.photo or None,
        "role": resolve_role(email, data.role),
        "uid": data.uid,
        "createdAt": now,
        "lastLogin": now,
    }
    result = users.insert_one(new_user)
    new_user["_id"] = result.inserted_id
    logger.info(f"User {data.uid} created")
    return serialize_doc(new_user), True


def list_users(db: Database) -> List[Dict[str, Any]]:
    return [serialize_doc(u) for u in _users(db).find().sort("createdAt", DESCENDING)]


def get_user(db: Database, uid: str) -> Optional[Dict[str, Any]]:
    return serialize_doc(_users(db).find_one({"uid": uid}))


def update_user(db: Database, uid: str, data: UserUpdate) -> bool:
    update_data = {k: v for k, v in data.model_dump().items() if v}
    update_data["updatedAt"] = datetime.now(timezone.utc)
    result = _users(db).update_one({"uid": uid}, {"$set": update_data})
    return result.matched_count > 0


def count_users(db: Database) -> int:
    return _users(db).count_documents({})


def set_user_role(db: Database, email: str, role: str) -> Optional[Dict[str, Any]]:
    updated = _users(db).find_one_and_update(
        {"email": email},
        {"$set": {"role": role}},
        return_document=ReturnDocument.AFTER,
    )
    return serialize_doc(updated)
