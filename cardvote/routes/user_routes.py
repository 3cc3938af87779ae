import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from cardvote.crud import UserConflictError, get_user, list_users, update_user, upsert_user
from cardvote.database.connection import get_database
from cardvote.schemas import UserIn, UserUpdate
from cardvote.security import get_current_user, token_for_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])
auth_router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("")
def save_user(user: UserIn, response: Response, db: Database = Depends(get_database)):
    """
    Called by the client after Google sign-in.
    Creates the user on first sign-in and refreshes the profile afterwards.
    The response carries a bearer token for the guarded endpoints.
    """
    if not user.name or not user.email or not user.uid:
        raise HTTPException(status_code=400, detail="Name, email, and uid are required")

    try:
        saved, created = upsert_user(db, user)
    except (DuplicateKeyError, UserConflictError):
        logger.warning(f"Duplicate user rejected: uid={user.uid} email={user.email}")
        raise HTTPException(status_code=409, detail="User already exists with this email or uid")

    response.status_code = 201 if created else 200
    return {
        "message": "User created successfully" if created else "User updated successfully",
        "user": saved,
        "access_token": token_for_user(saved),
        "token_type": "bearer",
    }


@router.get("")
def get_all_users(db: Database = Depends(get_database)):
    return list_users(db)


@router.get("/{uid}")
def get_one_user(uid: str, db: Database = Depends(get_database)):
    user = get_user(db, uid)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{uid}")
def put_user(uid: str, data: UserUpdate, db: Database = Depends(get_database)):
    if not update_user(db, uid, data):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User updated successfully"}


@auth_router.get("/me")
def read_current_user(user: dict = Depends(get_current_user)):
    return user
