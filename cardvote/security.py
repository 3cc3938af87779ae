import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pymongo.database import Database

from cardvote.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ADMIN_ROLE,
    ALGORITHM,
    SECRET_KEY,
)
from cardvote.crud import get_user
from cardvote.database.connection import get_database

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# Create JWT access token
def create_access_token(data: dict, expires_delta: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_delta)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


# Decode and verify a JWT; raises JWTError when invalid or expired
def decode_access_token(token: str) -> Dict[str, Any]:
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


def token_for_user(user: Dict[str, Any]) -> str:
    return create_access_token({"sub": user["uid"], "email": user["email"], "role": user.get("role")})


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Database = Depends(get_database),
) -> Dict[str, Any]:
    """Route guard: resolve the bearer token to a stored user."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as e:
        logger.warning(f"Rejected session token: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    uid = payload.get("sub")
    if not uid:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    user = get_user(db, uid)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if user.get("role") != ADMIN_ROLE:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
