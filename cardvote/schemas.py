from typing import Optional

from pydantic import BaseModel, EmailStr


class UserIn(BaseModel):
    # Required fields are checked in the route so a missing one is a 400
    uid: Optional[str] = None
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    photo: Optional[str] = None
    role: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = None
    photo: Optional[str] = None
