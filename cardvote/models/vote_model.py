from typing import Literal

from pydantic import BaseModel, Field

from cardvote.config import MAX_INTENSITY, MIN_INTENSITY


class Vote(BaseModel):
    participantId: int
    vote: Literal["yes", "no"]
    intensity: int = Field(..., ge=MIN_INTENSITY, le=MAX_INTENSITY)
