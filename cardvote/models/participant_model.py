from typing import Optional

from pydantic import BaseModel


class Participant(BaseModel):
    id: int
    name: str
    role: str
    avatar: Optional[str] = None


class ParticipantResult(Participant):
    yesVotes: int = 0
    noVotes: int = 0
    totalVotes: int = 0
    weightedScore: int = 0
    averageIntensity: float = 0.0
    yesPercentage: int = 0
    rank: int = 0
