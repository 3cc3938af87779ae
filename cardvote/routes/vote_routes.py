import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from cardvote.database.connection import get_database
from cardvote.models.vote_model import Vote
from cardvote.participants import get_participant, is_participant_enabled
from cardvote.security import get_current_user
from cardvote.storage_mongo import DuplicateVoteError, VoteStore

logger = logging.getLogger(__name__)

vote_router = APIRouter(prefix="/api/votes", tags=["Vote"])


@vote_router.post("", status_code=201)
def cast_vote(vote: Vote, user: dict = Depends(get_current_user), db: Database = Depends(get_database)):
    """
    Records the signed-in user's vote for one participant.
    A voter gets exactly one vote per participant.
    """
    participant = get_participant(vote.participantId)
    if participant is None:
        raise HTTPException(status_code=404, detail="Participant not found")
    if not is_participant_enabled(db, participant.id):
        raise HTTPException(status_code=403, detail="Voting is closed for this participant")

    vote_data = {
        "voterId": user["uid"],
        "voterName": user.get("name"),
        "voterEmail": user.get("email"),
        "participantId": participant.id,
        "participantName": participant.name,
        "vote": vote.vote,
        "intensity": vote.intensity,
        "timestamp": datetime.now(timezone.utc),
    }
    try:
        vote_id = VoteStore(db).save_vote(vote_data)
    except DuplicateVoteError:
        raise HTTPException(status_code=409, detail="User has already voted for this participant")

    return {"message": "Vote submitted successfully", "voteId": vote_id}


@vote_router.get("")
def get_all_votes(db: Database = Depends(get_database)):
    return VoteStore(db).list_votes()


@vote_router.get("/{voter_id}")
def get_voter_votes(voter_id: str, db: Database = Depends(get_database)):
    return VoteStore(db).votes_by_voter(voter_id)


@vote_router.get("/{voter_id}/{participant_id}")
def get_single_vote(voter_id: str, participant_id: int, db: Database = Depends(get_database)):
    vote = VoteStore(db).get_vote(voter_id, participant_id)
    if not vote:
        raise HTTPException(status_code=404, detail="No vote found for this participant")
    return vote
