# storage_mongo.py
import logging
from typing import Any, Dict, List, Optional, Set

from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from cardvote.config import VOTES_COLLECTION_NAME
from cardvote.database.connection import serialize_doc

logger = logging.getLogger(__name__)


class DuplicateVoteError(Exception):
    """Raised when a voter already has a vote for the participant."""


class VoteStore:
    def __init__(self, db: Database):
        self.collection = db[VOTES_COLLECTION_NAME]

    def has_voted(self, voter_id: str, participant_id: int) -> bool:
        query = {"voterId": voter_id, "participantId": participant_id}
        return self.collection.find_one(query) is not None

    def save_vote(self, vote_data: Dict[str, Any]) -> str:
        """
        Insert a vote record.

        The unique (voterId, participantId) index also rejects a duplicate
        inserted between the existence check and the insert.

        Returns:
            The inserted id as a string
        """
        voter_id = vote_data["voterId"]
        participant_id = vote_data["participantId"]
        if self.has_voted(voter_id, participant_id):
            logger.warning(f"Voter {voter_id} already voted for participant {participant_id}")
            raise DuplicateVoteError(voter_id, participant_id)
        try:
            result = self.collection.insert_one(dict(vote_data))
        except DuplicateKeyError:
            logger.warning(f"Duplicate vote rejected by index: {voter_id} -> {participant_id}")
            raise DuplicateVoteError(voter_id, participant_id)
        logger.info(f"Vote saved: {voter_id} -> {participant_id}")
        return str(result.inserted_id)

    def list_votes(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find().sort("timestamp", DESCENDING)
        return [serialize_doc(v) for v in cursor]

    def votes_by_voter(self, voter_id: str) -> List[Dict[str, Any]]:
        cursor = self.collection.find({"voterId": voter_id}).sort("timestamp", DESCENDING)
        return [serialize_doc(v) for v in cursor]

    def get_vote(self, voter_id: str, participant_id: int) -> Optional[Dict[str, Any]]:
        return serialize_doc(
            self.collection.find_one({"voterId": voter_id, "participantId": participant_id})
        )

    def voted_participant_ids(self, voter_id: str) -> Set[int]:
        cursor = self.collection.find({"voterId": voter_id}, {"participantId": 1})
        return {v["participantId"] for v in cursor}

    def count(self) -> int:
        return self.collection.count_documents({})

    def _count_by(self, field: str) -> List[Dict[str, Any]]:
        pipeline = [
            {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
            {"$sort": {"_id": 1}},
        ]
        return list(self.collection.aggregate(pipeline))

    def vote_distribution(self) -> List[Dict[str, Any]]:
        return self._count_by("vote")

    def participant_vote_counts(self) -> List[Dict[str, Any]]:
        return self._count_by("participantId")

    def votes_for_tally(self) -> List[Dict[str, Any]]:
        """Only the fields the scoreboard needs."""
        projection = {"_id": 0, "participantId": 1, "vote": 1, "intensity": 1}
        return list(self.collection.find({}, projection))
