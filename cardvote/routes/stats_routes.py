from fastapi import APIRouter, Depends
from pymongo.database import Database

from cardvote.crud import count_users
from cardvote.database.connection import get_database
from cardvote.participants import PARTICIPANTS, get_participant_settings
from cardvote.results import build_results
from cardvote.storage_mongo import VoteStore

router = APIRouter(prefix="/api", tags=["Results"])


def collect_stats(db: Database) -> dict:
    store = VoteStore(db)
    settings = get_participant_settings(db)
    return {
        "totalUsers": count_users(db),
        "totalVotes": store.count(),
        "totalParticipants": len(PARTICIPANTS),
        "enabledParticipants": sum(settings.values()),
        "voteDistribution": store.vote_distribution(),
        "participantVoteCount": store.participant_vote_counts(),
    }


@router.get("/stats")
def get_stats(db: Database = Depends(get_database)):
    return collect_stats(db)


@router.get("/admin/stats", tags=["Admin"])
def get_admin_stats(db: Database = Depends(get_database)):
    return collect_stats(db)


@router.get("/results")
def get_results(db: Database = Depends(get_database)):
    return build_results(PARTICIPANTS, VoteStore(db).votes_for_tally())
