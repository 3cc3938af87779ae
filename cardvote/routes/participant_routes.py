from typing import Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pymongo.database import Database

from cardvote.database.connection import get_database
from cardvote.participants import (
    PARTICIPANTS,
    available_participants,
    get_participant_settings,
    save_participant_settings,
)
from cardvote.security import require_admin
from cardvote.storage_mongo import VoteStore

router = APIRouter(prefix="/api", tags=["Participants"])


@router.get("/participants")
def list_participants():
    return [p.model_dump() for p in PARTICIPANTS]


@router.get("/participants/available")
def list_available_participants(
    voterId: Optional[str] = Query(None),
    db: Database = Depends(get_database),
):
    """Enabled participants, minus the ones `voterId` has already voted for."""
    voted = VoteStore(db).voted_participant_ids(voterId) if voterId else set()
    return [p.model_dump() for p in available_participants(db, exclude_ids=voted)]


@router.get("/admin/participant-settings")
def read_participant_settings(db: Database = Depends(get_database)):
    return get_participant_settings(db)


# The admin panel saves with POST
@router.api_route("/admin/participant-settings", methods=["PUT", "POST"])
def write_participant_settings(
    settings: Dict[int, bool] = Body(...),
    _admin: dict = Depends(require_admin),
    db: Database = Depends(get_database),
):
    try:
        return save_participant_settings(db, settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
