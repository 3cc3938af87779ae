"""Fixed participant roster and the admin-controlled visibility map."""
import logging
from typing import Dict, List, Mapping, Optional

from pymongo.database import Database

from cardvote.config import (
    DEFAULT_PARTICIPANT_VISIBILITY,
    PARTICIPANT_SETTINGS_ID,
    SETTINGS_COLLECTION_NAME,
)
from cardvote.models.participant_model import Participant

logger = logging.getLogger(__name__)

PARTICIPANTS: List[Participant] = [
    Participant(id=1, name="John Doe", role="Software Engineer",
                avatar="https://randomuser.me/api/portraits/men/1.jpg"),
    Participant(id=2, name="Jane Smith", role="Product Manager",
                avatar="https://randomuser.me/api/portraits/women/2.jpg"),
    Participant(id=3, name="Robert Johnson", role="UX Designer",
                avatar="https://randomuser.me/api/portraits/men/3.jpg"),
    Participant(id=4, name="Emily Davis", role="Data Scientist",
                avatar="https://randomuser.me/api/portraits/women/4.jpg"),
    Participant(id=5, name="Michael Wilson", role="DevOps Engineer",
                avatar="https://randomuser.me/api/portraits/men/5.jpg"),
    Participant(id=6, name="Sarah Brown", role="Frontend Developer",
                avatar="https://randomuser.me/api/portraits/women/6.jpg"),
    Participant(id=7, name="David Taylor", role="Backend Developer",
                avatar="https://randomuser.me/api/portraits/men/7.jpg"),
    Participant(id=8, name="Jessica Martinez", role="QA Engineer",
                avatar="https://randomuser.me/api/portraits/women/8.jpg"),
]

_BY_ID: Dict[int, Participant] = {p.id: p for p in PARTICIPANTS}


def get_participant(participant_id: int) -> Optional[Participant]:
    return _BY_ID.get(participant_id)


def _settings(db: Database):
    return db[SETTINGS_COLLECTION_NAME]


def get_participant_settings(db: Database) -> Dict[int, bool]:
    """
    Visibility for every roster participant.
    Mongo keys are strings, so stored ids are converted back to int here.
    """
    doc = _settings(db).find_one({"_id": PARTICIPANT_SETTINGS_ID}) or {}
    stored = doc.get("participants", {})
    return {
        p.id: bool(stored.get(str(p.id), DEFAULT_PARTICIPANT_VISIBILITY))
        for p in PARTICIPANTS
    }


def save_participant_settings(db: Database, settings: Mapping[int, bool]) -> Dict[int, bool]:
    unknown = sorted(pid for pid in settings if pid not in _BY_ID)
    if unknown:
        raise ValueError(f"Unknown participant id(s): {', '.join(map(str, unknown))}")

    merged = get_participant_settings(db)
    merged.update({pid: bool(enabled) for pid, enabled in settings.items()})
    _settings(db).update_one(
        {"_id": PARTICIPANT_SETTINGS_ID},
        {"$set": {"participants": {str(pid): enabled for pid, enabled in merged.items()}}},
        upsert=True,
    )
    enabled_count = sum(merged.values())
    logger.info(f"Participant visibility saved: {enabled_count}/{len(merged)} enabled")
    return merged


def is_participant_enabled(db: Database, participant_id: int) -> bool:
    return get_participant_settings(db).get(participant_id, False)


def available_participants(db: Database, exclude_ids=()) -> List[Participant]:
    settings = get_participant_settings(db)
    excluded = set(exclude_ids)
    return [p for p in PARTICIPANTS if settings[p.id] and p.id not in excluded]
