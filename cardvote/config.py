# cardvote/config.py
# Central place for settings and constants
import os

from dotenv import load_dotenv

load_dotenv()


def _csv(value: str) -> list:
    return [item.strip() for item in value.split(",") if item.strip()]


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


SERVICE_NAME = os.getenv("SERVICE_NAME", "CARD 2025 Backend")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Database Config ---
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGO_DB", "CARD")
USERS_COLLECTION_NAME = "Users"
VOTES_COLLECTION_NAME = "Votes"
SETTINGS_COLLECTION_NAME = "Settings"

# --- Security & JWT Config ---
# Override SECRET_KEY in every deployed environment
SECRET_KEY = os.getenv("SECRET_KEY", "a_very_secret_key_for_dev_only")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

CORS_ORIGINS = _csv(os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
))

# --- Roles ---
DEFAULT_ROLE = os.getenv("DEFAULT_ROLE", "student")
ADMIN_ROLE = "admin"
ADMIN_EMAILS = [email.lower() for email in _csv(os.getenv("ADMIN_EMAILS", ""))]

# --- Voting ---
VOTE_CHOICES = ("yes", "no")
MIN_INTENSITY = 1
MAX_INTENSITY = 3

# Participants with no stored visibility flag fall back to this
DEFAULT_PARTICIPANT_VISIBILITY = _flag(os.getenv("DEFAULT_PARTICIPANT_VISIBILITY", "true"))
PARTICIPANT_SETTINGS_ID = "participant_visibility"
