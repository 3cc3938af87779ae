"""Grant or revoke the admin role for an existing user, by email."""
import argparse
import logging

from cardvote.config import ADMIN_ROLE, DEFAULT_ROLE
from cardvote.crud import set_user_role
from cardvote.database.connection import MongoConnector

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email")
    parser.add_argument("--revoke", action="store_true", help=f"set the role back to '{DEFAULT_ROLE}'")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    role = DEFAULT_ROLE if args.revoke else ADMIN_ROLE
    try:
        user = set_user_role(MongoConnector().db, args.email, role)
    finally:
        MongoConnector.close()

    if user is None:
        logger.error(f"No user with email {args.email}")
        return 1
    logger.info(f"User {user['uid']} ({args.email}) is now '{role}'")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
