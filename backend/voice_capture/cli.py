"""Provision administrator accounts.

    voice-capture-admin create-admin --username admin
"""

import argparse
import getpass
import sys
from voice_capture.core.logger import get_logger
from voice_capture.db.base import Base, SessionLocal, engine
from voice_capture.services import identity

logger = get_logger(__name__)


def create_admin(username: str, password: str) -> int:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        admin = identity.provision_admin(db, username, password)
    finally:
        db.close()
    print(f"Admin user '{admin.username}' created/updated")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Voice capture administration")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create-admin", help="Create or reset an administrator")
    create.add_argument("--username", default="admin")
    create.add_argument("--password", help="Prompted for when omitted")

    args = parser.parse_args(argv)

    if args.command == "create-admin":
        password = args.password or getpass.getpass("Admin password: ")
        if not password:
            logger.error("An empty password is not allowed")
            return 1
        return create_admin(args.username, password)
    return 1


if __name__ == "__main__":
    sys.exit(main())
