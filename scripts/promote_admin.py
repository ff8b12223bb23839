#!/usr/bin/env python3

"""
Bootstrap script to grant the admin role from the command line.

Promotion over the API is itself admin-only, so the first admin has to be
created here. The user must have signed in at least once.
Run this as: python scripts/promote_admin.py <uid-or-email>
"""

import os
import sys
import logging

# Add parent directory to path to import forumflow modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from forumflow.core.config import settings
from forumflow.db.session import MongoGateway
from forumflow.modules.user_management.services.user import find_user, make_admin

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def run(uid_or_email: str) -> int:
    gateway = MongoGateway(uri=settings.mongodb_uri, db_name=settings.DB_NAME)
    try:
        db = gateway.connect()
        user = find_user(db, uid_or_email)
        if not user:
            logger.error(f"No user matches {uid_or_email}; they must sign in once first")
            return 1
        user = make_admin(db, user["uid"])
        logger.info(f"User {user['uid']} ({user.get('email')}) is now {user['role']}")
        return 0
    finally:
        gateway.close()

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: promote_admin.py <uid-or-email>")
        sys.exit(2)
    sys.exit(run(sys.argv[1]))
