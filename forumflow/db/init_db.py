import logging

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from forumflow.db.base import ANNOUNCEMENTS, POSTS, REPORTS, USERS

logger = logging.getLogger("forumflow")


def create_indexes(db: Database) -> None:
    """
    Ensure the indexes the handlers rely on. Safe to call on every startup.
    """
    try:
        db[USERS].create_index([("uid", ASCENDING)], unique=True, name="uid_unique")
        db[POSTS].create_index([("createdAt", DESCENDING)], name="createdAt_desc")
        db[POSTS].create_index([("voteScore", DESCENDING), ("createdAt", DESCENDING)], name="popularity")
        db[POSTS].create_index([("authorEmail", ASCENDING)], name="authorEmail")
        db[POSTS].create_index([("tag", ASCENDING)], name="tag")
        db[REPORTS].create_index([("createdAt", DESCENDING)], name="createdAt_desc")
        db[ANNOUNCEMENTS].create_index([("createdAt", DESCENDING)], name="createdAt_desc")
        logger.info(f"Indexes ensured on {db.name}")
    except Exception as e:
        logger.error(f"Error creating database indexes: {e}")
        raise
