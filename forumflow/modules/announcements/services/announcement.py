import logging
from typing import Any, Dict, List

from pymongo import DESCENDING
from pymongo.database import Database

from forumflow.core.errors import NotFound
from forumflow.db.base import ANNOUNCEMENTS
from forumflow.db.documents import object_id, to_public, utcnow
from forumflow.modules.announcements.schemas.announcement import AnnouncementCreate

logger = logging.getLogger("forumflow")


def list_announcements(db: Database) -> List[Dict[str, Any]]:
    """Get all announcements, newest first"""
    cursor = db[ANNOUNCEMENTS].find().sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
    return [to_public(a) for a in cursor]


def create_announcement(db: Database, announcement_in: AnnouncementCreate, author: Dict[str, Any]) -> str:
    """Create an announcement; author fields fall back to the stored admin record"""
    document = announcement_in.model_dump()
    document["authorName"] = document["authorName"] or author.get("name")
    document["createdAt"] = utcnow()
    result = db[ANNOUNCEMENTS].insert_one(document)
    logger.info(f"Announcement {result.inserted_id} created by {author.get('uid')}")
    return str(result.inserted_id)


def delete_announcement(db: Database, announcement_id: str) -> None:
    result = db[ANNOUNCEMENTS].delete_one({"_id": object_id(announcement_id, "Announcement")})
    if result.deleted_count == 0:
        raise NotFound.for_resource("Announcement", announcement_id)
    logger.info(f"Announcement {announcement_id} deleted")
