import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from forumflow.core.errors import NotFound, ServerError
from forumflow.core.permissions import DEFAULT_ROLE, PRIVILEGED_ROLE
from forumflow.db.base import USERS
from forumflow.db.documents import to_public, utcnow
from forumflow.modules.auth.schemas.auth import VerifiedIdentity

logger = logging.getLogger("forumflow")

DEFAULT_MEMBERSHIP = "free"


def _display_name(identity: VerifiedIdentity) -> str:
    if identity.name:
        return identity.name
    if identity.email:
        return identity.email.split("@")[0]
    return ""


def sync_user(db: Database, identity: VerifiedIdentity, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Upsert the verified identity into the user directory.

    One atomic upsert keyed on ``uid``: the role, membership and creation time
    are only written when the record is first inserted; e-mail, name and
    last-login are refreshed on every call.
    """
    now = now or utcnow()
    try:
        user = db[USERS].find_one_and_update(
            {"uid": identity.uid},
            {
                "$set": {
                    "email": identity.email,
                    "name": _display_name(identity),
                    "lastLogin": now,
                },
                "$setOnInsert": {
                    "role": DEFAULT_ROLE.value,
                    "membership": DEFAULT_MEMBERSHIP,
                    "createdAt": now,
                },
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        logger.error(f"Error syncing user {identity.uid}: {e}")
        raise ServerError("Failed to sync user", details=str(e))
    return to_public(user)


def get_user(db: Database, uid: str) -> Optional[Dict[str, Any]]:
    """Get user by uid"""
    return to_public(db[USERS].find_one({"uid": uid}))


def list_users(db: Database) -> List[Dict[str, Any]]:
    """Get all users, newest first"""
    return [to_public(u) for u in db[USERS].find().sort("createdAt", DESCENDING)]


def _update_user(db: Database, uid: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    user = db[USERS].find_one_and_update(
        {"uid": uid},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if not user:
        raise NotFound.for_resource("User", uid)
    return to_public(user)


def make_admin(db: Database, uid: str) -> Dict[str, Any]:
    """Promote a user to the privileged role"""
    logger.info(f"Promoting user {uid} to {PRIVILEGED_ROLE.value}")
    return _update_user(db, uid, {"role": PRIVILEGED_ROLE.value})


def set_membership(db: Database, uid: str, membership: str) -> Dict[str, Any]:
    """Update a user's membership"""
    logger.info(f"Setting membership of user {uid} to {membership}")
    return _update_user(db, uid, {"membership": membership})


def find_user(db: Database, uid_or_email: str) -> Optional[Dict[str, Any]]:
    """Get user by uid or e-mail"""
    return to_public(db[USERS].find_one({"$or": [{"uid": uid_or_email}, {"email": uid_or_email}]}))
