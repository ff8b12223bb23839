from typing import Any, Dict, List
import logging

from fastapi import APIRouter, Depends
from pymongo.database import Database

from forumflow.core.permissions import Capability
from forumflow.db.session import get_db
from forumflow.deps import require_capability
from forumflow.modules.user_management.schemas.user import MembershipUpdate, User as UserSchema
from forumflow.modules.user_management.services.user import list_users, make_admin, set_membership

router = APIRouter()
logger = logging.getLogger("forumflow")

manage_users = require_capability(Capability.MANAGE_USERS)


@router.get("", response_model=List[UserSchema])
def read_users(
    db: Database = Depends(get_db),
    admin: Dict[str, Any] = Depends(manage_users),
) -> Any:
    """List every user (admin only)"""
    return list_users(db)


@router.patch("/make-admin/{uid}", response_model=UserSchema)
def promote_user(
    uid: str,
    db: Database = Depends(get_db),
    admin: Dict[str, Any] = Depends(manage_users),
) -> Any:
    """Grant the admin role to a user (admin only)"""
    logger.info(f"Admin {admin['uid']} promoting {uid}")
    return make_admin(db, uid)


@router.patch("/membership/{uid}", response_model=UserSchema)
def update_membership(
    uid: str,
    membership_in: MembershipUpdate,
    db: Database = Depends(get_db),
    admin: Dict[str, Any] = Depends(manage_users),
) -> Any:
    """Change a user's membership (admin only)"""
    return set_membership(db, uid, membership_in.membership)
