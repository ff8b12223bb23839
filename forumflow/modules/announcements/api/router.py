from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from forumflow.core.permissions import Capability
from forumflow.db.session import get_db
from forumflow.deps import require_capability
from forumflow.modules.announcements.schemas.announcement import (
    Announcement, AnnouncementCreate, AnnouncementCreated, AnnouncementDeleted,
)
from forumflow.modules.announcements.services.announcement import (
    create_announcement, delete_announcement, list_announcements,
)

router = APIRouter()

manage_announcements = require_capability(Capability.MANAGE_ANNOUNCEMENTS)


@router.get("", response_model=List[Announcement])
def read_announcements(db: Database = Depends(get_db)) -> Any:
    """List announcements, newest first"""
    return list_announcements(db)


@router.post("", response_model=AnnouncementCreated, status_code=status.HTTP_201_CREATED)
def create_new_announcement(
    *,
    db: Database = Depends(get_db),
    announcement_in: AnnouncementCreate,
    admin: Dict[str, Any] = Depends(manage_announcements),
) -> Any:
    """Publish an announcement (admin only)"""
    announcement_id = create_announcement(db, announcement_in, admin)
    return {"message": "Announcement created successfully", "announcementId": announcement_id}


@router.delete("/{announcement_id}", response_model=AnnouncementDeleted)
def delete_announcement_by_id(
    *,
    db: Database = Depends(get_db),
    announcement_id: str,
    admin: Dict[str, Any] = Depends(manage_announcements),
) -> Any:
    """Remove an announcement (admin only)"""
    delete_announcement(db, announcement_id)
    return {"message": "Announcement deleted successfully", "announcementId": announcement_id}
