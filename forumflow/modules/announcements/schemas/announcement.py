from typing import Optional
from datetime import datetime
from pydantic import BaseModel

from forumflow.modules.posts.schemas.post import RequiredText


class AnnouncementCreate(BaseModel):
    title: RequiredText
    description: RequiredText
    authorName: Optional[str] = None
    authorImage: Optional[str] = None


class Announcement(BaseModel):
    """Announcement model returned to client"""
    id: str
    title: str
    description: str
    authorName: Optional[str] = None
    authorImage: Optional[str] = None
    createdAt: datetime


class AnnouncementCreated(BaseModel):
    message: str
    announcementId: str


class AnnouncementDeleted(BaseModel):
    message: str
    announcementId: str
