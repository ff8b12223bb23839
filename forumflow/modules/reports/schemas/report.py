from enum import Enum
from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, field_validator

from forumflow.modules.posts.schemas.post import RequiredText


class ReportStatus(str, Enum):
    pending = "pending"
    action_taken = "action_taken"
    resolved = "resolved"


ReportActionType = Literal["warn", "delete", "ban", "resolve"]


class ReportCreate(BaseModel):
    reportedUserUid: RequiredText
    reportedUserEmail: EmailStr
    contentId: RequiredText
    contentSnippet: Optional[str] = ""
    reason: RequiredText

    @field_validator("contentSnippet")
    @classmethod
    def snippet_default(cls, v: Optional[str]) -> str:
        return v or ""


class ReportActionIn(BaseModel):
    action: ReportActionType


class ReportAction(BaseModel):
    type: ReportActionType
    at: datetime


class Report(BaseModel):
    """Report model returned to client"""
    id: str
    reporterUid: str
    reporterEmail: Optional[str] = None
    reportedUserUid: str
    reportedUserEmail: str
    contentId: str
    contentSnippet: str = ""
    reason: str
    status: ReportStatus
    actions: List[ReportAction] = []
    createdAt: datetime
    updatedAt: Optional[datetime] = None


class ReportCreated(BaseModel):
    message: str
    reportId: str
