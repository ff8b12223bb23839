from typing import Optional
from datetime import datetime
from pydantic import BaseModel, field_validator


class User(BaseModel):
    """User model returned to client"""
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str
    membership: Optional[str] = None
    createdAt: Optional[datetime] = None
    lastLogin: Optional[datetime] = None


class MembershipUpdate(BaseModel):
    membership: str

    @field_validator("membership")
    @classmethod
    def membership_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("membership must not be empty")
        return v
