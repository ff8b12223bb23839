from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class VerifiedIdentity(BaseModel):
    """Identity decoded from a verified Firebase ID token"""
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class Me(BaseModel):
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str
    lastLogin: Optional[datetime] = None
