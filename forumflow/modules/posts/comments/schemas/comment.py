from typing import Optional
from datetime import datetime
from pydantic import BaseModel, field_validator


class CommentCreate(BaseModel):
    comment: str
    userId: Optional[str] = None
    authorName: Optional[str] = None

    @field_validator("comment")
    @classmethod
    def comment_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment text must not be empty")
        return v


class Comment(BaseModel):
    """Comment embedded in a post"""
    text: str
    authorName: Optional[str] = None
    authorId: Optional[str] = None
    createdAt: datetime
