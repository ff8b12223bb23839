from typing import Annotated, List, Literal, Optional
from datetime import datetime
from pydantic import AfterValidator, BaseModel, field_validator

from forumflow.modules.posts.comments.schemas.comment import Comment

PostStatus = Literal["published", "draft"]
SortMode = Literal["recent", "popularity"]


def required_text(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


def stripped(v: Optional[str]) -> Optional[str]:
    return v.strip() if v is not None else v


RequiredText = Annotated[str, AfterValidator(required_text)]
Tag = Annotated[Optional[str], AfterValidator(stripped)]


class PostCreate(BaseModel):
    authorImage: Optional[str] = None
    authorName: Optional[str] = None
    authorEmail: Optional[str] = None
    postTitle: RequiredText
    postDescription: RequiredText
    tag: Tag = None
    status: PostStatus = "published"


class PostUpdate(BaseModel):
    postTitle: Optional[str] = None
    postDescription: Optional[str] = None
    tag: Tag = None
    authorImage: Optional[str] = None
    status: Optional[PostStatus] = None

    @field_validator("postTitle", "postDescription")
    @classmethod
    def text_not_blank(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("must not be null")
        return required_text(v)


class Post(BaseModel):
    """Post model returned to client"""
    id: str
    authorImage: Optional[str] = None
    authorName: Optional[str] = None
    authorEmail: Optional[str] = None
    postTitle: str
    postDescription: str
    tag: Optional[str] = None
    upVote: int = 0
    downVote: int = 0
    comments: List[Comment] = []
    commentCount: int = 0
    status: Optional[PostStatus] = None
    createdAt: datetime
    updatedAt: Optional[datetime] = None


class PostPage(BaseModel):
    posts: List[Post]
    total: int
    page: int
    pages: int


class PostCreated(BaseModel):
    message: str
    postId: str


class PostDeleted(BaseModel):
    message: str
    postId: str


class PostCount(BaseModel):
    count: int
