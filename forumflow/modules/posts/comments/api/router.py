from typing import Any

from fastapi import APIRouter, Depends, Path
from pymongo.database import Database

from forumflow.db.session import get_db
from forumflow.modules.posts.comments.schemas.comment import CommentCreate
from forumflow.modules.posts.comments.services.comment import add_comment
from forumflow.modules.posts.schemas.post import Post as PostSchema

router = APIRouter()


@router.post("/comment/{post_id}", response_model=PostSchema)
def create_post_comment(
    *,
    db: Database = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentCreate,
) -> Any:
    """Append a comment to a post"""
    return add_comment(
        db,
        post_id,
        comment_in.comment,
        user_id=comment_in.userId,
        author_name=comment_in.authorName,
    )
