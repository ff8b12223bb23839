from typing import Any

from fastapi import APIRouter, Depends, Path
from pymongo.database import Database

from forumflow.db.session import get_db
from forumflow.modules.posts.schemas.post import Post as PostSchema
from forumflow.modules.posts.votes.schemas.vote import VoteCreate
from forumflow.modules.posts.votes.services.vote import vote

router = APIRouter()


@router.put("/vote/{post_id}", response_model=PostSchema)
def vote_on_post(
    *,
    db: Database = Depends(get_db),
    post_id: str = Path(..., description="The ID of the post to vote on"),
    vote_in: VoteCreate,
) -> Any:
    """Upvote or downvote a post"""
    return vote(db, post_id, vote_in.type)
