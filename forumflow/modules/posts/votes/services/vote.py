import logging
from typing import Any, Dict

from pymongo import ReturnDocument
from pymongo.database import Database

from forumflow.core.errors import BadRequest, NotFound
from forumflow.db.base import POSTS
from forumflow.db.documents import object_id
from forumflow.modules.posts.services.post import shape_post

logger = logging.getLogger("forumflow")

# voteScore mirrors upVote - downVote so popularity sorting needs no aggregation
VOTE_INCREMENTS = {
    "upvote": {"upVote": 1, "voteScore": 1},
    "downvote": {"downVote": 1, "voteScore": -1},
}


def vote(db: Database, post_id: str, vote_type: str) -> Dict[str, Any]:
    """
    Atomically count one vote on a post and return the updated post.

    Votes are not de-duplicated per user: the same caller can vote repeatedly.
    """
    increments = VOTE_INCREMENTS.get(vote_type)
    if increments is None:
        raise BadRequest("Vote type must be 'upvote' or 'downvote'", details={"type": vote_type})

    post = db[POSTS].find_one_and_update(
        {"_id": object_id(post_id, "Post")},
        {"$inc": increments},
        return_document=ReturnDocument.AFTER,
    )
    if not post:
        raise NotFound.for_resource("Post", post_id)

    logger.info(f"Recorded {vote_type} on post {post_id}")
    return shape_post(post)
