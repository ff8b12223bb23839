import logging
from typing import Any, Dict, Optional

from pymongo import ReturnDocument
from pymongo.database import Database

from forumflow.core.errors import BadRequest, NotFound
from forumflow.db.base import POSTS
from forumflow.db.documents import object_id, utcnow
from forumflow.modules.posts.services.post import shape_post

logger = logging.getLogger("forumflow")


def add_comment(
    db: Database,
    post_id: str,
    text: str,
    user_id: Optional[str] = None,
    author_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Append a comment to a post and return the updated post"""
    text = (text or "").strip()
    if not text:
        raise BadRequest("Comment text is required")

    comment = {
        "text": text,
        "authorName": author_name,
        "authorId": user_id,
        "createdAt": utcnow(),
    }
    post = db[POSTS].find_one_and_update(
        {"_id": object_id(post_id, "Post")},
        {"$push": {"comments": comment}},
        return_document=ReturnDocument.AFTER,
    )
    if not post:
        raise NotFound.for_resource("Post", post_id)

    logger.info(f"Comment added to post {post_id} by {user_id}")
    return shape_post(post)
