import logging
import math
from typing import Any, Dict, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from forumflow.core.errors import BadRequest, NotFound
from forumflow.db.base import POSTS
from forumflow.db.documents import object_id, to_public, utcnow
from forumflow.modules.posts.schemas.post import PostCreate, PostUpdate

logger = logging.getLogger("forumflow")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5
MAX_LIMIT = 100
# Largest skip the server accepts (signed 64-bit)
MAX_SKIP = 2 ** 63 - 1

# Popularity is the net vote (upVote - downVote), ties broken by recency
SORT_ORDERS = {
    "recent": [("createdAt", DESCENDING), ("_id", DESCENDING)],
    "popularity": [("voteScore", DESCENDING), ("createdAt", DESCENDING), ("_id", DESCENDING)],
}


def shape_post(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Public representation of a post document, with its comment count"""
    post = to_public(doc)
    post.setdefault("comments", [])
    post["commentCount"] = len(post["comments"])
    post.pop("voteScore", None)
    return post


def build_filter(email: Optional[str] = None, tag: Optional[str] = None) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if email:
        query["authorEmail"] = email
    if tag:
        query["tag"] = tag
    return query


def paginate(
    db: Database,
    query: Dict[str, Any],
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    sort: str = "recent",
) -> Dict[str, Any]:
    """
    Run a filtered, sorted page query; ``total`` counts the filtered set.

    ``limit`` is clamped to ``MAX_LIMIT``. A page past the largest skip the
    server can encode is empty.
    """
    if page < 1 or limit < 1:
        raise BadRequest("page and limit must be positive integers")
    order = SORT_ORDERS.get(sort)
    if order is None:
        raise BadRequest("sort must be 'recent' or 'popularity'", details={"sort": sort})
    limit = min(limit, MAX_LIMIT)
    skip = (page - 1) * limit

    total = db[POSTS].count_documents(query)
    posts = []
    if skip <= MAX_SKIP:
        cursor = db[POSTS].find(query).sort(order).skip(skip).limit(limit)
        posts = [shape_post(p) for p in cursor]
    return {
        "posts": posts,
        "total": total,
        "page": page,
        "pages": math.ceil(total / limit),
    }


def list_posts(
    db: Database,
    email: Optional[str] = None,
    tag: Optional[str] = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    sort: str = "recent",
) -> Dict[str, Any]:
    """Get a page of posts, optionally filtered by author e-mail and tag"""
    logger.info(f"Listing posts email={email} tag={tag} page={page} limit={limit} sort={sort}")
    return paginate(db, build_filter(email, tag), page=page, limit=limit, sort=sort)


def get_post(db: Database, post_id: str) -> Dict[str, Any]:
    """Get post by ID"""
    post = db[POSTS].find_one({"_id": object_id(post_id, "Post")})
    if not post:
        raise NotFound.for_resource("Post", post_id)
    return shape_post(post)


def count_posts(db: Database, email: Optional[str] = None) -> int:
    return db[POSTS].count_documents(build_filter(email=email))


def create_post(db: Database, post_in: PostCreate) -> str:
    """Create new post and return its id"""
    document = {
        **post_in.model_dump(),
        "upVote": 0,
        "downVote": 0,
        "voteScore": 0,
        "comments": [],
        "createdAt": utcnow(),
    }
    result = db[POSTS].insert_one(document)
    logger.info(f"Created post {result.inserted_id} for {post_in.authorEmail}")
    return str(result.inserted_id)


def update_post(db: Database, post_id: str, post_in: PostUpdate) -> Dict[str, Any]:
    """Update the editable fields of a post"""
    changes = post_in.model_dump(exclude_unset=True)
    if not changes:
        raise BadRequest("No fields to update")
    changes["updatedAt"] = utcnow()

    post = db[POSTS].find_one_and_update(
        {"_id": object_id(post_id, "Post")},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )
    if not post:
        raise NotFound.for_resource("Post", post_id)
    logger.info(f"Updated post {post_id}: {sorted(changes)}")
    return shape_post(post)


def delete_post(db: Database, post_id: str) -> None:
    """Delete post and its embedded comments"""
    result = db[POSTS].delete_one({"_id": object_id(post_id, "Post")})
    if result.deleted_count == 0:
        raise NotFound.for_resource("Post", post_id)
    logger.info(f"Deleted post {post_id}")
