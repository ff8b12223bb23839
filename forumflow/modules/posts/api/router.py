from typing import Any, Optional
import logging

from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database

from forumflow.db.session import get_db
from forumflow.modules.posts.schemas.post import (
    Post as PostSchema, PostCount, PostCreate, PostCreated, PostDeleted, PostPage, PostUpdate, SortMode,
)
from forumflow.modules.posts.services.post import (
    DEFAULT_LIMIT, DEFAULT_PAGE, count_posts, create_post, delete_post, get_post, list_posts, update_post,
)

logger = logging.getLogger("forumflow")

router = APIRouter()


@router.get("", response_model=PostPage)
def read_posts(
    db: Database = Depends(get_db),
    email: Optional[str] = Query(None, description="Exact author e-mail"),
    tag: Optional[str] = Query(None, description="Exact tag"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
    sort: SortMode = Query("recent"),
) -> Any:
    """
    Retrieve a page of posts, newest first or by net votes.
    """
    return list_posts(db, email=email, tag=tag, page=page, limit=limit, sort=sort)


@router.get("/count", response_model=PostCount)
def read_post_count(
    db: Database = Depends(get_db),
    email: Optional[str] = Query(None, description="Exact author e-mail"),
) -> Any:
    """
    Count posts, optionally for one author.
    """
    return {"count": count_posts(db, email=email)}


@router.get("/{post_id}", response_model=PostSchema)
def read_post_by_id(
    *,
    db: Database = Depends(get_db),
    post_id: str,
) -> Any:
    """
    Get post by ID.
    """
    return get_post(db, post_id)


@router.post("", response_model=PostCreated, status_code=status.HTTP_201_CREATED)
def create_new_post(
    *,
    db: Database = Depends(get_db),
    post_in: PostCreate,
) -> Any:
    """
    Create new post.
    """
    post_id = create_post(db, post_in)
    return {"message": "Post created successfully", "postId": post_id}


@router.put("/{post_id}", response_model=PostSchema)
def update_post_by_id(
    *,
    db: Database = Depends(get_db),
    post_id: str,
    post_in: PostUpdate,
) -> Any:
    """
    Update the title, description, tag, image or status of a post.
    """
    return update_post(db, post_id, post_in)


@router.delete("/{post_id}", response_model=PostDeleted)
def delete_post_by_id(
    *,
    db: Database = Depends(get_db),
    post_id: str,
) -> Any:
    """
    Delete a post together with its embedded comments.
    """
    delete_post(db, post_id)
    return {"message": "Post deleted successfully", "postId": post_id}
