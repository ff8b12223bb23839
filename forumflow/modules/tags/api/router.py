from typing import Any, List

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from forumflow.db.session import get_db
from forumflow.modules.posts.schemas.post import PostPage
from forumflow.modules.posts.services.post import DEFAULT_LIMIT, DEFAULT_PAGE
from forumflow.modules.tags.services.tag import list_tags, posts_by_tag

router = APIRouter()


@router.get("", response_model=List[str])
def read_tags(db: Database = Depends(get_db)) -> Any:
    """List every tag in use"""
    return list_tags(db)


@router.get("/{tag}", response_model=PostPage)
def read_posts_by_tag(
    tag: str,
    db: Database = Depends(get_db),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
) -> Any:
    """Get a page of posts carrying one tag"""
    return posts_by_tag(db, tag, page=page, limit=limit)
