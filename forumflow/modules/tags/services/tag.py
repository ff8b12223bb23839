from typing import Any, Dict, List

from pymongo.database import Database

from forumflow.db.base import POSTS
from forumflow.modules.posts.services.post import DEFAULT_LIMIT, DEFAULT_PAGE, paginate


def list_tags(db: Database) -> List[str]:
    """
    Distinct non-blank tags across all posts, alphabetically.

    Values are returned as stored so each one can be passed back to ``posts_by_tag``.
    """
    tags = db[POSTS].distinct("tag")
    return sorted({t for t in tags if isinstance(t, str) and t.strip()})


def posts_by_tag(db: Database, tag: str, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
    return paginate(db, {"tag": tag}, page=page, limit=limit)
