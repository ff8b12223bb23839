from typing import Dict

from pymongo.database import Database

from forumflow.db.base import POSTS


def author_stats(db: Database, email: str) -> Dict[str, int]:
    """Post counts for one author, overall and per status"""
    posts = db[POSTS]
    return {
        "totalPosts": posts.count_documents({"authorEmail": email}),
        "publishedPosts": posts.count_documents({"authorEmail": email, "status": "published"}),
        "draftPosts": posts.count_documents({"authorEmail": email, "status": "draft"}),
    }
