from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId

from forumflow.core.errors import NotFound


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_public(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert a Mongo document to a JSON-serializable dict with a string ``id``."""
    if not doc:
        return doc
    d = {**doc}
    _id = d.pop("_id", None)
    if isinstance(_id, ObjectId):
        d["id"] = str(_id)
    elif _id is not None:
        d["id"] = _id
    return d


def object_id(value: str, resource_type: str = "Document") -> ObjectId:
    """Parse a path id; a malformed id cannot reference anything, so it is a NotFound."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFound.for_resource(resource_type, value)
