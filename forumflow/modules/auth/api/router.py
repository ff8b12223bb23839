"""Authenticated caller endpoints"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from forumflow.deps import get_current_user
from forumflow.modules.auth.schemas.auth import Me

router = APIRouter()


@router.get("/me", response_model=Me)
def read_me(current_user: Dict[str, Any] = Depends(get_current_user)) -> Any:
    """Return the caller's directory record, refreshed by this request"""
    return current_user
