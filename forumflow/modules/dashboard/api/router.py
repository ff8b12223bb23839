from typing import Any

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from forumflow.db.session import get_db
from forumflow.modules.dashboard.schemas.stats import DashboardStats
from forumflow.modules.dashboard.services.stats import author_stats

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def read_dashboard_stats(
    db: Database = Depends(get_db),
    email: str = Query(..., min_length=1, description="Author e-mail"),
) -> Any:
    return author_stats(db, email)
