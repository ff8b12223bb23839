from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from forumflow.core.permissions import Capability
from forumflow.db.session import get_db
from forumflow.deps import get_verified_identity, require_capability
from forumflow.modules.auth.schemas.auth import VerifiedIdentity
from forumflow.modules.reports.schemas.report import Report, ReportActionIn, ReportCreate, ReportCreated
from forumflow.modules.reports.services.report import apply_action, create_report, list_reports

router = APIRouter()

manage_reports = require_capability(Capability.MANAGE_REPORTS)


@router.post("", response_model=ReportCreated, status_code=status.HTTP_201_CREATED)
def create_new_report(
    *,
    db: Database = Depends(get_db),
    report_in: ReportCreate,
    user: Dict[str, Any] = Depends(require_capability(Capability.AUTHENTICATED)),
    identity: VerifiedIdentity = Depends(get_verified_identity),
) -> Any:
    """File a report against a user or piece of content"""
    report_id = create_report(db, report_in, identity)
    return {"message": "Report submitted successfully", "reportId": report_id}


@router.get("", response_model=List[Report])
def read_reports(
    db: Database = Depends(get_db),
    admin: Dict[str, Any] = Depends(manage_reports),
) -> Any:
    """List reports, newest first (admin only)"""
    return list_reports(db)


@router.patch("/{report_id}", response_model=Report)
def apply_report_action(
    *,
    db: Database = Depends(get_db),
    report_id: str,
    action_in: ReportActionIn,
    admin: Dict[str, Any] = Depends(manage_reports),
) -> Any:
    """Warn, delete, ban or resolve on a report (admin only)"""
    return apply_action(db, report_id, action_in.action)
