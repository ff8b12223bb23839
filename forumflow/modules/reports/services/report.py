import logging
from typing import Any, Dict, List

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from forumflow.core.errors import BadRequest, NotFound
from forumflow.db.base import REPORTS
from forumflow.db.documents import object_id, to_public, utcnow
from forumflow.modules.auth.schemas.auth import VerifiedIdentity
from forumflow.modules.reports.schemas.report import ReportCreate, ReportStatus

logger = logging.getLogger("forumflow")

REPORT_ACTIONS = ("warn", "delete", "ban", "resolve")


def status_after(action: str) -> ReportStatus:
    return ReportStatus.resolved if action == "resolve" else ReportStatus.action_taken


def create_report(db: Database, report_in: ReportCreate, reporter: VerifiedIdentity) -> str:
    """
    File a report. The reporter is always the verified caller, never the payload.
    """
    document = {
        **report_in.model_dump(),
        "reporterUid": reporter.uid,
        "reporterEmail": reporter.email,
        "status": ReportStatus.pending.value,
        "actions": [],
        "createdAt": utcnow(),
    }
    result = db[REPORTS].insert_one(document)
    logger.info(f"Report {result.inserted_id} filed by {reporter.uid} against {report_in.reportedUserUid}")
    return str(result.inserted_id)


def list_reports(db: Database) -> List[Dict[str, Any]]:
    """Get all reports, newest first"""
    cursor = db[REPORTS].find().sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
    return [to_public(r) for r in cursor]


def apply_action(db: Database, report_id: str, action: str) -> Dict[str, Any]:
    """Record one moderation action on a report and move its status accordingly"""
    if action not in REPORT_ACTIONS:
        raise BadRequest(f"Action must be one of: {', '.join(REPORT_ACTIONS)}", details={"action": action})

    now = utcnow()
    report = db[REPORTS].find_one_and_update(
        {"_id": object_id(report_id, "Report")},
        {
            "$push": {"actions": {"type": action, "at": now}},
            "$set": {"status": status_after(action).value, "updatedAt": now},
        },
        return_document=ReturnDocument.AFTER,
    )
    if not report:
        raise NotFound.for_resource("Report", report_id)

    logger.info(f"Applied {action} to report {report_id}")
    return to_public(report)
