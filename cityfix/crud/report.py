# cityfix/crud/report.py
"""
Report CRUD Operations
Database access for reports and their status history. Functions here only
flush; committing is left to the service layer.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from cityfix.models.report import Report, ReportStatus, StatusLog


# ======================
# REPORT CRUD
# ======================

def create_report(db: Session, *, created_by_id: str, **fields: Any) -> Report:
    report = Report(created_by_id=created_by_id, **fields)
    db.add(report)
    db.flush()
    return report


def get_report_by_id(db: Session, report_id: str, *, with_history: bool = False) -> Optional[Report]:
    """
    Get a report by its ID.

    With ``with_history`` the status logs and their authors are loaded too.
    """
    query = db.query(Report).options(joinedload(Report.created_by))
    if with_history:
        query = query.options(
            selectinload(Report.status_logs).joinedload(StatusLog.changed_by)
        )
    return query.filter(Report.id == report_id).first()


def list_reports(db: Session) -> List[Report]:
    return (
        db.query(Report)
        .options(joinedload(Report.created_by))
        .order_by(Report.created_at.desc())
        .all()
    )


def list_reports_by_user(db: Session, user_id: str) -> List[Report]:
    return (
        db.query(Report)
        .options(joinedload(Report.created_by))
        .filter(Report.created_by_id == user_id)
        .order_by(Report.created_at.desc())
        .all()
    )


def update_report_fields(db: Session, report: Report, changes: Dict[str, Any]) -> Report:
    for key, value in changes.items():
        setattr(report, key, value)
    db.flush()
    return report


def delete_report(db: Session, report: Report) -> None:
    # ORM cascade removes the status logs with the report.
    db.delete(report)
    db.flush()


# ======================
# STATUS HISTORY
# ======================

def add_status_log(
    db: Session,
    *,
    report_id: str,
    status: str,
    comment: Optional[str],
    changed_by_id: Optional[str],
    created_at: Optional[datetime] = None,
) -> StatusLog:
    log = StatusLog(
        report_id=report_id,
        status=status,
        comment=comment,
        changed_by_id=changed_by_id,
    )
    if created_at is not None:
        log.created_at = created_at
    db.add(log)
    db.flush()
    return log


def set_report_status(db: Session, report: Report, status: str) -> Report:
    report.status = status
    db.flush()
    return report


def get_status_history(db: Session, report_id: str) -> List[StatusLog]:
    """Status logs of one report, oldest first."""
    return (
        db.query(StatusLog)
        .options(joinedload(StatusLog.changed_by))
        .filter(StatusLog.report_id == report_id)
        .order_by(StatusLog.created_at.asc())
        .all()
    )


# ======================
# AGGREGATE QUERIES
# ======================

def count_reports(db: Session) -> int:
    return db.query(Report).count()


def count_by_status(db: Session) -> Dict[str, int]:
    rows = db.query(Report.status, func.count(Report.id)).group_by(Report.status).all()
    return {status: count for status, count in rows}


def count_by_category(db: Session) -> Dict[str, int]:
    rows = db.query(Report.category, func.count(Report.id)).group_by(Report.category).all()
    return {category: count for category, count in rows}


def list_resolved_with_history(db: Session) -> List[Report]:
    return (
        db.query(Report)
        .options(selectinload(Report.status_logs))
        .filter(Report.status == ReportStatus.RESOLVED.value)
        .all()
    )


def list_created_between(db: Session, start: datetime, end: datetime) -> List[Report]:
    return (
        db.query(Report)
        .filter(Report.created_at >= start, Report.created_at <= end)
        .order_by(Report.created_at.asc())
        .all()
    )
