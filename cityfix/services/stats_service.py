# cityfix/services/stats_service.py
"""
Statistics over the report corpus for the admin dashboard.

Everything is recomputed from the database on each call. The individual
counts are separate queries, so a summary taken during concurrent writes is
not guaranteed to be a single consistent snapshot.
"""

import calendar
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from cityfix.crud import report as report_crud
from cityfix.models.report import Report, ReportCategory, ReportStatus
from cityfix.models.user import utcnow
from cityfix.services.errors import ValidationError
from cityfix.utils.labels import category_label, status_label

PERIODS = ("day", "week", "month")


# ─────────────────────────────────────────
# Numeric helpers
# ─────────────────────────────────────────

def average(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0
    return round(sum(values) / len(values), 2)


def median(values: Iterable[float]) -> float:
    ordered = sorted(values)
    if not ordered:
        return 0
    n = len(ordered)
    mid = n // 2
    if n % 2 == 0:
        return round((ordered[mid - 1] + ordered[mid]) / 2, 2)
    return round(ordered[mid], 2)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


# ─────────────────────────────────────────
# Summary
# ─────────────────────────────────────────

def _response_times(reports: List[Report]):
    """First-response and resolution hours for the given resolved reports."""
    first_response, resolution = [], []
    for report in reports:
        logs = sorted(report.status_logs, key=lambda log: log.created_at)
        if not logs:
            continue
        first_response.append(hours_between(report.created_at, logs[0].created_at))
        resolved_log = next(
            (log for log in logs if log.status == ReportStatus.RESOLVED.value),
            None,
        )
        if resolved_log is not None:
            resolution.append(hours_between(report.created_at, resolved_log.created_at))
    return first_response, resolution


def get_summary(db: Session) -> Dict[str, Any]:
    total = report_crud.count_reports(db)
    counts = report_crud.count_by_status(db)
    resolved = counts.get(ReportStatus.RESOLVED.value, 0)
    resolution_rate = (resolved / total * 100) if total else 0

    first_response, resolution = _response_times(report_crud.list_resolved_with_history(db))

    return {
        "totalReports": total,
        "byStatus": {
            "pending": counts.get(ReportStatus.PENDING.value, 0),
            "inProgress": counts.get(ReportStatus.IN_PROGRESS.value, 0),
            "resolved": resolved,
            "rejected": counts.get(ReportStatus.REJECTED.value, 0),
        },
        "resolutionRate": resolution_rate,
        "avgResolutionTimeHours": average(resolution),
        "medianResolutionTimeHours": median(resolution),
        "avgFirstResponseTimeHours": average(first_response),
        "medianFirstResponseTimeHours": median(first_response),
    }


# ─────────────────────────────────────────
# Breakdowns
# ─────────────────────────────────────────

def get_by_category(db: Session) -> List[Dict[str, Any]]:
    counts = report_crud.count_by_category(db)
    rows = [
        {"category": c.value, "label": category_label(c.value), "count": counts.get(c.value, 0)}
        for c in ReportCategory
    ]
    return sorted(rows, key=lambda row: row["count"], reverse=True)


def get_by_status(db: Session) -> List[Dict[str, Any]]:
    counts = report_crud.count_by_status(db)
    return [
        {"status": s.value, "label": status_label(s.value), "count": counts.get(s.value, 0)}
        for s in ReportStatus
    ]


# ─────────────────────────────────────────
# Time series
# ─────────────────────────────────────────

def _months_ago(moment: datetime, months: int) -> datetime:
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def window_start(period: str, now: datetime) -> datetime:
    if period == "day":
        return now - timedelta(days=7)
    if period == "week":
        return now - timedelta(days=28)
    if period == "month":
        return _months_ago(now, 6)
    raise ValidationError(f"Invalid period '{period}'. Use one of: {', '.join(PERIODS)}")


def bucket_key(period: str, moment: datetime) -> str:
    day = moment.date()
    if period == "day":
        return day.isoformat()
    if period == "week":
        # Weeks start on Sunday; Monday is weekday() == 0.
        sunday = day - timedelta(days=(day.weekday() + 1) % 7)
        return sunday.isoformat()
    if period == "month":
        return day.strftime("%Y-%m")
    raise ValidationError(f"Invalid period '{period}'. Use one of: {', '.join(PERIODS)}")


def get_by_date(db: Session, period: str = "week", now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Report counts bucketed by day, week or month.

    Windows end at ``now``: 7 days for ``day``, 28 days for ``week`` and six
    months for ``month``. Buckets without reports are left out.
    """
    now = now or utcnow()
    start = window_start(period, now)

    buckets: Dict[str, Dict[str, Any]] = {}
    for report in report_crud.list_created_between(db, start, now):
        key = bucket_key(period, report.created_at)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = {
                "date": key,
                "total": 0,
                "byStatus": {s.value: 0 for s in ReportStatus},
            }
            buckets[key] = bucket
        bucket["total"] += 1
        if report.status in bucket["byStatus"]:
            bucket["byStatus"][report.status] += 1

    return {
        "period": period,
        "data": [buckets[key] for key in sorted(buckets)],
    }
