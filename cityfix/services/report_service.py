# cityfix/services/report_service.py
"""
Report Lifecycle Service
Who may change a report, and how its status history is recorded.

Citizens file reports and edit their own; admins may edit any report and are
the only ones allowed to move a report between statuses. Every status change
appends a StatusLog row and updates ``Report.status`` in the same commit.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from cityfix.crud import report as report_crud
from cityfix.database import unit_of_work
from cityfix.models.report import Report, ReportStatus, StatusLog
from cityfix.models.user import User
from cityfix.schemas.report import ReportCreate, ReportUpdate
from cityfix.services.errors import ForbiddenError, NotFoundError, ValidationError
from cityfix.services.media import MediaUrlResolver

logger = logging.getLogger(__name__)

# Columns a regular edit may touch. ``status`` is deliberately absent.
EDITABLE_FIELDS = (
    "title",
    "description",
    "category",
    "location",
    "image_url",
    "media_urls",
    "street_name",
)
_REQUIRED_FIELDS = {"title", "description", "category", "location"}


class ReportService:
    def __init__(self, resolver: Optional[MediaUrlResolver] = None):
        self.resolver = resolver or MediaUrlResolver.from_settings()

    # ======================
    # PROJECTIONS
    # ======================

    def to_response(self, report: Report, *, include_history: bool = False) -> Dict[str, Any]:
        creator = report.created_by
        data = {
            "id": report.id,
            "title": report.title,
            "description": report.description,
            "category": report.category,
            "location": report.location,
            "streetName": report.street_name,
            "status": report.status,
            "imageUrl": self.resolver.resolve_optional(report.image_url),
            "mediaUrls": self.resolver.resolve_many(report.media_urls),
            "createdBy": {
                "id": creator.id,
                "name": creator.name,
                "email": creator.email,
                "role": creator.role,
            } if creator else None,
            "createdAt": report.created_at,
            "updatedAt": report.updated_at,
        }
        if include_history:
            data["statusLogs"] = [self._log_to_response(log) for log in report.status_logs]
        return data

    @staticmethod
    def _log_to_response(log: StatusLog) -> Dict[str, Any]:
        author = log.changed_by
        return {
            "id": log.id,
            "status": log.status,
            "comment": log.comment,
            "changedBy": {"id": author.id, "name": author.name} if author else None,
            "createdAt": log.created_at,
        }

    # ======================
    # READS
    # ======================

    def _get_or_404(self, db: Session, report_id: str, *, with_history: bool = False) -> Report:
        report = report_crud.get_report_by_id(db, report_id, with_history=with_history)
        if not report:
            raise NotFoundError(f"Report with ID {report_id} not found")
        return report

    def find_all(self, db: Session) -> List[Dict[str, Any]]:
        return [self.to_response(r) for r in report_crud.list_reports(db)]

    def find_by_user(self, db: Session, user_id: str) -> List[Dict[str, Any]]:
        return [self.to_response(r) for r in report_crud.list_reports_by_user(db, user_id)]

    def find_one(self, db: Session, report_id: str) -> Dict[str, Any]:
        """Report plus its status history, oldest entry first."""
        report = self._get_or_404(db, report_id, with_history=True)
        return self.to_response(report, include_history=True)

    # ======================
    # MUTATIONS
    # ======================

    def create(self, db: Session, payload: ReportCreate, actor: User) -> Dict[str, Any]:
        with unit_of_work(db):
            report = report_crud.create_report(
                db,
                created_by_id=actor.id,
                title=payload.title,
                description=payload.description,
                category=payload.category.value,
                location_x=payload.location.x,
                location_y=payload.location.y,
                street_name=payload.street_name,
                image_url=payload.image_url,
                media_urls=list(payload.media_urls or []),
                # New reports always start pending, whatever the client sent.
                status=ReportStatus.PENDING.value,
            )
        db.refresh(report)
        logger.info("Report %s created by user %s", report.id, actor.id)
        return self.to_response(report)

    def update(self, db: Session, report_id: str, payload: ReportUpdate, actor: User) -> Dict[str, Any]:
        report = self._get_or_404(db, report_id)
        self._ensure_owner_or_admin(report, actor, "You can only update your own reports")

        changes = {}
        provided = payload.model_dump(mode="json", exclude_unset=True)
        for field in EDITABLE_FIELDS:
            if field not in provided:
                continue
            value = provided[field]
            if value is None and field in _REQUIRED_FIELDS:
                raise ValidationError(f"{field} cannot be null")
            if field == "location":
                changes["location_x"] = value["x"]
                changes["location_y"] = value["y"]
            elif field == "media_urls":
                changes["media_urls"] = list(value or [])
            else:
                changes[field] = value

        with unit_of_work(db):
            report_crud.update_report_fields(db, report, changes)
        db.refresh(report)
        logger.info("Report %s updated by user %s (%s)", report.id, actor.id, ", ".join(sorted(changes)) or "no changes")
        return self.to_response(report)

    def update_status(
        self,
        db: Session,
        report_id: str,
        new_status: str,
        comment: Optional[str],
        actor: User,
    ) -> Dict[str, Any]:
        """
        Move a report to ``new_status``.

        Any status may follow any other. The log row and the status column are
        written in one commit, so readers never see one without the other.
        """
        report = self._get_or_404(db, report_id)
        if actor is None or not actor.is_admin:
            raise ForbiddenError("Only administrators can update report status")

        try:
            status_value = ReportStatus(new_status).value
        except ValueError:
            raise ValidationError(f"Invalid status: {new_status}") from None

        previous = report.status
        with unit_of_work(db):
            report_crud.add_status_log(
                db,
                report_id=report.id,
                status=status_value,
                comment=comment,
                changed_by_id=actor.id,
            )
            report_crud.set_report_status(db, report, status_value)

        logger.info(
            "Report %s status %s -> %s by admin %s",
            report.id, previous, status_value, actor.id,
        )
        return self.find_one(db, report.id)

    def remove(self, db: Session, report_id: str, actor: User) -> None:
        report = self._get_or_404(db, report_id)
        self._ensure_owner_or_admin(report, actor, "You can only delete your own reports")

        with unit_of_work(db):
            report_crud.delete_report(db, report)
        logger.info("Report %s deleted by user %s", report_id, actor.id)

    @staticmethod
    def _ensure_owner_or_admin(report: Report, actor: User, message: str) -> None:
        if actor is None:
            raise ForbiddenError("User information is missing")
        if report.created_by_id != actor.id and not actor.is_admin:
            raise ForbiddenError(message)
