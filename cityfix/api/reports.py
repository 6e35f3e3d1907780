# cityfix/api/reports.py
"""
Reports API Router

Endpoints:
- POST /reports/ - File a new report
- GET /reports/ - List all reports
- GET /reports/my-reports - List the caller's reports
- POST /reports/upload - Upload a media file, returns its URL
- GET /reports/{report_id} - Report with status history
- PATCH /reports/{report_id} - Edit a report (owner or admin)
- PATCH /reports/{report_id}/status - Change status (admin)
- DELETE /reports/{report_id} - Delete a report (owner or admin)
"""

from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from cityfix.config import settings
from cityfix.database import get_db
from cityfix.models.user import User
from cityfix.schemas.report import (
    ReportCreate,
    ReportResponse,
    ReportStatusUpdate,
    ReportUpdate,
    UploadResponse,
)
from cityfix.services.errors import CityFixError
from cityfix.services.report_service import ReportService
from cityfix.services.storage import StorageBackend, build_storage, check_upload, default_filename
from cityfix.utils.security import get_current_user

router = APIRouter(prefix="/reports", tags=["reports"])


@lru_cache
def get_report_service() -> ReportService:
    return ReportService()


@lru_cache
def get_storage() -> StorageBackend:
    return build_storage(settings)


def _http_error(exc: CityFixError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


# ======================
# CREATE / LIST
# ======================
@router.post("/", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
def create_report(
    payload: ReportCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
):
    """File a new report. It always starts as ``pending``."""
    try:
        return service.create(db, payload, current_user)
    except CityFixError as e:
        raise _http_error(e)


@router.get("/", response_model=List[ReportResponse])
def list_reports(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
):
    return service.find_all(db)


@router.get("/my-reports", response_model=List[ReportResponse])
def list_my_reports(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
):
    return service.find_by_user(db, current_user.id)


# ======================
# MEDIA UPLOAD
# ======================
@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload_media(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    storage: StorageBackend = Depends(get_storage),
):
    """
    Store an image or video and return the URL to put in ``mediaUrls``.

    Size and type are checked before anything is written.
    """
    mime_type = (file.content_type or "").lower()
    try:
        # Multipart parsing already knows the size; refuse before reading into memory.
        if file.size is not None:
            check_upload(file.size, mime_type, storage, settings.MAX_FILE_SIZE)
        content = file.file.read()
        check_upload(len(content), mime_type, storage, settings.MAX_FILE_SIZE)
        original_name = file.filename or default_filename(mime_type)
        file_url = storage.save_file(content, original_name, mime_type)
    except CityFixError as e:
        raise _http_error(e)
    return {"fileUrl": file_url}


# ======================
# SINGLE REPORT
# ======================
@router.get("/{report_id}", response_model=ReportResponse)
def get_report(
    report_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
):
    try:
        return service.find_one(db, report_id)
    except CityFixError as e:
        raise _http_error(e)


@router.patch("/{report_id}", response_model=ReportResponse)
def update_report(
    report_id: str,
    payload: ReportUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
):
    """Edit report content. Status changes go through ``/status``."""
    try:
        return service.update(db, report_id, payload, current_user)
    except CityFixError as e:
        raise _http_error(e)


@router.patch("/{report_id}/status", response_model=ReportResponse)
def update_report_status(
    report_id: str,
    payload: ReportStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
):
    try:
        return service.update_status(
            db,
            report_id,
            payload.status.value,
            payload.comment,
            current_user,
        )
    except CityFixError as e:
        raise _http_error(e)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
):
    try:
        service.remove(db, report_id, current_user)
    except CityFixError as e:
        raise _http_error(e)
