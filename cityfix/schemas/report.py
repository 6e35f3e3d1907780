# cityfix/schemas/report.py
"""
Report Pydantic Schemas
Request bodies accept snake_case or the camelCase names the clients send;
responses are serialized in camelCase.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cityfix.models.report import ReportCategory, ReportStatus


# ======================
# SHARED
# ======================

class Location(BaseModel):
    """Coordinate pair: x is longitude, y is latitude"""
    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float


def _not_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


# ======================
# REQUEST SCHEMAS
# ======================

class ReportCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., max_length=255)
    description: str
    category: ReportCategory
    location: Location
    image_url: Optional[str] = Field(None, alias="imageUrl")
    media_urls: List[str] = Field(default_factory=list, alias="mediaUrls")
    street_name: Optional[str] = Field(None, alias="streetName", max_length=255)

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v):
        """Title and description cannot be blank"""
        return _not_blank(v)


class ReportUpdate(BaseModel):
    """Partial update. There is no status field: status moves only through /status."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    category: Optional[ReportCategory] = None
    location: Optional[Location] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    media_urls: Optional[List[str]] = Field(None, alias="mediaUrls")
    street_name: Optional[str] = Field(None, alias="streetName", max_length=255)

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v):
        """Title and description cannot be blank"""
        return _not_blank(v)


class ReportStatusUpdate(BaseModel):
    status: ReportStatus
    comment: Optional[str] = Field(None, max_length=2000)


# ======================
# RESPONSE SCHEMAS
# ======================

class UserInfo(BaseModel):
    # Addresses were validated when the user registered; echo them as stored.
    id: str
    name: str
    email: str
    role: str


class ChangedBy(BaseModel):
    id: str
    name: str


class StatusLogResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    status: ReportStatus
    comment: Optional[str] = None
    changed_by: Optional[ChangedBy] = Field(None, alias="changedBy")
    created_at: datetime = Field(..., alias="createdAt")


class ReportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    category: ReportCategory
    location: Location
    street_name: Optional[str] = Field(None, alias="streetName")
    status: ReportStatus
    image_url: Optional[str] = Field(None, alias="imageUrl")
    media_urls: List[str] = Field(default_factory=list, alias="mediaUrls")
    created_by: Optional[UserInfo] = Field(None, alias="createdBy")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
    status_logs: Optional[List[StatusLogResponse]] = Field(None, alias="statusLogs")


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_url: str = Field(..., alias="fileUrl")
