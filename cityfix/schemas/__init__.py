# cityfix/schemas/__init__.py

# Auth schemas
from .auth import TokenData

# Report schemas
from .report import (
    Location,
    ReportCreate,
    ReportUpdate,
    ReportStatusUpdate,
    ReportResponse,
    StatusLogResponse,
    UserInfo,
    UploadResponse,
)

# Statistics schemas
from .stats import (
    SummaryStats,
    CategoryCount,
    StatusCount,
    DateStats,
)

__all__ = [
    "TokenData",
    "Location",
    "ReportCreate",
    "ReportUpdate",
    "ReportStatusUpdate",
    "ReportResponse",
    "StatusLogResponse",
    "UserInfo",
    "UploadResponse",
    "SummaryStats",
    "CategoryCount",
    "StatusCount",
    "DateStats",
]
