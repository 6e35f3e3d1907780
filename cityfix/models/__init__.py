# cityfix/models/__init__.py
# Import models in dependency order
from .user import User, UserRole
from .report import Report, ReportCategory, ReportStatus, StatusLog

__all__ = ["User", "UserRole", "Report", "ReportCategory", "ReportStatus", "StatusLog"]
