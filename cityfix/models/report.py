import enum

from sqlalchemy import Column, Float, ForeignKey, JSON, String, Text, TIMESTAMP
from sqlalchemy.orm import relationship

from cityfix.database import Base
from cityfix.models.user import new_id, utcnow


class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class ReportCategory(str, enum.Enum):
    INFRASTRUCTURE = "infrastructure"
    ENVIRONMENT = "environment"
    SAFETY = "safety"
    OTHER = "other"


class Report(Base):
    __tablename__ = "reports"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(20), nullable=False, default=ReportCategory.OTHER.value, index=True)
    # Stored references are storage-relative; URLs are built at read time.
    image_url = Column(String(1024), nullable=True)
    location_x = Column(Float, nullable=False)
    location_y = Column(Float, nullable=False)
    street_name = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default=ReportStatus.PENDING.value, index=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    media_urls = Column(JSON, nullable=False, default=list)
    created_at = Column(TIMESTAMP, default=utcnow, nullable=False, index=True)
    updated_at = Column(TIMESTAMP, default=utcnow, onupdate=utcnow, nullable=False)

    created_by = relationship("User", back_populates="reports")
    status_logs = relationship(
        "StatusLog",
        back_populates="report",
        cascade="all, delete-orphan",
        order_by="StatusLog.created_at",
    )

    @property
    def location(self) -> dict:
        return {"x": self.location_x, "y": self.location_y}


class StatusLog(Base):
    __tablename__ = "status_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    report_id = Column(
        String(36),
        ForeignKey("reports.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(String(20), nullable=False)
    comment = Column(Text, nullable=True)
    changed_by_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(TIMESTAMP, default=utcnow, nullable=False)

    report = relationship("Report", back_populates="status_logs")
    changed_by = relationship("User", back_populates="status_logs")
