import enum
import uuid
from datetime import datetime, UTC

from sqlalchemy import Column, String, TIMESTAMP
from sqlalchemy.orm import relationship

from cityfix.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp; every stored datetime in the schema uses it."""
    return datetime.now(UTC).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class UserRole(str, enum.Enum):
    CITIZEN = "citizen"
    ADMIN = "admin"


# ---------------- USER ----------------
# Registration and credentials live in the auth service; reports only
# reference users for ownership and attribution.
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.CITIZEN.value)
    created_at = Column(TIMESTAMP, default=utcnow, nullable=False)
    updated_at = Column(TIMESTAMP, default=utcnow, onupdate=utcnow)

    reports = relationship("Report", back_populates="created_by")
    status_logs = relationship("StatusLog", back_populates="changed_by")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
