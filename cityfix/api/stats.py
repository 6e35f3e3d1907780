# cityfix/api/stats.py
"""
Statistics endpoints for the admin dashboard.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from cityfix.database import get_db
from cityfix.models.user import User
from cityfix.schemas.stats import CategoryCount, DateStats, StatusCount, SummaryStats
from cityfix.services import stats_service
from cityfix.services.errors import CityFixError
from cityfix.utils.security import require_admin

router = APIRouter(prefix="/stats", tags=["stats"])


# ─────────────────────────────────────────
# GET /stats/summary
# ─────────────────────────────────────────
@router.get("/summary", response_model=SummaryStats)
def get_summary(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return stats_service.get_summary(db)


# ─────────────────────────────────────────
# GET /stats/by-category
# ─────────────────────────────────────────
@router.get("/by-category", response_model=List[CategoryCount])
def get_by_category(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return stats_service.get_by_category(db)


# ─────────────────────────────────────────
# GET /stats/by-status
# ─────────────────────────────────────────
@router.get("/by-status", response_model=List[StatusCount])
def get_by_status(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return stats_service.get_by_status(db)


# ─────────────────────────────────────────
# GET /stats/by-date?period=day|week|month
# ─────────────────────────────────────────
@router.get("/by-date", response_model=DateStats)
def get_by_date(
    period: str = Query("week", description="day | week | month"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    try:
        return stats_service.get_by_date(db, period)
    except CityFixError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
