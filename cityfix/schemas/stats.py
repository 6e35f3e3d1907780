from typing import List

from pydantic import BaseModel, ConfigDict, Field


class StatusBreakdown(BaseModel):
    """Per-status counts inside the summary (camelCase keys)"""
    model_config = ConfigDict(populate_by_name=True)

    pending: int = 0
    in_progress: int = Field(0, alias="inProgress")
    resolved: int = 0
    rejected: int = 0


class SummaryStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_reports: int = Field(..., alias="totalReports")
    by_status: StatusBreakdown = Field(..., alias="byStatus")
    resolution_rate: float = Field(..., alias="resolutionRate")
    avg_resolution_time_hours: float = Field(..., alias="avgResolutionTimeHours")
    median_resolution_time_hours: float = Field(..., alias="medianResolutionTimeHours")
    avg_first_response_time_hours: float = Field(..., alias="avgFirstResponseTimeHours")
    median_first_response_time_hours: float = Field(..., alias="medianFirstResponseTimeHours")


class CategoryCount(BaseModel):
    category: str
    label: str
    count: int


class StatusCount(BaseModel):
    status: str
    label: str
    count: int


class BucketStatusCounts(BaseModel):
    # Keys match the status enum values, as the charts expect.
    pending: int = 0
    in_progress: int = 0
    resolved: int = 0
    rejected: int = 0


class DateBucket(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    total: int
    by_status: BucketStatusCounts = Field(..., alias="byStatus")


class DateStats(BaseModel):
    period: str
    data: List[DateBucket]
