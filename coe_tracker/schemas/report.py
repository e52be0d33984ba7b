"""Schemas for custom report and account report API payloads."""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from coe_tracker.schemas.base import CamelModel


class ReportCreate(CamelModel):
    title: str
    source_type: str
    filter_criteria: Optional[Dict[str, Any]] = None


class ReportUpdate(CamelModel):
    title: Optional[str] = None
    filter_criteria: Optional[Dict[str, Any]] = None
    report_data: Optional[List[Any]] = None


class CustomReportResponse(CamelModel):
    id: UUID
    title: str
    created_by: str
    source_type: str
    filter_criteria: Dict[str, Any]
    report_data: List[Any]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_report(cls, report) -> "CustomReportResponse":
        return cls(
            id=report.id,
            title=report.title,
            created_by=report.created_by_id,
            source_type=report.source_type,
            filter_criteria=report.filter_criteria or {},
            report_data=report.report_data or [],
            created_at=report.created_at,
            updated_at=report.updated_at,
        )


class ReportMutationResponse(BaseModel):
    message: str
    report: CustomReportResponse


class MessageResponse(BaseModel):
    message: str


class AccountReportRequest(CamelModel):
    account_id: str
    detailed: bool = False


class AccountInfo(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    role: str
    uid: Optional[str] = None
    join_date: Optional[datetime] = None


class AccountReportResponse(CamelModel):
    account: AccountInfo
    """Per-category counts plus ``totalActivities``."""
    summary: Dict[str, int]
    """Activities across all categories, newest first."""
    all_activities: List[Dict[str, Any]]
