"""Pydantic schemas"""
from coe_tracker.schemas.user import UserSync, UserResponse, AccountListResponse, TokenResponse
from coe_tracker.schemas.report import (
    ReportCreate,
    ReportUpdate,
    CustomReportResponse,
    ReportMutationResponse,
    MessageResponse,
    AccountReportRequest,
    AccountReportResponse,
)
from coe_tracker.schemas.analytics import DataUsageAnalytics, TableAnalytics, UserAnalytics

__all__ = [
    "UserSync",
    "UserResponse",
    "AccountListResponse",
    "TokenResponse",
    "ReportCreate",
    "ReportUpdate",
    "CustomReportResponse",
    "ReportMutationResponse",
    "MessageResponse",
    "AccountReportRequest",
    "AccountReportResponse",
    "DataUsageAnalytics",
    "TableAnalytics",
    "UserAnalytics",
]
