from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from coe_tracker.db.session import get_db
from coe_tracker.api.auth import get_caller
from coe_tracker.schemas.report import (
    ReportCreate,
    ReportUpdate,
    CustomReportResponse,
    ReportMutationResponse,
    MessageResponse,
)
from coe_tracker.services.access import Caller, parse_only_mine
from coe_tracker.services.category_registry import SOURCE_TYPES
from coe_tracker.services.report_service import ReportService

router = APIRouter()


@router.post("", response_model=ReportMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    report_data: ReportCreate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Save a report: the filter plus a snapshot of the matching records"""
    report = ReportService(db).create_report(
        report_data.title,
        report_data.source_type,
        report_data.filter_criteria,
        caller,
    )
    return ReportMutationResponse(message="Report created successfully", report=CustomReportResponse.from_report(report))


@router.get("", response_model=List[CustomReportResponse])
async def list_reports(
    only_mine: Optional[str] = Query(None, alias="onlyMine"),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """List saved reports, newest first (directors see all unless onlyMine=true)"""
    reports = ReportService(db).list_reports(caller, parse_only_mine(only_mine))
    return [CustomReportResponse.from_report(r) for r in reports]


@router.get("/source-types", response_model=List[str])
async def list_source_types(caller: Caller = Depends(get_caller)):
    """Categories a report can be built from"""
    return list(SOURCE_TYPES)


@router.get("/{report_id}", response_model=CustomReportResponse)
async def get_report(
    report_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Get a saved report"""
    return CustomReportResponse.from_report(ReportService(db).get_report(report_id, caller))


@router.put("/{report_id}", response_model=ReportMutationResponse)
async def update_report(
    report_id: str,
    update_data: ReportUpdate,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Update title, filter or stored data of a report"""
    report = ReportService(db).update_report(
        report_id,
        caller,
        title=update_data.title,
        filter_criteria=update_data.filter_criteria,
        report_data=update_data.report_data,
    )
    return ReportMutationResponse(message="Report updated successfully", report=CustomReportResponse.from_report(report))


@router.delete("/{report_id}", response_model=MessageResponse)
async def delete_report(
    report_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Delete a report"""
    ReportService(db).delete_report(report_id, caller)
    return MessageResponse(message="Report deleted successfully")
