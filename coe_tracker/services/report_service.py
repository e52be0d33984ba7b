"""
Saved custom reports.

A report stores the sanitized filter it was created with and a snapshot of
the matching records at creation time. The snapshot is never re-queried,
so later edits to the source records do not change a saved report.
"""
import logging
import uuid
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from coe_tracker.config import settings
from coe_tracker.models.report import CustomReport
from coe_tracker.services.access import Caller, can_access, resolve_scope
from coe_tracker.services.category_registry import get_category_by_source_type
from coe_tracker.services.exceptions import ForbiddenError, InvalidArgumentError, NotFoundError
from coe_tracker.services.record_repository import RecordRepository, serialize_record

logger = logging.getLogger(__name__)

EMPTY_FILTER_STRINGS = ("", "N/A")
DATE_RANGE_SOURCE_TYPE = "TalksTrainingsAttended"


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value in EMPTY_FILTER_STRINGS)


def build_filter_criteria(filter_criteria: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Drop blank, null and "N/A" entries; what is left is an exact-match filter."""
    if filter_criteria is None:
        return {}
    if not isinstance(filter_criteria, Mapping):
        raise InvalidArgumentError("filterCriteria must be an object")
    return {key: value for key, value in filter_criteria.items() if not _is_empty(value)}


def build_query_filter(source_type: str, criteria: Mapping[str, Any]) -> dict[str, Any]:
    """Repository filter for a sanitized criteria map.

    Talks/trainings attended reports take ``dateFrom``/``dateTo`` and turn
    them into one range on ``date``.
    """
    query = dict(criteria)
    if source_type == DATE_RANGE_SOURCE_TYPE and ("dateFrom" in query or "dateTo" in query):
        date_range = {}
        if "dateFrom" in query:
            date_range["$gte"] = query.pop("dateFrom")
        if "dateTo" in query:
            date_range["$lte"] = query.pop("dateTo")
        query["date"] = date_range
    return query


class ReportService:
    def __init__(self, db: Session):
        self.db = db

    def create_report(
        self,
        title: str,
        source_type: str,
        filter_criteria: Optional[Mapping[str, Any]],
        caller: Caller,
    ) -> CustomReport:
        if not title or not str(title).strip():
            raise InvalidArgumentError("Report title is required")
        category = get_category_by_source_type(source_type)

        criteria = build_filter_criteria(filter_criteria)
        records = RecordRepository(self.db, category).list(filters=build_query_filter(source_type, criteria))

        report = CustomReport(
            title=str(title).strip(),
            created_by_id=caller.id,
            source_type=source_type,
            filter_criteria=criteria,
            report_data=[serialize_record(r) for r in records],
        )
        self.db.add(report)
        self.db.commit()
        self.db.refresh(report)

        logger.info(f"Report '{report.title}' saved with {len(records)} {source_type} records")
        return report

    def list_reports(self, caller: Caller, only_mine: bool = False) -> list[CustomReport]:
        scope = resolve_scope(caller, only_mine)
        query = self.db.query(CustomReport)
        if scope.filter_by_owner:
            query = query.filter(CustomReport.created_by_id == scope.owner_id)
        return query.order_by(CustomReport.created_at.desc()).all()

    def get_report(self, report_id: str, caller: Caller) -> CustomReport:
        try:
            report_uuid = uuid.UUID(str(report_id))
        except ValueError:
            raise InvalidArgumentError("Invalid report ID format")
        report = self.db.query(CustomReport).filter(CustomReport.id == report_uuid).first()
        if not report:
            raise NotFoundError("Report not found")
        if settings.REPORTS_ENFORCE_OWNERSHIP and not can_access(caller, report):
            raise ForbiddenError("Access denied")
        return report

    def update_report(
        self,
        report_id: str,
        caller: Caller,
        title: Optional[str] = None,
        filter_criteria: Optional[Mapping[str, Any]] = None,
        report_data: Optional[list[Any]] = None,
    ) -> CustomReport:
        report = self.get_report(report_id, caller)
        if title is not None:
            if not title.strip():
                raise InvalidArgumentError("Report title is required")
            report.title = title.strip()
        if filter_criteria is not None:
            report.filter_criteria = build_filter_criteria(filter_criteria)
        if report_data is not None:
            report.report_data = list(report_data)
        self.db.commit()
        self.db.refresh(report)
        return report

    def delete_report(self, report_id: str, caller: Caller) -> None:
        report = self.get_report(report_id, caller)
        self.db.delete(report)
        self.db.commit()
        logger.info(f"Report {report_id} deleted by {caller.id}")
