"""
Data usage analytics: record counts and serialized sizes per category and
per user. Sizes are reported in KB rounded to 2 decimals.

Categories without an owner field are always reported as system-wide
totals, carry a ``note``, and never count towards a user's own totals.
"""
import logging
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coe_tracker.models.user import User
from coe_tracker.services.access import Caller, owner_id_of
from coe_tracker.services.aggregation import Aggregation, CategoryStats, aggregate_across_categories
from coe_tracker.services.category_registry import get_category
from coe_tracker.services.exceptions import ForbiddenError, InternalError, NotFoundError
from coe_tracker.services.record_repository import RecordRepository
from coe_tracker.services.size_estimator import estimate_size, size_stats, to_kb

logger = logging.getLogger(__name__)

SYSTEM_WIDE_NOTE = "System-wide records (not user-specific)"


def _table_entry(stats: CategoryStats) -> dict[str, Any]:
    entry = size_stats(stats.count, stats.total_size)
    entry["tableName"] = stats.category.display_name
    if not stats.category.owner_field_present:
        entry["note"] = SYSTEM_WIDE_NOTE
    return entry


def _user_entry(user: User, aggregation: Aggregation) -> dict[str, Any]:
    """Per-user totals from an aggregation already narrowed to that user."""
    return {
        "userId": str(user.id),
        "userName": user.full_name,
        "email": user.email,
        "role": user.role,
        "totalRecords": aggregation.owned_count,
        "totalSize": to_kb(aggregation.owned_size),
        "tableBreakdown": {key: _table_entry(stats) for key, stats in aggregation.per_category.items()},
    }


class AnalyticsService:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _require_director(caller: Caller) -> None:
        if not caller.is_director:
            raise ForbiddenError("Access denied. Only directors can view analytics.")

    def _all_users(self) -> list[User]:
        try:
            return self.db.query(User).order_by(User.created_at).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read users: {e}", exc_info=True)
            raise InternalError(f"Failed to read users: {e}") from e

    def get_data_usage_analytics(self, caller: Caller) -> dict[str, Any]:
        self._require_director(caller)

        users = self._all_users()
        aggregation = aggregate_across_categories(self.db)

        total_records = aggregation.total_count
        total_size = aggregation.total_size

        user_stats = []
        for user in users:
            entry = _user_entry(user, aggregation.for_owner(str(user.id)))
            if entry["totalRecords"] > 0:
                user_stats.append(entry)
        user_stats.sort(key=lambda s: s["totalRecords"], reverse=True)

        return {
            "totalUsers": len(users),
            "totalRecords": total_records,
            "totalDataSize": to_kb(total_size),
            "averageRecordSize": to_kb(total_size / total_records) if total_records else 0,
            "tableStats": {key: _table_entry(stats) for key, stats in aggregation.per_category.items()},
            "userStats": user_stats,
            "createdAt": datetime.utcnow(),
        }

    def get_table_analytics(self, caller: Caller, table_name: str) -> dict[str, Any]:
        self._require_director(caller)
        category = get_category(table_name)

        try:
            records = RecordRepository(self.db, category).list()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read {category.key}: {e}", exc_info=True)
            raise InternalError(f"Failed to read {category.display_name}: {e}") from e
        sizes = [estimate_size(r) for r in records]
        stats = size_stats(len(records), sum(sizes))

        user_breakdown: dict[str, Any] = {}
        if category.owner_field_present:
            for user in self._all_users():
                user_id = str(user.id)
                owned = [s for r, s in zip(records, sizes) if owner_id_of(r) == user_id]
                if not owned:
                    continue
                user_breakdown[user_id] = {
                    "userName": user.full_name,
                    "email": user.email,
                    "role": user.role,
                    **size_stats(len(owned), sum(owned)),
                }

        result = {
            "tableName": category.display_name,
            "totalRecords": stats["count"],
            "totalSize": stats["totalSize"],
            "averageSize": stats["averageSize"],
            "userBreakdown": user_breakdown,
            "createdAt": datetime.utcnow(),
        }
        if not category.owner_field_present:
            result["note"] = SYSTEM_WIDE_NOTE
        return result

    def get_user_analytics(self, caller: Caller, user_id: str) -> dict[str, Any]:
        try:
            user_uuid = uuid.UUID(str(user_id))
        except ValueError:
            raise NotFoundError("User not found")
        user = self.db.query(User).filter(User.id == user_uuid).first()
        if not user:
            raise NotFoundError("User not found")
        if not caller.is_director and str(user.id) != caller.id:
            raise ForbiddenError("Access denied")

        aggregation = aggregate_across_categories(self.db, owner_id=str(user.id))
        result = _user_entry(user, aggregation)
        result["createdAt"] = datetime.utcnow()
        return result
