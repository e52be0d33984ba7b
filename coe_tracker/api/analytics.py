"""
Data usage analytics endpoints (director only, except a user's own stats).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coe_tracker.db.session import get_db
from coe_tracker.api.auth import get_caller
from coe_tracker.schemas.analytics import DataUsageAnalytics, TableAnalytics, UserAnalytics
from coe_tracker.services.access import Caller
from coe_tracker.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/data-usage", response_model=DataUsageAnalytics, response_model_exclude_none=True)
def get_data_usage_analytics(
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Record counts and sizes across all categories and users"""
    return DataUsageAnalytics(**AnalyticsService(db).get_data_usage_analytics(caller))


@router.get("/data-usage/table/{table_name}", response_model=TableAnalytics, response_model_exclude_none=True)
def get_table_analytics(
    table_name: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Counts and sizes for one category with a per-user breakdown"""
    return TableAnalytics(**AnalyticsService(db).get_table_analytics(caller, table_name))


@router.get("/data-usage/user/{user_id}", response_model=UserAnalytics, response_model_exclude_none=True)
def get_user_analytics(
    user_id: str,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """Per-category counts and sizes for one user"""
    return UserAnalytics(**AnalyticsService(db).get_user_analytics(caller, user_id))
