"""Schemas for data usage analytics responses. Sizes are in KB."""
from datetime import datetime
from typing import Dict, List, Optional

from coe_tracker.schemas.base import CamelModel


class TableStats(CamelModel):
    count: int = 0
    total_size: float = 0
    average_size: float = 0
    table_name: str
    """Set for categories without owners, which are counted system-wide."""
    note: Optional[str] = None


class UserStats(CamelModel):
    user_id: str
    user_name: str
    email: str
    role: str
    total_records: int = 0
    total_size: float = 0
    table_breakdown: Dict[str, TableStats]


class DataUsageAnalytics(CamelModel):
    total_users: int
    total_records: int
    total_data_size: float
    average_record_size: float
    table_stats: Dict[str, TableStats]
    user_stats: List[UserStats]
    created_at: datetime


class UserTableStats(CamelModel):
    user_name: str
    email: str
    role: str
    count: int
    total_size: float
    average_size: float


class TableAnalytics(CamelModel):
    table_name: str
    total_records: int
    total_size: float
    average_size: float
    user_breakdown: Dict[str, UserTableStats]
    note: Optional[str] = None
    created_at: datetime


class UserAnalytics(UserStats):
    created_at: datetime
