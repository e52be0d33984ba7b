import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Uuid, JSON
from coe_tracker.db.session import Base


class CustomReport(Base):
    """Saved filter plus the point-in-time result set it produced."""
    __tablename__ = "custom_reports"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    created_by_id = Column(String, nullable=False, index=True)
    source_type = Column(String, nullable=False)  # one of the category source types, e.g. Publications
    filter_criteria = Column(JSON, nullable=False, default=dict)
    report_data = Column(JSON, nullable=False, default=list)  # snapshot, never re-queried
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<CustomReport {self.title} ({self.source_type})>"
