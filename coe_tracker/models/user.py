import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Uuid
from coe_tracker.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    uid = Column(String, unique=True, nullable=True)  # external identity provider id
    first_name = Column(String, nullable=False, default="Unknown")
    last_name = Column(String, nullable=False, default="User")
    role = Column(String, nullable=False, default="Researcher/Dev")
    contact_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
    date_of_birth = Column(DateTime, nullable=True)
    join_date = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
