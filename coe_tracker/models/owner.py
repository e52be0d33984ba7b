"""
Owner reference shared by every owned record.

Historical documents stored ``createdBy`` either as a bare user id or as an
embedded ``{id, name, email}`` snapshot. Both shapes are normalized into
``OwnerRef`` at the storage boundary; records keep the normalized form in
``created_by_id`` / ``created_by_name`` / ``created_by_email``.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from sqlalchemy import Column, String, DateTime, Uuid


def normalize_id(value: Any) -> Optional[str]:
    """Canonical string form of a user id, or None when unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Mapping):
        # mongoexport extended JSON: {"$oid": "..."}
        return normalize_id(value.get("$oid"))
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


@dataclass(frozen=True)
class OwnerRef:
    id: str
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_raw(cls, value: Any) -> Optional["OwnerRef"]:
        """Read either legacy ``createdBy`` shape; None when missing or malformed."""
        if isinstance(value, Mapping) and "$oid" not in value:
            owner_id = normalize_id(value.get("id", value.get("_id")))
            if owner_id is None:
                return None
            return cls(id=owner_id, name=value.get("name"), email=value.get("email"))
        owner_id = normalize_id(value)
        if owner_id is None:
            return None
        return cls(id=owner_id)

    @classmethod
    def from_user(cls, user) -> "OwnerRef":
        return cls(id=str(user.id), name=user.full_name, email=user.email)

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"id": self.id, "name": self.name, "email": self.email}


class RecordMixin:
    """Columns every category table carries."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    file_link = Column(String, nullable=True)  # PDF evidence
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class OwnedRecordMixin(RecordMixin):
    """Category tables whose rows belong to exactly one user."""

    created_by_id = Column(String, nullable=False, index=True)
    created_by_name = Column(String, nullable=True)
    created_by_email = Column(String, nullable=True)

    @property
    def owner(self) -> Optional[OwnerRef]:
        owner_id = normalize_id(self.created_by_id)
        if owner_id is None:
            return None
        return OwnerRef(id=owner_id, name=self.created_by_name, email=self.created_by_email)

    @owner.setter
    def owner(self, ref: OwnerRef) -> None:
        self.created_by_id = ref.id
        self.created_by_name = ref.name
        self.created_by_email = ref.email
