"""
Record Repository Facade: one generic repository per category.

Columns are snake_case; the JSON surface uses the camelCase names the
records have always been exchanged with (``hecCategory``, ``memberOfCoE``).
Incoming keys are matched case-insensitively against either form.
"""
import logging
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Session

from coe_tracker.models.owner import OwnerRef, normalize_id
from coe_tracker.services.category_registry import Category
from coe_tracker.services.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

# Field names whose JSON form is not plain camelCase of the column
FIELD_ALIASES = {
    "member_of_coe": "memberOfCoE",
    "amount_in_pkrm": "amountInPKRM",
    "participant_from_coeai": "participantFromCoEAI",
    "role_of_participant_from_coeai": "roleOfParticipantFromCoEAI",
    "participants_from_bu": "participantsFromBU",
    "target_sdg": "targetSDG",
    "co_pi": "coPI",
}

OWNER_COLUMNS = frozenset({"created_by_id", "created_by_name", "created_by_email"})
READ_ONLY_COLUMNS = frozenset({"id", "created_at", "updated_at"}) | OWNER_COLUMNS
# Keys clients echo back on updates; never written
IGNORED_KEYS = frozenset({"id", "_id", "__v", "createdby", "createdat", "updatedat"})

RANGE_OPERATORS = {"$gte": "__ge__", "$lte": "__le__", "$gt": "__gt__", "$lt": "__lt__"}


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def field_name(column_name: str) -> str:
    """JSON name for a column."""
    return FIELD_ALIASES.get(column_name) or to_camel(column_name)


@lru_cache(maxsize=None)
def _column_lookup(model: type) -> dict[str, str]:
    lookup: dict[str, str] = {}
    for column in model.__table__.columns:
        lookup[column.name.lower()] = column.name
        lookup[field_name(column.name).lower()] = column.name
    if "created_by_id" in model.__table__.columns:
        lookup["createdby"] = "created_by_id"
        lookup["createdby.id"] = "created_by_id"
    return lookup


def resolve_column(model: type, key: str) -> Optional[str]:
    return _column_lookup(model).get(key.strip().lower())


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def coerce_value(column, value: Any) -> Any:
    """Convert a JSON value to what the column stores; InvalidArgumentError when impossible."""
    if value is None or isinstance(column.type, JSON):
        return value
    try:
        if isinstance(column.type, DateTime):
            if isinstance(value, datetime):
                return _naive_utc(value)
            return _naive_utc(TypeAdapter(datetime).validate_python(value))
        if isinstance(column.type, String) and isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return TypeAdapter(column.type.python_type).validate_python(value)
    except (ValidationError, NotImplementedError) as e:
        raise InvalidArgumentError(f"Invalid value for field '{field_name(column.name)}': {value!r}") from e


def build_conditions(model: type, filters: Mapping[str, Any]) -> list:
    """Exact-match (or range) SQL conditions for a field=value filter map."""
    conditions = []
    for key, value in filters.items():
        column_name = resolve_column(model, key)
        if column_name is None:
            raise InvalidArgumentError(f"Unknown filter field: {key}")
        column = model.__table__.columns[column_name]
        attr = getattr(model, column_name)
        if column_name == "created_by_id":
            conditions.append(attr == normalize_id(value))
        elif isinstance(value, Mapping):
            unknown = set(value) - set(RANGE_OPERATORS)
            if unknown or not value:
                raise InvalidArgumentError(f"Malformed range filter for field: {key}")
            for op, bound in value.items():
                conditions.append(getattr(attr, RANGE_OPERATORS[op])(coerce_value(column, bound)))
        else:
            conditions.append(attr == coerce_value(column, value))
    return conditions


def owner_filter(model: type, owner_id: Any):
    return model.created_by_id == normalize_id(owner_id)


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


def serialize_record(record: Any) -> dict[str, Any]:
    """JSON-safe dict of a record, keyed by JSON field names."""
    data: dict[str, Any] = {}
    for column in record.__table__.columns:
        if column.name in OWNER_COLUMNS:
            continue
        data[field_name(column.name)] = _jsonable(getattr(record, column.name))
    owner = getattr(record, "owner", None)
    if "created_by_id" in record.__table__.columns:
        data["createdBy"] = owner.to_dict() if owner else None
    return data


class RecordRepository:
    def __init__(self, db: Session, category: Category):
        self.db = db
        self.category = category
        self.model = category.model

    def _query(self, owner_id: Optional[str] = None, filters: Optional[Mapping[str, Any]] = None):
        query = self.db.query(self.model)
        if owner_id is not None and self.category.owner_field_present:
            query = query.filter(owner_filter(self.model, owner_id))
        if filters:
            query = query.filter(*build_conditions(self.model, filters))
        return query

    def list(self, owner_id: Optional[str] = None, filters: Optional[Mapping[str, Any]] = None) -> list:
        """Records, newest first; ``owner_id`` is ignored for categories without owners."""
        return self._query(owner_id, filters).order_by(self.model.created_at.desc()).all()

    def count(self, owner_id: Optional[str] = None) -> int:
        return self._query(owner_id).count()

    def get(self, record_id: str):
        try:
            record_uuid = uuid.UUID(str(record_id))
        except ValueError:
            raise InvalidArgumentError("Invalid record ID format")
        return self.db.query(self.model).filter(self.model.id == record_uuid).first()

    def _writable_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, value in values.items():
            if key.strip().lower() in IGNORED_KEYS:
                continue
            column_name = resolve_column(self.model, key)
            if column_name is None or column_name in READ_ONLY_COLUMNS:
                logger.debug(f"Dropping unknown field '{key}' for {self.category.key}")
                continue
            out[column_name] = coerce_value(self.model.__table__.columns[column_name], value)
        return out

    def create(
        self,
        values: Mapping[str, Any],
        owner: Optional[OwnerRef] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ):
        """Insert a record.

        ``overrides`` sets columns by name, read-only ones included (imports
        keep their original ``created_at``/``updated_at``). Owner columns still
        come only from ``owner``.
        """
        record = self.model(**self._writable_values(values))
        for column_name, value in (overrides or {}).items():
            if column_name not in self.model.__table__.columns or column_name in OWNER_COLUMNS:
                raise InvalidArgumentError(f"Cannot override field: {column_name}")
            if value is not None:
                setattr(record, column_name, coerce_value(self.model.__table__.columns[column_name], value))
        if self.category.owner_field_present:
            if owner is None:
                raise InvalidArgumentError("Record owner is required")
            record.owner = owner
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def update(self, record, values: Mapping[str, Any]):
        for column_name, value in self._writable_values(values).items():
            setattr(record, column_name, value)
        self.db.commit()
        self.db.refresh(record)
        return record

    def delete(self, record) -> None:
        self.db.delete(record)
        self.db.commit()
