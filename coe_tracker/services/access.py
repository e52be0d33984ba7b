"""
Caller identity, the ownership predicate and visibility scoping.

Every service takes an explicit ``Caller``; nothing here reads request or
process state.
"""
from dataclasses import dataclass
from typing import Any, Optional

from coe_tracker.config import settings
from coe_tracker.models.owner import normalize_id


@dataclass(frozen=True)
class Caller:
    id: str
    role: str

    @property
    def is_director(self) -> bool:
        return self.role == settings.DIRECTOR_ROLE

    @classmethod
    def from_user(cls, user) -> "Caller":
        return cls(id=str(user.id), role=user.role)


@dataclass(frozen=True)
class Scope:
    filter_by_owner: bool
    owner_id: Optional[str] = None


def owner_id_of(record: Any) -> Optional[str]:
    """Normalized owner id of a record, or None when it has no usable owner."""
    return normalize_id(getattr(record, "created_by_id", None))


def can_access(caller: Caller, record: Any) -> bool:
    if caller.is_director:
        return True
    owner_id = owner_id_of(record)
    if owner_id is None:
        return False
    return owner_id == str(caller.id)


def parse_only_mine(value: Any) -> bool:
    """Only an explicit ``true`` counts; anything else leaves the default scope."""
    if isinstance(value, bool):
        return value
    return isinstance(value, str) and value.strip().lower() == "true"


def resolve_scope(caller: Caller, only_mine: bool = False) -> Scope:
    if caller.is_director and not only_mine:
        return Scope(filter_by_owner=False)
    return Scope(filter_by_owner=True, owner_id=str(caller.id))
