"""
Generic CRUD over every registered category: /api/records/{category}.

Listing follows the visibility rules (directors see everything unless
``onlyMine=true``); single-record reads and writes require ownership or the
director role.
"""
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
import logging

from coe_tracker.db.session import get_db
from coe_tracker.models.owner import OwnerRef
from coe_tracker.models.user import User
from coe_tracker.api.auth import get_current_user
from coe_tracker.schemas.report import MessageResponse
from coe_tracker.services.access import Caller, can_access, parse_only_mine, resolve_scope
from coe_tracker.services.category_registry import Category, get_category
from coe_tracker.services.exceptions import ForbiddenError, NotFoundError
from coe_tracker.services.record_repository import RecordRepository, serialize_record

logger = logging.getLogger(__name__)

router = APIRouter()


def _load(repo: RecordRepository, record_id: str, caller: Caller):
    record = repo.get(record_id)
    if not record:
        raise NotFoundError(f"{repo.category.display_name} record not found")
    if repo.category.owner_field_present and not can_access(caller, record):
        raise ForbiddenError("Access denied")
    return record


def _require_writable(category: Category, caller: Caller) -> None:
    # Rows without an owner are shared; only directors change them
    if not category.owner_field_present and not caller.is_director:
        raise ForbiddenError("Access denied")


@router.get("/{category_key}", response_model=List[Dict[str, Any]])
async def list_records(
    category_key: str,
    only_mine: Optional[str] = Query(None, alias="onlyMine"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List records of a category visible to the caller"""
    category = get_category(category_key)
    caller = Caller.from_user(current_user)
    scope = resolve_scope(caller, parse_only_mine(only_mine))

    records = RecordRepository(db, category).list(owner_id=scope.owner_id if scope.filter_by_owner else None)
    logger.info(f"Listed {len(records)} {category.key} for {caller.id} (owner filter: {scope.filter_by_owner})")
    return [serialize_record(r) for r in records]


@router.post("/{category_key}", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_record(
    category_key: str,
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a record owned by the caller"""
    category = get_category(category_key)
    caller = Caller.from_user(current_user)
    _require_writable(category, caller)

    record = RecordRepository(db, category).create(payload, owner=OwnerRef.from_user(current_user))
    logger.info(f"Created {category.key} record {record.id} for {caller.id}")
    return serialize_record(record)


@router.get("/{category_key}/{record_id}", response_model=Dict[str, Any])
async def get_record(
    category_key: str,
    record_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single record"""
    repo = RecordRepository(db, get_category(category_key))
    record = _load(repo, record_id, Caller.from_user(current_user))
    return serialize_record(record)


@router.put("/{category_key}/{record_id}", response_model=Dict[str, Any])
async def update_record(
    category_key: str,
    record_id: str,
    payload: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a record (owner or director)"""
    category = get_category(category_key)
    caller = Caller.from_user(current_user)
    _require_writable(category, caller)

    repo = RecordRepository(db, category)
    record = repo.update(_load(repo, record_id, caller), payload)
    return serialize_record(record)


@router.delete("/{category_key}/{record_id}", response_model=MessageResponse)
async def delete_record(
    category_key: str,
    record_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a record (owner or director); deletes are permanent"""
    category = get_category(category_key)
    caller = Caller.from_user(current_user)
    _require_writable(category, caller)

    repo = RecordRepository(db, category)
    repo.delete(_load(repo, record_id, caller))
    logger.info(f"Deleted {category.key} record {record_id} by {caller.id}")
    return MessageResponse(message=f"{category.display_name} record deleted successfully")
