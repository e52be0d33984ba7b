#!/usr/bin/env python3
"""
Load a JSON-lines export of legacy documents into one category table.

Each line is one document as exported from the old document store. Owner
references come in two historical shapes, a bare user id or an embedded
``{id, name, email}`` snapshot; both go through ``OwnerRef.from_raw``.
When the snapshot carries an email of a known user, the record is
attached to that user's current id. Extended JSON dates (``{"$date": ...}``)
are unwrapped, and the original ``createdAt``/``updatedAt`` are kept.

Usage:
    python import_legacy.py CATEGORY_KEY export.jsonl [--dry-run]
"""
import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional
from dotenv import load_dotenv
from sqlalchemy.orm import Session

backend_dir = Path(__file__).parent
env_file = backend_dir / ".env"
if env_file.exists():
    load_dotenv(env_file)

from coe_tracker.db.session import SessionLocal  # noqa: E402
from coe_tracker.models.owner import OwnerRef  # noqa: E402
from coe_tracker.models.user import User  # noqa: E402
from coe_tracker.services.category_registry import get_category  # noqa: E402
from coe_tracker.services.exceptions import ServiceError  # noqa: E402
from coe_tracker.services.record_repository import RecordRepository  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("import_legacy")

TIMESTAMP_KEYS = {"createdAt": "created_at", "updatedAt": "updated_at"}


def _from_date(value: Any) -> Any:
    # {"$date": "2019-05-01T00:00:00Z"} or {"$date": {"$numberLong": "1556668800000"}}
    if isinstance(value, dict) and "$numberLong" in value:
        return datetime.fromtimestamp(int(value["$numberLong"]) / 1000, tz=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return value


def unwrap_extended_json(value: Any) -> Any:
    """Replace ``{"$date": ...}`` wrappers with plain values, recursively."""
    if isinstance(value, dict):
        if set(value) == {"$date"}:
            return _from_date(value["$date"])
        return {key: unwrap_extended_json(item) for key, item in value.items()}
    if isinstance(value, list):
        return [unwrap_extended_json(item) for item in value]
    return value


def resolve_owner(raw_owner, users_by_email: dict) -> Optional[OwnerRef]:
    """Legacy owner reference, re-pointed at the current user when the email matches."""
    owner = OwnerRef.from_raw(raw_owner)
    if owner is None or not owner.email:
        return owner
    user = users_by_email.get(owner.email.lower())
    if user is None:
        return owner
    return OwnerRef.from_user(user)


def _import_lines(db: Session, category, lines, dry_run: bool) -> dict[str, int]:
    counts = {"imported": 0, "skipped": 0}
    users_by_email = {u.email.lower(): u for u in db.query(User).all()}
    repo = RecordRepository(db, category)

    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        document = unwrap_extended_json(json.loads(line))
        owner = None
        if category.owner_field_present:
            owner = resolve_owner(document.get("createdBy"), users_by_email)
            if owner is None:
                logger.warning(f"Line {line_no}: no usable owner reference, skipped")
                counts["skipped"] += 1
                continue
        if dry_run:
            counts["imported"] += 1
            continue
        timestamps = {column: document[key] for key, column in TIMESTAMP_KEYS.items() if key in document}
        try:
            repo.create(document, owner=owner, overrides=timestamps)
        except ServiceError as e:
            db.rollback()
            logger.warning(f"Line {line_no}: {e.message}, skipped")
            counts["skipped"] += 1
            continue
        counts["imported"] += 1
    return counts


def import_file(category_key: str, path: Path, dry_run: bool = False, db: Optional[Session] = None) -> dict[str, int]:
    """Import one export file; opens its own session unless ``db`` is given."""
    category = get_category(category_key)

    own_session = db is None
    if own_session:
        db = SessionLocal()
    try:
        with path.open(encoding="utf-8") as fh:
            counts = _import_lines(db, category, fh, dry_run)
    finally:
        if own_session:
            db.close()

    logger.info(
        f"{category.display_name}: {counts['imported']} imported, {counts['skipped']} skipped"
        + (" (dry run)" if dry_run else "")
    )
    return counts


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Import legacy JSON-lines documents")
    parser.add_argument("category", help="Category key, e.g. publications")
    parser.add_argument("file", type=Path)
    parser.add_argument("--dry-run", action="store_true", help="Validate owners without writing")
    args = parser.parse_args(argv)

    import_file(args.category, args.file, dry_run=args.dry_run)
    return 0


if __name__ == "__main__":
    sys.exit(main())
