"""
Cross-Collection Aggregator.

Reads every registered category once (optionally scoped to one owner) and
keeps per-category records with their serialized sizes. A failed read
aborts the whole aggregation; a partial cross-category view is never
returned.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coe_tracker.services.access import owner_id_of
from coe_tracker.services.category_registry import CATEGORIES, Category
from coe_tracker.services.exceptions import InternalError
from coe_tracker.services.record_repository import RecordRepository
from coe_tracker.services.size_estimator import estimate_size

logger = logging.getLogger(__name__)


@dataclass
class CategoryStats:
    category: Category
    records: list[Any] = field(default_factory=list)
    sizes: list[int] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def total_size(self) -> int:
        return sum(self.sizes)

    def for_owner(self, owner_id: str) -> "CategoryStats":
        # Categories without owners stay system-wide
        if not self.category.owner_field_present:
            return self
        pairs = [(r, s) for r, s in zip(self.records, self.sizes) if owner_id_of(r) == owner_id]
        return CategoryStats(self.category, [r for r, _ in pairs], [s for _, s in pairs])


@dataclass
class Aggregation:
    per_category: dict[str, CategoryStats]

    @property
    def total_count(self) -> int:
        return sum(stats.count for stats in self.per_category.values())

    @property
    def total_size(self) -> int:
        return sum(stats.total_size for stats in self.per_category.values())

    @property
    def owned_count(self) -> int:
        return sum(s.count for s in self.per_category.values() if s.category.owner_field_present)

    @property
    def owned_size(self) -> int:
        return sum(s.total_size for s in self.per_category.values() if s.category.owner_field_present)

    def for_owner(self, owner_id: str) -> "Aggregation":
        """Same aggregation narrowed to one owner, without re-reading storage."""
        return Aggregation({key: stats.for_owner(owner_id) for key, stats in self.per_category.items()})


def aggregate_across_categories(
    db: Session,
    owner_id: Optional[str] = None,
    categories: Sequence[Category] = CATEGORIES,
) -> Aggregation:
    per_category: dict[str, CategoryStats] = {}
    for category in categories:
        try:
            records = RecordRepository(db, category).list(owner_id=owner_id)
        except SQLAlchemyError as e:
            logger.error(f"Aggregation failed reading {category.key}: {e}", exc_info=True)
            raise InternalError(f"Failed to read {category.display_name}: {e}") from e
        per_category[category.key] = CategoryStats(category, records, [estimate_size(r) for r in records])

    aggregation = Aggregation(per_category)
    logger.info(
        f"Aggregated {aggregation.total_count} records across {len(per_category)} categories"
        + (f" for owner {owner_id}" if owner_id else "")
    )
    return aggregation
