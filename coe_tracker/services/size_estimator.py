"""Serialized-size estimate of records, used by the data usage analytics."""
import json
from typing import Any, Mapping, Union

from coe_tracker.services.record_repository import serialize_record


def estimate_size(record: Union[Mapping[str, Any], Any]) -> int:
    """UTF-8 byte length of the record's compact JSON form."""
    data = record if isinstance(record, Mapping) else serialize_record(record)
    text = json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=str)
    return len(text.encode("utf-8"))


def to_kb(size_bytes: float) -> float:
    return round(size_bytes / 1024, 2)


def size_stats(count: int, total_bytes: int) -> dict[str, Any]:
    """``{count, totalSize, averageSize}`` in KB, zeroed for empty sets."""
    if count <= 0:
        return {"count": 0, "totalSize": 0, "averageSize": 0}
    return {
        "count": count,
        "totalSize": to_kb(total_bytes),
        "averageSize": to_kb(total_bytes / count),
    }
