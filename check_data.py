#!/usr/bin/env python3
"""
Inspect what is stored: record counts and serialized sizes per category,
optionally for one owner, plus the most recent records of one category.
Uses pandas for the tabular summaries.

Usage:
    python check_data.py [--owner USER_ID] [--category KEY] [--limit N]
"""
import argparse
import sys
from pathlib import Path
import pandas as pd
from dotenv import load_dotenv

# Load environment variables from .env file before the app settings are read
backend_dir = Path(__file__).parent
env_file = backend_dir / ".env"
if env_file.exists():
    load_dotenv(env_file)

from coe_tracker.db.session import SessionLocal  # noqa: E402
from coe_tracker.services.aggregation import aggregate_across_categories  # noqa: E402
from coe_tracker.services.category_registry import get_category  # noqa: E402
from coe_tracker.services.record_repository import RecordRepository, serialize_record  # noqa: E402
from coe_tracker.services.size_estimator import to_kb  # noqa: E402


def category_summary(db, owner_id=None) -> pd.DataFrame:
    """One row per category with count and sizes in KB."""
    aggregation = aggregate_across_categories(db, owner_id=owner_id)
    rows = []
    for key, stats in aggregation.per_category.items():
        rows.append({
            'category': key,
            'table': stats.category.display_name,
            'owned': stats.category.owner_field_present,
            'count': stats.count,
            'total_kb': to_kb(stats.total_size),
            'average_kb': to_kb(stats.total_size / stats.count) if stats.count else 0,
        })
    return pd.DataFrame(rows)


def recent_records(db, category_key: str, limit: int, owner_id=None) -> pd.DataFrame:
    category = get_category(category_key)
    records = RecordRepository(db, category).list(owner_id=owner_id)[:limit]
    df = pd.DataFrame([serialize_record(r) for r in records])
    if not df.empty and 'createdBy' in df.columns:
        df['createdBy'] = df['createdBy'].map(lambda owner: (owner or {}).get('name') or 'Unknown')
    return df


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Summarize stored research records")
    parser.add_argument("--owner", help="Restrict to records owned by this user id")
    parser.add_argument("--category", help="Also show the latest records of this category (e.g. collaborations)")
    parser.add_argument("--limit", type=int, default=5)
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        summary = category_summary(db, owner_id=args.owner)
        print("📊 RECORDS PER CATEGORY" + (f" (owner {args.owner})" if args.owner else ""))
        print("=" * 80)
        print(summary.to_string(index=False))
        print("-" * 80)
        print(f"Total records: {summary['count'].sum()}   Total size: {summary['total_kb'].sum():.2f} KB")

        if args.category:
            df = recent_records(db, args.category, args.limit, owner_id=args.owner)
            print(f"\n📋 LATEST {args.category.upper()} (up to {args.limit})")
            print("-" * 80)
            if df.empty:
                print("No records found.")
            else:
                columns = [c for c in df.columns if c not in ('id', 'fileLink', 'updatedAt')]
                print(df[columns].to_string(index=False))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
