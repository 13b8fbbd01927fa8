#!/usr/bin/env python3
"""
Create the scripture database and load verse text into it.

Run from the api directory.

Usage:
    python -m scripts.load_verses --seed-only
    python -m scripts.load_verses --csv kjv.csv
    python -m scripts.load_verses --json kjv.json --db /tmp/scripture.db

Input formats:
    CSV:  header row "book,chapter,verse,text"
    JSON: [{"book": "Gen", "chapter": 1, "verse": 1, "text": "..."}, ...]

Book names go through the query recognizer, so "Gen", "1 Jn" and
"First John" all load into their canonical books.
"""

import argparse
import csv
import json
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import get_settings
from services.scripture import VerseStore, get_title

logger = logging.getLogger(__name__)


def read_csv(path: str) -> list:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


def read_json(path: str) -> list:
    with open(path, "r", encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a JSON list of verse objects")
    return records


def to_rows(records: list) -> tuple:
    """
    Convert raw records to (title, chapter, verse, text) rows.

    Records that are not objects, or have an unknown book or a non-numeric
    chapter/verse, are dropped.

    Returns:
        (rows, rejected) where rejected is the number of dropped records
    """
    rows = []
    rejected = 0
    for record in records:
        if not isinstance(record, dict):
            logger.warning(f"Skipping non-object record: {record!r}")
            rejected += 1
            continue
        title = get_title(str(record.get("book", "")))
        try:
            chapter = int(record.get("chapter"))
            verse = int(record.get("verse"))
        except (TypeError, ValueError):
            title = None
        if title is None:
            logger.warning(f"Skipping unrecognized record: {record!r}")
            rejected += 1
            continue
        rows.append((title, chapter, verse, str(record.get("text", ""))))
    return rows, rejected


def main():
    parser = argparse.ArgumentParser(
        description="Create the scripture database and load verse text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m scripts.load_verses --seed-only           # Books and chapters only
  python -m scripts.load_verses --csv kjv.csv         # Load verses from CSV
  python -m scripts.load_verses --json kjv.json       # Load verses from JSON
        """
    )
    parser.add_argument(
        "--db",
        default=None,
        metavar="PATH",
        help="SQLite database path (default: SCRIPTURE_DB setting)"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--csv",
        metavar="FILE",
        help="CSV file with book,chapter,verse,text columns"
    )
    source.add_argument(
        "--json",
        metavar="FILE",
        help="JSON list of {book, chapter, verse, text} objects"
    )
    parser.add_argument(
        "--seed-only",
        action="store_true",
        help="Create tables and canon rows without loading verses"
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    db_path = args.db or get_settings().db_path
    print(f"Scripture database: {db_path}")

    if not args.seed_only and not (args.csv or args.json):
        parser.error("one of --csv, --json or --seed-only is required")

    with VerseStore(db_path) as store:
        store.create_schema()
        chapters = store.seed_canon()
        print(f"Seeded canon: {chapters} chapters")

        if args.seed_only:
            return 0

        try:
            records = read_csv(args.csv) if args.csv else read_json(args.json)
        except (OSError, ValueError) as e:
            print(f"Could not read input: {e}", file=sys.stderr)
            return 1

        rows, rejected = to_rows(records)
        imported, skipped = store.import_rows(rows)

        print(f"Imported: {imported}")
        print(f"Skipped:  {rejected + skipped}")
        print(f"Total verses stored: {store.count_verses()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
