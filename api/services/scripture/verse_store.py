# api/services/scripture/verse_store.py
"""
SQLite storage for verse text.

Layout:
    books(title, book_order)
    chapters(title, num)
    verses(title, chapter_num, num, contents)

Book and chapter rows come from the canon table (seed_canon); verse text
is imported separately (see scripts/load_verses.py).
"""

import logging
import sqlite3
from dataclasses import dataclass
from typing import Iterable, Optional

from utils.db import get_db

from .canon import BOOKS, verse_exists

logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS books (
    title TEXT PRIMARY KEY,
    book_order INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS chapters (
    title TEXT NOT NULL REFERENCES books(title),
    num INTEGER NOT NULL,
    PRIMARY KEY (title, num)
);

CREATE TABLE IF NOT EXISTS verses (
    title TEXT NOT NULL,
    chapter_num INTEGER NOT NULL,
    num INTEGER NOT NULL,
    contents TEXT NOT NULL,
    PRIMARY KEY (title, chapter_num, num),
    FOREIGN KEY (title, chapter_num) REFERENCES chapters(title, num)
);
"""

UPSERT_VERSE_SQL = """
INSERT INTO verses (title, chapter_num, num, contents)
VALUES (?, ?, ?, ?)
ON CONFLICT (title, chapter_num, num) DO UPDATE SET contents = excluded.contents
"""


class ScriptureStoreError(Exception):
    """Raised when the verse datastore cannot be read or written."""
    pass


@dataclass
class VerseRow:
    """One verse of text as stored."""
    title: str
    chapter: int
    verse: int
    text: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
        }


class VerseStore:
    """
    Read/write access to the verse tables.

    One sqlite connection per instance; use as a context manager to close
    it when done:

        with VerseStore(path) as store:
            rows = store.fetch(selection)
    """

    def __init__(self, db_path: Optional[str] = None):
        try:
            self.conn = get_db(db_path)
        except sqlite3.Error as e:
            logger.error(f"Cannot open scripture DB {db_path!r}: {e}")
            raise ScriptureStoreError(str(e)) from e

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.conn.close()

    def create_schema(self):
        """Create the books/chapters/verses tables if missing."""
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def seed_canon(self) -> int:
        """
        Insert every canonical book and its chapters.

        Returns:
            Number of chapter rows present after seeding
        """
        self.conn.executemany(
            "INSERT OR IGNORE INTO books (title, book_order) VALUES (?, ?)",
            [(book.title, book.order) for book in BOOKS],
        )
        self.conn.executemany(
            "INSERT OR IGNORE INTO chapters (title, num) VALUES (?, ?)",
            [
                (book.title, chapter)
                for book in BOOKS
                for chapter in range(1, book.chapters + 1)
            ],
        )
        self.conn.commit()
        return self.conn.execute("SELECT COUNT(*) FROM chapters").fetchone()[0]

    def upsert_verse(self, title: str, chapter: int, verse: int, text: str):
        """
        Insert or replace the text of one verse.

        Raises:
            ValueError: If the verse does not exist in the canon
        """
        if not verse_exists(title, chapter, verse):
            raise ValueError(f"Not a canonical verse: {title} {chapter}:{verse}")
        self.conn.execute(UPSERT_VERSE_SQL, (title, chapter, verse, text))
        self.conn.commit()

    def import_rows(self, rows: Iterable[tuple]) -> tuple:
        """
        Bulk import (title, chapter, verse, text) rows in one transaction.

        Rows whose location is not a canonical verse are skipped.

        Returns:
            (imported, skipped) counts
        """
        valid = []
        skipped = 0
        for title, chapter, verse, text in rows:
            if verse_exists(title, chapter, verse):
                valid.append((title, chapter, verse, text))
            else:
                logger.warning(f"Skipping non-canonical verse {title} {chapter}:{verse}")
                skipped += 1

        with self.conn:
            self.conn.executemany(UPSERT_VERSE_SQL, valid)
        return len(valid), skipped

    def fetch(self, selection) -> list:
        """
        Fetch the stored text for a Selection.

        Verses with no stored text are simply absent from the result.

        Returns:
            List of VerseRow ordered by verse number
        """
        verses = selection.sorted_verses
        placeholders = ", ".join("?" for _ in verses)
        cursor = self.conn.execute(
            f"""
            SELECT b.title AS title, c.num AS chapter, v.num AS verse, v.contents AS text
            FROM books b
            JOIN chapters c ON c.title = b.title
            JOIN verses v ON v.title = c.title AND v.chapter_num = c.num
            WHERE b.title = ? AND c.num = ? AND v.num IN ({placeholders})
            ORDER BY v.num
            """,
            (selection.title, selection.chapter, *verses),
        )
        return [
            VerseRow(row["title"], row["chapter"], row["verse"], row["text"])
            for row in cursor.fetchall()
        ]

    def count_verses(self) -> int:
        """Number of verses with stored text."""
        return self.conn.execute("SELECT COUNT(*) FROM verses").fetchone()[0]
