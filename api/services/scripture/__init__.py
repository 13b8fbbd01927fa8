# api/services/scripture/__init__.py
"""
Scripture query resolution and verse lookup.

This package provides:
- ScriptureService: Resolve a query and fetch its verse text
- resolve: Turn a free-form query into a validated Selection
- Selection: One book, one chapter, a set of existing verses
- parse_reference: Classify a head query into a typed reference
- recognize: Find the canonical book at the start of a query
- VerseStore: SQLite verse tables
- canon: Chapter and verse counts for the 66-book canon
"""

from .canon import (
    BOOKS,
    CANONICAL_TITLES,
    CanonicalBook,
    book_order,
    chapter_count,
    chapter_exists,
    verse_count,
    verse_exists,
)
from .book_recognizer import (
    BOOK_PATTERNS,
    accepted_forms,
    get_params,
    get_title,
    normalize_ordinal,
    recognize,
)
from .reference_parser import (
    BookReference,
    ChapterReference,
    ParsedReference,
    VerseRangeReference,
    VerseReference,
    parse_reference,
    parse_u8,
    split_subqueries,
)
from .selection import (
    NoMatchError,
    Selection,
    is_valid_reference,
    resolve,
    try_resolve,
)
from .verse_store import (
    ScriptureStoreError,
    VerseRow,
    VerseStore,
)
from .scripture_service import (
    ScriptureService,
    SearchResult,
)

__all__ = [
    # Service (primary interface)
    "ScriptureService",
    "SearchResult",
    # Canon
    "BOOKS",
    "CANONICAL_TITLES",
    "CanonicalBook",
    "book_order",
    "chapter_count",
    "chapter_exists",
    "verse_count",
    "verse_exists",
    # Book recognition
    "BOOK_PATTERNS",
    "accepted_forms",
    "get_params",
    "get_title",
    "normalize_ordinal",
    "recognize",
    # Reference parsing
    "BookReference",
    "ChapterReference",
    "ParsedReference",
    "VerseRangeReference",
    "VerseReference",
    "parse_reference",
    "parse_u8",
    "split_subqueries",
    # Resolution
    "NoMatchError",
    "Selection",
    "is_valid_reference",
    "resolve",
    "try_resolve",
    # Storage
    "ScriptureStoreError",
    "VerseRow",
    "VerseStore",
]
