# api/services/scripture/selection.py
"""
Selection resolver.

Turns a raw query into a validated Selection: one canonical book, one
chapter that exists in it, and a non-empty set of verses that exist in
that chapter.

Out-of-range numbers never fail the query. The reference falls back to
the next broader shape instead:

    verse range -> chapter -> book (chapter 1)
    verse       -> chapter -> book (chapter 1)

Every canonical book has a chapter 1, so the chain always ends in a valid
selection. The only failure is a query whose head names no book.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .canon import chapter_count, verse_count, verse_exists
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

logger = logging.getLogger(__name__)

NO_RESULTS = "No Results Found"
NO_MATCHING_FORMAT = "No Matching Search Format Found"


class NoMatchError(Exception):
    """Raised when a query does not name a canonical book."""
    pass


@dataclass(frozen=True)
class Selection:
    """
    A resolved, validated passage within a single chapter.

    Attributes:
        title: Canonical book title (e.g., "1 John")
        chapter: Chapter number, 1..chapter_count(title)
        verses: Verse numbers, each within 1..verse_count(title, chapter)
    """
    title: str
    chapter: int
    verses: frozenset

    @property
    def sorted_verses(self) -> list:
        """Verse numbers in ascending order."""
        return sorted(self.verses)

    @property
    def is_whole_chapter(self) -> bool:
        """True if every verse of the chapter is selected."""
        return len(self.verses) == verse_count(self.title, self.chapter)

    @property
    def normalized(self) -> str:
        """Return a display reference (e.g., "1 John 2:3-5, 7")."""
        if self.is_whole_chapter:
            return f"{self.title} {self.chapter}"
        return f"{self.title} {self.chapter}:{_format_verse_runs(self.sorted_verses)}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "chapter": self.chapter,
            "verses": self.sorted_verses,
            "ref": self.normalized,
        }


def _format_verse_runs(verses: list) -> str:
    """Collapse sorted verse numbers into runs: [3, 4, 5, 7] -> "3-5, 7"."""
    runs = []
    start = prev = verses[0]
    for verse in verses[1:]:
        if verse == prev + 1:
            prev = verse
            continue
        runs.append((start, prev))
        start = prev = verse
    runs.append((start, prev))
    return ", ".join(str(a) if a == b else f"{a}-{b}" for a, b in runs)


# -----------------------------------------------------------------------------
# Degradation chain
# -----------------------------------------------------------------------------

def _book_selection(title: str) -> Selection:
    return _chapter_selection(title, 1)


def _chapter_selection(title: str, chapter: int) -> Selection:
    count = verse_count(title, chapter)
    if count is None:
        logger.debug(f"{title} has no chapter {chapter}, falling back to book")
        return _book_selection(title)
    return Selection(title, chapter, frozenset(range(1, count + 1)))


def _verse_selection(title: str, chapter: int, verse: int) -> Selection:
    count = verse_count(title, chapter)
    if count is None:
        logger.debug(f"{title} has no chapter {chapter}, falling back to book")
        return _book_selection(title)
    if not 1 <= verse <= count:
        logger.debug(f"{title} {chapter} has no verse {verse}, falling back to chapter")
        return _chapter_selection(title, chapter)
    return Selection(title, chapter, frozenset([verse]))


def _verse_range_selection(title: str, chapter: int, start: int, end: int) -> Selection:
    count = verse_count(title, chapter)
    if count is None:
        logger.debug(f"{title} has no chapter {chapter}, falling back to book")
        return _book_selection(title)

    # Clamp to the chapter; a reversed range is empty
    verses = frozenset(range(max(start, 1), min(end, count) + 1))
    if not verses:
        logger.debug(
            f"{title} {chapter}:{start}-{end} selects no verses, falling back to chapter"
        )
        return _chapter_selection(title, chapter)
    return Selection(title, chapter, verses)


def select(reference: ParsedReference) -> Selection:
    """
    Validate a parsed reference against the canon.

    Args:
        reference: Output of parse_reference()

    Returns:
        The Selection for the reference, degraded to a broader shape if
        its chapter or verses do not exist

    Raises:
        NoMatchError: If the reference names a non-canonical title
    """
    if chapter_count(reference.title) is None:
        raise NoMatchError(NO_MATCHING_FORMAT)

    if isinstance(reference, VerseRangeReference):
        return _verse_range_selection(
            reference.title,
            reference.chapter,
            reference.verse_start,
            reference.verse_end,
        )
    if isinstance(reference, VerseReference):
        return _verse_selection(reference.title, reference.chapter, reference.verse)
    if isinstance(reference, ChapterReference):
        return _chapter_selection(reference.title, reference.chapter)
    if isinstance(reference, BookReference):
        return _book_selection(reference.title)
    raise TypeError(f"Unsupported reference type: {type(reference).__name__}")


def fold_subqueries(selection: Selection, subs: list) -> Selection:
    """
    Add sub-query verses (", 7, 9") to a selection.

    Each sub-query must be a bare verse number that exists in the
    selection's chapter; anything else is dropped. The chapter never
    changes.
    """
    extra = set()
    for sub in subs:
        verse = parse_u8(sub)
        if verse is None:
            continue
        if verse_exists(selection.title, selection.chapter, verse):
            extra.add(verse)
        else:
            logger.debug(
                f"Dropping sub-query {sub!r}: not a verse of "
                f"{selection.title} {selection.chapter}"
            )

    if extra <= selection.verses:
        return selection
    return Selection(selection.title, selection.chapter, selection.verses | extra)


def resolve(query: str) -> Selection:
    """
    Resolve a free-form query into a Selection.

    Examples:
        "1 John"                 -> 1 John 1, verses 1-10
        "1 John 2:3-5"           -> 1 John 2, verses 3-5
        "1 John 4:345"           -> 1 John 4, all verses (bad verse)
        "1 John 1:2, 3, 5, 11"   -> 1 John 1, verses 2, 3, 5 (no verse 11)

    Args:
        query: Raw user query

    Returns:
        Selection

    Raises:
        NoMatchError: If the query is empty or names no book
    """
    head, subs = split_subqueries(query or "")
    if head is None:
        raise NoMatchError(NO_RESULTS)

    reference = parse_reference(head)
    if reference is None:
        raise NoMatchError(NO_MATCHING_FORMAT)

    return fold_subqueries(select(reference), subs)


def try_resolve(query: str) -> Optional[Selection]:
    """Resolve a query, returning None instead of raising NoMatchError."""
    try:
        return resolve(query)
    except NoMatchError:
        return None


def is_valid_reference(query: str) -> bool:
    """
    Check if a query resolves to a passage.

    Args:
        query: String to check

    Returns:
        True if a book is recognized, False otherwise
    """
    return try_resolve(query) is not None
