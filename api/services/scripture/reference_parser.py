# api/services/scripture/reference_parser.py
"""
Scripture query parser.

Splits a raw query into its head reference and comma-separated sub-queries,
then classifies the head into one of four shapes:
- Book (ex: "Job")
- Chapter (ex: "Job 1")
- Verse (ex: "Job 1:2")
- Verse range (ex: "Job 1:2-3")

Chapter and verse numbers are not checked against the canon here; that is
the resolver's job (see selection.py).
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from .book_recognizer import recognize


# Numbers are unsigned 8-bit in the reference grammar
U8_MAX = 255

# "2:3-5:6": a range whose end names another chapter
CROSS_CHAPTER_RANGE_RE = re.compile(
    r"^\s*(?P<chapter>\d{1,3})\s*:\s*(?P<verse_start>\d{1,3})\s*-\s*"
    r"(?P<end_chapter>\d{1,3})\s*:\s*(?P<verse_end>\d{1,3}).*\Z",
    re.ASCII,
)
VERSE_RANGE_RE = re.compile(
    r"^\s*(?P<chapter>\d{1,3})\s*:\s*(?P<verse_start>\d{1,3})\s*-\s*(?P<verse_end>\d{1,3}).*\Z",
    re.ASCII,
)
VERSE_RE = re.compile(
    r"^\s*(?P<chapter>\d{1,3})\s*:\s*(?P<verse_start>\d{1,3}).*\Z",
    re.ASCII,
)
CHAPTER_RE = re.compile(
    r"^\s*(?P<chapter>\d{1,3}).*\Z",
    re.ASCII,
)
U8_RE = re.compile(r"\+?\d+", re.ASCII)


@dataclass(frozen=True)
class BookReference:
    """A whole-book reference (ex: "Job")."""
    title: str


@dataclass(frozen=True)
class ChapterReference:
    """A chapter reference (ex: "Job 1")."""
    title: str
    chapter: int


@dataclass(frozen=True)
class VerseReference:
    """A single verse reference (ex: "Job 1:2")."""
    title: str
    chapter: int
    verse: int


@dataclass(frozen=True)
class VerseRangeReference:
    """A verse range within one chapter (ex: "Job 1:2-3")."""
    title: str
    chapter: int
    verse_start: int
    verse_end: int


ParsedReference = Union[
    BookReference,
    ChapterReference,
    VerseReference,
    VerseRangeReference,
]


def parse_u8(text: str) -> Optional[int]:
    """
    Parse an unsigned 8-bit integer.

    Accepts ASCII digits with an optional leading "+". Anything else,
    including values above 255, returns None.
    """
    if text is None or not U8_RE.fullmatch(text):
        return None
    value = int(text)
    if value > U8_MAX:
        return None
    return value


def split_subqueries(query: str) -> tuple:
    """
    Split a query into its head reference and sub-queries.

    "John 1  ,  2,  3  " -> ("John 1", ["2", "3"])
    "1 John"             -> ("1 John", [])
    ""                   -> (None, [])

    Args:
        query: Raw user query

    Returns:
        (head, subs) where head is None if the first piece is empty
    """
    pieces = [piece.strip() for piece in query.strip().split(",")]
    head = pieces[0] or None
    return head, pieces[1:]


def _match_numbers(pattern: re.Pattern, residue: str, names: tuple) -> Optional[tuple]:
    """Run a residue pattern and parse its groups as u8 values; None if any fails."""
    match = pattern.match(residue)
    if match is None:
        return None
    values = tuple(parse_u8(match.group(name)) for name in names)
    if any(value is None for value in values):
        return None
    return values


def classify_residue(title: str, residue: str) -> ParsedReference:
    """
    Classify what follows the book name.

    Shapes are tried from most to least specific so a verse range is
    never read as a single verse or chapter.

    A range whose end names a later chapter ("2:3-5:6") runs to the end of
    its first chapter. Any other "c:v-c:v" reads as the plain range
    "c:v-c", so its end is the second chapter number.
    """
    numbers = _match_numbers(
        CROSS_CHAPTER_RANGE_RE,
        residue,
        ("chapter", "verse_start", "end_chapter", "verse_end"),
    )
    if numbers is not None:
        chapter, verse_start, end_chapter, _ = numbers
        if end_chapter > chapter:
            return VerseRangeReference(title, chapter, verse_start, U8_MAX)

    numbers = _match_numbers(VERSE_RANGE_RE, residue, ("chapter", "verse_start", "verse_end"))
    if numbers is not None:
        chapter, verse_start, verse_end = numbers
        return VerseRangeReference(title, chapter, verse_start, verse_end)

    numbers = _match_numbers(VERSE_RE, residue, ("chapter", "verse_start"))
    if numbers is not None:
        chapter, verse = numbers
        return VerseReference(title, chapter, verse)

    numbers = _match_numbers(CHAPTER_RE, residue, ("chapter",))
    if numbers is not None:
        return ChapterReference(title, numbers[0])

    return BookReference(title)


def parse_reference(head: str) -> Optional[ParsedReference]:
    """
    Parse a head reference into a typed reference.

    Args:
        head: Head query (ex: "1 Jn 2:3-5")

    Returns:
        BookReference, ChapterReference, VerseReference or
        VerseRangeReference; None only if no book is recognized
    """
    if not head:
        return None

    recognized = recognize(head)
    if recognized is None:
        return None

    title, residue = recognized
    return classify_residue(title, residue)
