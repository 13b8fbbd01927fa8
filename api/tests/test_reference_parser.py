# api/tests/test_reference_parser.py
"""
Tests for reference_parser.py - sub-query splitting and shape classification.
"""

import os
import sys

import pytest

# Add api directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.scripture.reference_parser import (
    BookReference,
    ChapterReference,
    U8_MAX,
    VerseRangeReference,
    VerseReference,
    parse_reference,
    parse_u8,
    split_subqueries,
)


# =============================================================================
# split_subqueries()
# =============================================================================

def test_split_subqueries():
    """Test head/sub-query splitting."""
    assert split_subqueries("John 1  ,  2,  3  ") == ("John 1", ["2", "3"])
    assert split_subqueries("1 John") == ("1 John", [])
    assert split_subqueries("1 John 1:2, 3, 5") == ("1 John 1:2", ["3", "5"])
    print("✓ head and trimmed sub-queries")

    assert split_subqueries("") == (None, [])
    assert split_subqueries("    ") == (None, [])
    assert split_subqueries(", 3") == (None, ["3"])
    print("✓ empty head is None")

    # Empty and junk pieces are kept; the resolver drops them
    assert split_subqueries("Gen 1:1,, x,") == ("Gen 1:1", ["", "x", ""])


# =============================================================================
# parse_u8()
# =============================================================================

@pytest.mark.parametrize(
    "text,expected",
    [("0", 0), ("7", 7), ("255", 255), ("+12", 12), ("007", 7)],
)
def test_parse_u8_accepts(text, expected):
    assert parse_u8(text) == expected


@pytest.mark.parametrize("text", [None, "", "256", "-1", "1.5", "x", " 3", "3 ", "1e2", "٣"])
def test_parse_u8_rejects(text):
    assert parse_u8(text) is None


# =============================================================================
# parse_reference()
# =============================================================================

def test_parse_shapes():
    """Test the four reference shapes."""
    assert parse_reference("Job") == BookReference("Job")
    assert parse_reference("Job 1") == ChapterReference("Job", 1)
    assert parse_reference("Job 1:2") == VerseReference("Job", 1, 2)
    assert parse_reference("Job 1:2-3") == VerseRangeReference("Job", 1, 2, 3)
    print("✓ book, chapter, verse, verse range")


def test_parse_spacing_and_trailing_text():
    assert parse_reference("1 Jn  2 : 3 - 5") == VerseRangeReference("1 John", 2, 3, 5)
    assert parse_reference("Gen 1:1 KJV") == VerseReference("Genesis", 1, 1)
    assert parse_reference("Gen 12abc") == ChapterReference("Genesis", 12)
    assert parse_reference("Gen.") == BookReference("Genesis")


def test_parse_large_numbers_fall_through():
    """Numbers that do not fit in a byte drop to the next shape."""
    assert parse_reference(" 3 John 125:221-225") == VerseRangeReference("3 John", 125, 221, 225)
    assert parse_reference("3 John 1:2-300") == VerseReference("3 John", 1, 2)
    assert parse_reference("3 John 1:300") == ChapterReference("3 John", 1)
    assert parse_reference("3 John 300") == BookReference("3 John")
    assert parse_reference("Ps 255:255") == VerseReference("Psalms", 255, 255)
    assert parse_reference("Ps 0:0-0") == VerseRangeReference("Psalms", 0, 0, 0)


def test_parse_cross_chapter_range():
    """A later end chapter runs to the end of the first chapter."""
    assert parse_reference("Song of Solomon 2:3-5:6") == VerseRangeReference(
        "Song of Solomon", 2, 3, U8_MAX
    )
    assert parse_reference("Gen 3:5-4:2") == VerseRangeReference("Genesis", 3, 5, U8_MAX)
    print("✓ later end chapter -> end of first chapter")

    # Same or earlier end chapter: the second chapter number is the end verse
    assert parse_reference("Gen 3:5-3:9") == VerseRangeReference("Genesis", 3, 5, 3)
    assert parse_reference("Gen 3:1-3:9") == VerseRangeReference("Genesis", 3, 1, 3)
    assert parse_reference("Gen 3:5-2:9") == VerseRangeReference("Genesis", 3, 5, 2)


def test_parse_no_book():
    assert parse_reference("") is None
    assert parse_reference(None) is None
    assert parse_reference("Hezekiah 1:1") is None
    assert parse_reference("12:3") is None


def test_references_are_immutable():
    ref = VerseReference("Job", 1, 2)
    with pytest.raises(AttributeError):
        ref.verse = 3
