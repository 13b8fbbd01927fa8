# api/services/scripture/book_recognizer.py
"""
Book name recognition for free-form scripture queries.

Turns the leading part of a user query into a canonical book title:
- Full names: "Genesis", "Song of Solomon"
- Prefixes down to a per-book minimum: "Gen", "Phili", "S"
- Common abbreviations: "Jn", "Mk", "Pss", "Sos"
- Ordinal prefixes for paired books: "1 John", "1st John", "I John",
  "First John", "fst Chr", "ii Kings", "Third Jn"
- Any casing and spacing: "  1  JOHN", "1john"

Book names are recognized from a lookup table (BOOK_PATTERNS). Each row
becomes one compiled, case-insensitive regex at import time, so adding a
spelling means adding a row or an alias, not code.
"""

import re
from dataclasses import dataclass
from typing import Optional


# Ordinal prefixes for the paired books. Roman numerals need trailing
# whitespace so that "is"/"in" are never read as "I".
ONES = r"one|fst|first|1(?:st)?|i\s+"
TWOS = r"two|sec(?:o(?:n(?:d)?)?)?|2(?:nd)?|ii\s+"
THREES = r"thr(?:e(?:e)?)?|thi(?:r(?:d)?)?|3(?:rd)?|iii\s+"

# Checked in this order when normalizing, so ties go to the higher number
ORDINAL_PATTERNS = (
    ("3", re.compile(THREES, re.IGNORECASE)),
    ("2", re.compile(TWOS, re.IGNORECASE)),
    ("1", re.compile(ONES, re.IGNORECASE)),
)

# Head region: optional ordinal, then the run of non-digit characters
# that holds the book name. Anchored at the start of the query. Any
# Unicode digit ends the book name.
HEAD_RE = re.compile(
    rf"\s*(?P<ordinal>{ONES}|{TWOS}|{THREES})?\s*(?P<book_text>\D+)\s*",
    re.IGNORECASE,
)

# Characters allowed (and ignored) after a book name
NON_NAME_CHARS = r"[\d:\-_.\s]"


@dataclass(frozen=True)
class BookPattern:
    """
    One row of the book recognition table.

    Attributes:
        title: Canonical title produced on a match
        names: Lowercase spellings; every prefix of each spelling at least
               min_length characters long is accepted
        min_length: Shortest accepted prefix
        ordinal: "1", "2" or "3" for paired books, "" otherwise
        aliases: Extra lowercase abbreviations accepted verbatim
    """
    title: str
    names: tuple
    min_length: int
    ordinal: str = ""
    aliases: tuple = ()


BOOK_PATTERNS = (
    # Old Testament
    BookPattern("Genesis", ("genesis",), 2, aliases=("gn",)),
    BookPattern("Exodus", ("exodus",), 2),
    BookPattern("Leviticus", ("leviticus",), 2, aliases=("lv",)),
    BookPattern("Numbers", ("numbers",), 2, aliases=("nm",)),
    BookPattern("Deuteronomy", ("deuteronomy", "dueteronomy"), 2, aliases=("dt",)),
    BookPattern("Joshua", ("joshua",), 3),
    BookPattern("Judges", ("judges",), 4, aliases=("jdg", "jg")),
    BookPattern("Ruth", ("ruth",), 2, aliases=("rth",)),
    BookPattern("1 Samuel", ("samuel",), 3, ordinal="1", aliases=("sa",)),
    BookPattern("2 Samuel", ("samuel",), 1, ordinal="2"),
    BookPattern("1 Kings", ("kings",), 1, ordinal="1", aliases=("kgs",)),
    BookPattern("2 Kings", ("kings",), 1, ordinal="2", aliases=("kgs",)),
    BookPattern("1 Chronicles", ("chronicles",), 2, ordinal="1"),
    BookPattern("2 Chronicles", ("chronicles",), 2, ordinal="2"),
    BookPattern("Ezra", ("ezra",), 3),
    BookPattern("Nehemiah", ("nehemiah",), 2),
    BookPattern("Esther", ("esther",), 2),
    BookPattern("Job", ("job",), 3, aliases=("jb",)),
    BookPattern("Psalms", ("psalms",), 2, aliases=("pss",)),
    BookPattern("Proverbs", ("proverbs",), 2, aliases=("prv",)),
    BookPattern("Ecclesiastes", ("ecclesiastes",), 2, aliases=("qoh", "qoheleth")),
    BookPattern(
        "Song of Solomon",
        ("song of solomon",),
        1,
        aliases=("sos", "ss", "sg", "cant", "canticles", "song of songs"),
    ),
    BookPattern("Isaiah", ("isaiah",), 2),
    BookPattern("Jeremiah", ("jeremiah",), 2),
    BookPattern("Lamentations", ("lamentations",), 2),
    BookPattern("Ezekiel", ("ezekiel",), 3, aliases=("ezk",)),
    BookPattern("Daniel", ("daniel",), 2, aliases=("dn",)),
    BookPattern("Hosea", ("hosea",), 2),
    BookPattern("Joel", ("joel",), 3, aliases=("jl",)),
    BookPattern("Amos", ("amos",), 2),
    BookPattern("Obadiah", ("obadiah",), 1),
    BookPattern("Jonah", ("jonah",), 3, aliases=("jnh",)),
    BookPattern("Micah", ("micah",), 2),
    BookPattern("Nahum", ("nahum",), 2),
    BookPattern("Habakkuk", ("habakkuk",), 3, aliases=("hb",)),
    BookPattern("Zephaniah", ("zephaniah",), 3),
    BookPattern("Haggai", ("haggai",), 3, aliases=("hg",)),
    BookPattern("Zechariah", ("zechariah",), 3, aliases=("zc",)),
    BookPattern("Malachi", ("malachi",), 3, aliases=("ml",)),

    # New Testament
    BookPattern("Matthew", ("matthew",), 3, aliases=("mt",)),
    BookPattern("Mark", ("mark",), 3, aliases=("mk", "mr")),
    BookPattern("Luke", ("luke",), 2, aliases=("lk",)),
    BookPattern("John", ("john",), 3, aliases=("jn",)),
    BookPattern("Acts", ("acts",), 2),
    BookPattern("Romans", ("romans",), 2, aliases=("rm",)),
    BookPattern("1 Corinthians", ("corinthians",), 2, ordinal="1"),
    BookPattern("2 Corinthians", ("corinthians",), 2, ordinal="2"),
    BookPattern("Galatians", ("galatians",), 2),
    BookPattern("Ephesians", ("ephesians",), 2),
    BookPattern("Philippians", ("philippians",), 5, aliases=("php", "pp")),
    BookPattern("Colossians", ("colossians",), 2),
    BookPattern("1 Thessalonians", ("thessalonians",), 2, ordinal="1"),
    BookPattern("2 Thessalonians", ("thessalonians",), 2, ordinal="2"),
    BookPattern("1 Timothy", ("timothy",), 2, ordinal="1"),
    BookPattern("2 Timothy", ("timothy",), 2, ordinal="2"),
    BookPattern("Titus", ("titus",), 2),
    BookPattern("Philemon", ("philemon",), 5, aliases=("phm", "phlm", "pm")),
    BookPattern("Hebrews", ("hebrews",), 2),
    BookPattern("James", ("james",), 2, aliases=("jas", "jm")),
    BookPattern("1 Peter", ("peter",), 1, ordinal="1", aliases=("pt",)),
    BookPattern("2 Peter", ("peter",), 1, ordinal="2", aliases=("pt",)),
    BookPattern("1 John", ("john",), 1, ordinal="1", aliases=("jn",)),
    BookPattern("2 John", ("john",), 1, ordinal="2", aliases=("jn",)),
    BookPattern("3 John", ("john",), 2, ordinal="3", aliases=("jn",)),
    BookPattern("Jude", ("jude",), 4),
    BookPattern("Revelation", ("revelation",), 2, aliases=("rv", "apoc", "apocalypse")),
)


def _char_pattern(char: str) -> str:
    """Regex for one character of a book name; a space matches optional whitespace."""
    if char == " ":
        return r"\s*"
    return re.escape(char)


def _prefix_chain(name: str, min_length: int) -> str:
    """
    Build a regex accepting every prefix of name from min_length chars up.

    _prefix_chain("john", 1) -> "j(?:o(?:h(?:n)?)?)?"
    """
    required, optional = name[:min_length], name[min_length:]
    chain = ""
    for char in reversed(optional):
        chain = f"(?:{_char_pattern(char)}{chain})?"
    return "".join(_char_pattern(c) for c in required) + chain


def _alias_pattern(alias: str) -> str:
    return "".join(_char_pattern(c) for c in alias)


def build_title_pattern(row: BookPattern) -> str:
    """
    Build the full regex for one table row.

    The pattern is matched against the normalized title text, i.e. the
    ordinal digit plus a space for paired books ("1 jn") and the bare
    name otherwise ("gen").
    """
    alternatives = [_prefix_chain(name, row.min_length) for name in row.names]
    alternatives.extend(_alias_pattern(alias) for alias in row.aliases)
    ordinal = rf"{row.ordinal}\s*" if row.ordinal else ""
    return rf"^{ordinal}(?:{'|'.join(alternatives)}){NON_NAME_CHARS}*\Z"


TITLE_PATTERNS = tuple(
    (row.title, re.compile(build_title_pattern(row), re.IGNORECASE | re.ASCII))
    for row in BOOK_PATTERNS
)


def normalize_ordinal(ordinal: Optional[str]) -> str:
    """
    Normalize a captured ordinal prefix to "1 ", "2 ", "3 " or "".

    Args:
        ordinal: Ordinal text as typed (e.g., "First", "ii ", "3rd")

    Returns:
        Decimal ordinal followed by a space, or "" when absent/unknown
    """
    if not ordinal:
        return ""
    for digit, pattern in ORDINAL_PATTERNS:
        if pattern.fullmatch(ordinal):
            return f"{digit} "
    return ""


def match_title(title_text: str) -> Optional[str]:
    """
    Match normalized title text (e.g., "1 jn", "gen") against the book table.

    Returns:
        Canonical title or None
    """
    for title, pattern in TITLE_PATTERNS:
        if pattern.match(title_text):
            return title
    return None


def recognize(query: str) -> Optional[tuple]:
    """
    Recognize the book at the start of a query.

    Args:
        query: Raw user query (e.g., "1 Jn 2:3-5")

    Returns:
        (canonical_title, residue) where residue is everything after the
        book name (e.g., ("1 John", "2:3-5")), or None if no book matched
    """
    if not query:
        return None

    match = HEAD_RE.match(query)
    if match is None:
        return None

    book_text = match.group("book_text").strip()
    if not book_text:
        return None

    ordinal = normalize_ordinal(match.group("ordinal"))
    title = match_title(f"{ordinal}{book_text}")
    if title is None:
        return None

    return title, query[match.end():]


def get_title(query: str) -> Optional[str]:
    """Return only the canonical title recognized at the start of query."""
    recognized = recognize(query)
    return recognized[0] if recognized else None


def get_params(query: str) -> Optional[str]:
    """
    Return the part of the query after the book name, or None if the
    book is not recognized or nothing follows it.
    """
    recognized = recognize(query)
    if recognized is None or not recognized[1]:
        return None
    return recognized[1]


def accepted_forms(title: str) -> list:
    """
    List every normalized spelling the table accepts for a title.

    Paired books are listed with their digit prefix ("1 jo", "1 john").
    Returns an empty list for unknown titles.
    """
    forms = []
    for row in BOOK_PATTERNS:
        if row.title != title:
            continue
        spellings = []
        for name in row.names:
            for end in range(row.min_length, len(name) + 1):
                spellings.append(name[:end].rstrip())
        spellings.extend(row.aliases)
        prefix = f"{row.ordinal} " if row.ordinal else ""
        for spelling in spellings:
            form = f"{prefix}{spelling}"
            if form not in forms:
                forms.append(form)
    return forms
