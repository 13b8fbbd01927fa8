# api/services/scripture/scripture_service.py
"""
Scripture lookup service.

Resolves a free-form query to a Selection and reads its verse text from
the VerseStore. The routes talk to this class only.
"""

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import List, Optional

from .selection import NoMatchError, Selection, resolve
from .verse_store import ScriptureStoreError, VerseRow, VerseStore

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """A resolved selection with the verse text found for it."""
    selection: Selection
    rows: List[VerseRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "selection": self.selection.to_dict(),
            "data": [row.to_dict() for row in self.rows],
        }


class ScriptureService:
    """
    Query resolution and verse lookup.

    Usage:
        with VerseStore(db_path) as store:
            result = ScriptureService(store).search("1 John 2:3-5")
            for row in result.rows:
                print(row.verse, row.text)
    """

    def __init__(self, store: Optional[VerseStore] = None):
        self.store = store

    def resolve(self, query: str) -> Selection:
        """
        Resolve a query without touching the datastore.

        Raises:
            NoMatchError: If the query names no book
        """
        try:
            selection = resolve(query)
        except NoMatchError as e:
            logger.info(f"Unresolved query {query!r}: {e}")
            raise
        logger.debug(f"Resolved {query!r} -> {selection.normalized}")
        return selection

    def search(self, query: str) -> SearchResult:
        """
        Resolve a query and fetch its verse text.

        Raises:
            NoMatchError: If the query names no book
            ScriptureStoreError: If the datastore read fails
        """
        return self.fetch(self.resolve(query))

    def fetch(self, selection: Selection) -> SearchResult:
        """
        Fetch the verse text for an already resolved selection.

        Raises:
            ScriptureStoreError: If the datastore read fails
        """
        try:
            rows = self._get_store().fetch(selection)
        except sqlite3.Error as e:
            logger.exception(f"Verse lookup failed for {selection.normalized}")
            raise ScriptureStoreError(str(e)) from e
        return SearchResult(selection=selection, rows=rows)

    def count_verses(self) -> int:
        """
        Number of verses with stored text.

        Raises:
            ScriptureStoreError: If the datastore read fails
        """
        try:
            return self._get_store().count_verses()
        except sqlite3.Error as e:
            logger.exception("Verse count failed")
            raise ScriptureStoreError(str(e)) from e

    def _get_store(self) -> VerseStore:
        if self.store is None:
            self.store = VerseStore()
        return self.store
