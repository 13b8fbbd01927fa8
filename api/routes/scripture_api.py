# routes/scripture_api.py
"""
API endpoints for scripture search.

Provides access to:
- Passage search (query -> selection + verse text)
- Query resolution without verse text
- The canonical book list
- Datastore health
"""

from flask import Blueprint, current_app, jsonify, request

from services.scripture import (
    BOOKS,
    NoMatchError,
    ScriptureService,
    ScriptureStoreError,
    VerseStore,
    accepted_forms,
)
from utils.errors import missing_field, no_match, server_error

scripture_bp = Blueprint("scripture_api", __name__)


def open_store() -> VerseStore:
    """Open a VerseStore on the app's configured database."""
    return VerseStore(current_app.config["SCRIPTURE_DB"])


def _query_from_body():
    """Return the "query" string from the JSON body, or None if absent."""
    data = request.get_json(silent=True) or {}
    query = data.get("query") if isinstance(data, dict) else None
    if not isinstance(query, str):
        return None
    return query


@scripture_bp.get("/")
def welcome():
    return "Welcome to the scripture api!"


# =============================================================================
# Search Endpoints
# =============================================================================

@scripture_bp.post("/search")
def search():
    """
    Search for a passage.

    Body:
        {"query": "1 John 2:3-5, 7"}

    Returns:
        {
            "result": "ok",
            "selection": {"title": "1 John", "chapter": 2, "verses": [3, 4, 5, 7], ...},
            "data": [{"title": "1 John", "chapter": 2, "verse": 3, "text": "..."}, ...]
        }
    """
    query = _query_from_body()
    if query is None:
        return missing_field("query")

    # Unmatched queries never open the DB
    try:
        selection = ScriptureService().resolve(query)
        with open_store() as store:
            result = ScriptureService(store).fetch(selection)
    except NoMatchError as e:
        return no_match(str(e))
    except ScriptureStoreError as e:
        return server_error("store_error", str(e))

    return jsonify({"result": "ok", **result.to_dict()})


@scripture_bp.get("/resolve")
def resolve_query():
    """
    Resolve a query to a selection without reading verse text.

    Query params:
        q: Query string (required) e.g., "Gen 1:1-3"
    """
    query = request.args.get("q")
    if query is None:
        return missing_field("q")

    try:
        selection = ScriptureService().resolve(query)
    except NoMatchError as e:
        return no_match(str(e))

    return jsonify({"result": "ok", "selection": selection.to_dict()})


# =============================================================================
# Reference Data Endpoints
# =============================================================================

@scripture_bp.get("/books")
def list_books():
    """
    List the canonical books.

    Query params:
        forms: "1" to include every accepted spelling of each book
    """
    include_forms = request.args.get("forms") == "1"
    books = []
    for book in BOOKS:
        entry = {
            "title": book.title,
            "order": book.order,
            "testament": book.testament,
            "chapters": book.chapters,
        }
        if include_forms:
            entry["forms"] = accepted_forms(book.title)
        books.append(entry)
    return jsonify({"result": "ok", "books": books})


@scripture_bp.get("/health")
def health():
    try:
        with open_store() as store:
            count = ScriptureService(store).count_verses()
    except ScriptureStoreError as e:
        return server_error("store_error", str(e))
    return jsonify({"status": "ok", "verses": count})
