# api/tests/test_scripture_api.py
"""
Tests for routes/scripture_api.py through the Flask test client.
"""

import os
import sys

import pytest

# Add api directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import Settings, get_settings
from server import create_app
from services.scripture import VerseStore


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "scripture.db")
    with VerseStore(path) as store:
        store.create_schema()
        store.seed_canon()
        store.import_rows([
            ("Genesis", 1, 1, "In the beginning God created the heaven and the earth."),
            ("Genesis", 1, 2, "And the earth was without form, and void;"),
            ("Genesis", 1, 3, "And God said, Let there be light: and there was light."),
        ])
    return path


@pytest.fixture
def client(db_path):
    settings = Settings(
        db_path=db_path,
        host="127.0.0.1",
        port=5055,
        cors_origins=("*",),
        log_level="INFO",
    )
    app = create_app(settings)
    app.config["TESTING"] = True
    return app.test_client()


def test_welcome(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "Welcome to the scripture api!"


def test_search(client):
    """Test a successful search."""
    resp = client.post("/search", json={"query": "gen 1:1-3"})
    assert resp.status_code == 200

    body = resp.get_json()
    assert body["result"] == "ok"
    assert body["selection"]["title"] == "Genesis"
    assert body["selection"]["verses"] == [1, 2, 3]
    assert [row["verse"] for row in body["data"]] == [1, 2, 3]
    assert body["data"][2]["text"].startswith("And God said")
    print("✓ POST /search returns selection and rows")


def test_search_whole_chapter_returns_stored_rows(client):
    body = client.post("/search", json={"query": "Genesis"}).get_json()
    assert body["selection"]["verses"] == list(range(1, 32))
    assert len(body["data"]) == 3


def test_search_no_match(client):
    resp = client.post("/search", json={"query": "Hezekiah 4:2"})
    assert resp.status_code == 404
    assert resp.get_json() == {
        "result": "error",
        "error": "No Matching Search Format Found",
    }

    resp = client.post("/search", json={"query": " , 3"})
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "No Results Found"


@pytest.mark.parametrize("query", ["", "   ", ","])
def test_search_empty_query_is_no_match(client, query):
    """An empty query string resolves to nothing rather than failing validation."""
    resp = client.post("/search", json={"query": query})
    assert resp.status_code == 404
    assert resp.get_json() == {"result": "error", "error": "No Results Found"}


@pytest.mark.parametrize("payload", [None, {}, {"query": None}, {"query": 3}, ["Gen"]])
def test_search_requires_query(client, payload):
    if payload is None:
        resp = client.post("/search", data="not json", content_type="text/plain")
    else:
        resp = client.post("/search", json=payload)
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["result"] == "error"
    assert body["error"] == "query_required"


def test_search_store_error(tmp_path):
    settings = Settings(
        db_path=str(tmp_path / "no_tables.db"),
        host="127.0.0.1",
        port=5055,
        cors_origins=("*",),
        log_level="INFO",
    )
    client = create_app(settings).test_client()

    resp = client.post("/search", json={"query": "Gen 1"})
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "store_error"

    resp = client.get("/health")
    assert resp.status_code == 500


def test_unopenable_database_returns_json_error(tmp_path):
    settings = Settings(
        db_path=str(tmp_path / "missing_dir" / "scripture.db"),
        host="127.0.0.1",
        port=5055,
        cors_origins=("*",),
        log_level="INFO",
    )
    client = create_app(settings).test_client()

    resp = client.post("/search", json={"query": "Gen 1"})
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["result"] == "error"
    assert body["error"] == "store_error"

    resp = client.get("/health")
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "store_error"
    print("✓ connect failures return the JSON error envelope")


def test_unmatched_query_does_not_open_database(tmp_path):
    path = tmp_path / "untouched.db"
    settings = Settings(
        db_path=str(path),
        host="127.0.0.1",
        port=5055,
        cors_origins=("*",),
        log_level="INFO",
    )
    client = create_app(settings).test_client()

    assert client.post("/search", json={"query": "Hezekiah 1"}).status_code == 404
    assert client.post("/search", json={"query": ""}).status_code == 404
    assert not path.exists()


def test_resolve(client):
    resp = client.get("/resolve", query_string={"q": "iii jn"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["result"] == "ok"
    assert body["selection"]["title"] == "3 John"
    assert body["selection"]["verses"] == list(range(1, 15))

    resp = client.get("/resolve", query_string={"q": "Song of Solomon 2:3-5:6"})
    assert resp.get_json()["selection"]["ref"] == "Song of Solomon 2:3-17"

    assert client.get("/resolve").status_code == 400
    assert client.get("/resolve", query_string={"q": "Tobit"}).status_code == 404

    resp = client.get("/resolve", query_string={"q": ""})
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "No Results Found"


def test_books(client):
    body = client.get("/books").get_json()
    books = body["books"]
    assert len(books) == 66
    assert books[0] == {"title": "Genesis", "order": 1, "testament": "OT", "chapters": 50}
    assert "forms" not in books[0]

    books = client.get("/books", query_string={"forms": "1"}).get_json()["books"]
    jude = next(book for book in books if book["title"] == "Jude")
    assert jude["forms"] == ["jude"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "verses": 3}


def test_cors_header(client):
    """The wildcard setting sends "*", not the caller's origin."""
    resp = client.get("/", headers={"Origin": "http://example.com"})
    assert resp.headers.get("Access-Control-Allow-Origin") == "*"


def test_cors_explicit_origins(db_path):
    settings = Settings(
        db_path=db_path,
        host="127.0.0.1",
        port=5055,
        cors_origins=("http://a.test", "http://b.test"),
        log_level="INFO",
    )
    client = create_app(settings).test_client()

    resp = client.get("/", headers={"Origin": "http://b.test"})
    assert resp.headers.get("Access-Control-Allow-Origin") == "http://b.test"

    resp = client.get("/", headers={"Origin": "http://evil.test"})
    assert "Access-Control-Allow-Origin" not in resp.headers


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("SCRIPTURE_DB", "/tmp/other.db")
    monkeypatch.setenv("API_PORT", "6000")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.db_path == "/tmp/other.db"
    assert settings.port == 6000
    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.log_level == "DEBUG"
