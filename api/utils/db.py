import sqlite3

from core.config import get_settings


def get_db(db_path: str = None):
    """
    Return a sqlite3 connection to the scripture DB.

    Defaults to the SCRIPTURE_DB setting when no path is given.
    """
    conn = sqlite3.connect(db_path or get_settings().db_path)
    conn.row_factory = sqlite3.Row
    return conn
