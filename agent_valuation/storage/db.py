"""
Database connection management.

Provides SQLite connection for the usage ledger.
"""

import sqlite3
from pathlib import Path

DEFAULT_DB_PATH = "agent_valuation.db"


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Open a SQLite connection to the ledger database.

    Callers own the connection and must close it.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLite connection
    """
    return sqlite3.connect(str(Path(db_path)))
