"""
Ledger interface and SQLite-backed usage ledger.

The ledger is the record of truth for token usage costs. Anything with a
``record_usage`` method satisfies the interface; ``UsageLedger`` is the
append-only SQLite implementation.
"""

import sqlite3
import threading
from datetime import datetime
from typing import List, Optional, Protocol

from .db import DEFAULT_DB_PATH, get_connection
from .models import UsageRecord, UsageSummary


class LedgerError(Exception):
    """Raised when a ledger cannot store or read usage."""


class Ledger(Protocol):
    """Sink for usage records.

    Implementations must be safe to call from multiple threads.
    """

    def record_usage(self, record: UsageRecord) -> None:
        """Store a usage record.

        Raises:
            LedgerError: If the record could not be stored
        """
        ...


_COLUMNS = (
    "timestamp, model, input_tokens, output_tokens, total_tokens, "
    "input_price_per_million, output_price_per_million, cost_usd"
)


class UsageLedger:
    """Append-only SQLite ledger of usage records.

    A connection is opened per call; writes are serialized by an internal
    lock so one instance can be shared between threads.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        """Initialize the ledger with a database path.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self._write_lock = threading.Lock()

    def initialize_schema(self) -> None:
        """Create the usage_record table if it doesn't exist.

        No UPDATE or DELETE operations should ever be performed on this table.

        Raises:
            LedgerError: If the schema could not be created
        """
        try:
            conn = get_connection(self.db_path)
            try:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS usage_record (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        timestamp TEXT NOT NULL,
                        model TEXT NOT NULL,
                        input_tokens INTEGER NOT NULL,
                        output_tokens INTEGER NOT NULL,
                        total_tokens INTEGER NOT NULL,
                        input_price_per_million REAL NOT NULL,
                        output_price_per_million REAL NOT NULL,
                        cost_usd REAL NOT NULL
                    )
                """)
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise LedgerError(f"Failed to initialize ledger at {self.db_path}: {e}") from e

    def record_usage(self, record: UsageRecord) -> None:
        """Append a usage record to the ledger.

        Args:
            record: The usage record to store

        Raises:
            LedgerError: If the write fails
        """
        with self._write_lock:
            try:
                conn = get_connection(self.db_path)
                try:
                    conn.execute(
                        f"INSERT INTO usage_record ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                        (
                            record.timestamp.isoformat(),
                            record.model,
                            record.input_tokens,
                            record.output_tokens,
                            record.total_tokens,
                            record.input_price_per_million,
                            record.output_price_per_million,
                            record.total_cost,
                        ),
                    )
                    conn.commit()
                finally:
                    conn.close()
            except sqlite3.Error as e:
                raise LedgerError(f"Failed to record usage for {record.model}: {e}") from e

    def fetch_recent_usage(
        self,
        model: Optional[str] = None,
        limit: int = 100
    ) -> List[UsageRecord]:
        """Fetch recent usage records, optionally filtered by model.

        Args:
            model: Optional filter for a specific "provider/model"
            limit: Maximum number of records to return

        Returns:
            List of usage records ordered by timestamp (newest first)

        Raises:
            LedgerError: If the read fails
        """
        query = f"SELECT {_COLUMNS} FROM usage_record"
        params: list = []
        if model:
            query += " WHERE model = ?"
            params.append(model)
        query += " ORDER BY timestamp DESC, id DESC LIMIT ?"
        params.append(limit)

        try:
            conn = get_connection(self.db_path)
            try:
                rows = conn.execute(query, params).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise LedgerError(f"Failed to read usage from {self.db_path}: {e}") from e

        return [
            UsageRecord(
                timestamp=datetime.fromisoformat(row[0]),
                model=row[1],
                input_tokens=row[2],
                output_tokens=row[3],
                input_price_per_million=row[5],
                output_price_per_million=row[6],
            )
            for row in rows
        ]

    def get_summary(self) -> UsageSummary:
        """Get totals across all recorded usage.

        Raises:
            LedgerError: If the read fails
        """
        try:
            conn = get_connection(self.db_path)
            try:
                row = conn.execute("""
                    SELECT COUNT(*), SUM(total_tokens), SUM(cost_usd)
                    FROM usage_record
                """).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise LedgerError(f"Failed to summarize usage in {self.db_path}: {e}") from e

        return UsageSummary(
            request_count=row[0] or 0,
            total_tokens=row[1] or 0,
            total_cost_usd=float(row[2] or 0),
        )
