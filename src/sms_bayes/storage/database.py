# =============================================================================
# Database Connection and Schema Management
# =============================================================================
# Manages the SQLite database connection and schema migrations.
#
# Schema overview:
#   - training_runs: One row per trained model (smoothing, message counts)
#   - vocabulary:    Per-run token counts (token, ham_count, spam_count)
#   - predictions:   Per-run predictions on held-out messages
#
# The vocabulary table holds everything needed to rebuild a run's model, so
# any past run can be reloaded and re-scored.
#
# Uses aiosqlite for async operations, with WAL mode for better
# concurrent performance.
# =============================================================================

import aiosqlite
from pathlib import Path

from sms_bayes.config import Config


# Current schema version - increment when making schema changes
SCHEMA_VERSION = 1


class Database:
    """
    Manages the SQLite database connection and schema.

    Usage:
        >>> db = Database()
        >>> await db.connect()
        >>> repo = Repository(db)
        >>> await db.close()

    Or as an async context manager:
        >>> async with Database(path) as db:
        ...     ...

    Attributes:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        """
        Initialize the database manager.

        Args:
            db_path: Path to database file. Defaults to XDG data location.
        """
        self.db_path = db_path or Config.database_path()
        self._connection: aiosqlite.Connection | None = None

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def connect(self) -> None:
        """
        Open the database connection and ensure schema is up to date.

        Creates the database file if it doesn't exist.
        """
        # Ensure parent directory exists
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._connection = await aiosqlite.connect(self.db_path)

        # Enable foreign keys (off by default in SQLite)
        await self._connection.execute("PRAGMA foreign_keys = ON")

        # Enable WAL mode for better concurrent performance
        await self._connection.execute("PRAGMA journal_mode = WAL")

        await self._init_schema()

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @property
    def conn(self) -> aiosqlite.Connection:
        """
        Get the active database connection.

        Raises:
            RuntimeError: If not connected.
        """
        if self._connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    async def _init_schema(self) -> None:
        """
        Initialize the database schema.

        Creates tables if they don't exist.
        """
        try:
            async with self.conn.execute(
                "SELECT version FROM schema_version"
            ) as cursor:
                row = await cursor.fetchone()
                current_version = row[0] if row else 0
        except aiosqlite.OperationalError:
            # Table doesn't exist, this is a fresh database
            current_version = 0

        if current_version < SCHEMA_VERSION:
            await self._create_schema()

    async def _create_schema(self) -> None:
        """Create the database schema from scratch."""
        schema = """
        -- Schema version tracking
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY
        );

        -- Trained models
        CREATE TABLE IF NOT EXISTS training_runs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            smoothing REAL NOT NULL,
            ham_messages INTEGER NOT NULL,
            spam_messages INTEGER NOT NULL,
            created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        -- Token frequencies per run (position keeps first-seen order)
        CREATE TABLE IF NOT EXISTS vocabulary (
            run_id INTEGER NOT NULL REFERENCES training_runs(id) ON DELETE CASCADE,
            position INTEGER NOT NULL,
            token TEXT NOT NULL,
            ham_count INTEGER NOT NULL DEFAULT 0,
            spam_count INTEGER NOT NULL DEFAULT 0,
            PRIMARY KEY (run_id, token)
        );

        -- Predictions made with a run's model
        CREATE TABLE IF NOT EXISTS predictions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            run_id INTEGER NOT NULL REFERENCES training_runs(id) ON DELETE CASCADE,
            text TEXT NOT NULL,
            actual TEXT CHECK(actual IN ('ham', 'spam')),
            predicted TEXT NOT NULL CHECK(predicted IN ('ham', 'spam', 'unknown')),
            ham_score REAL NOT NULL,
            spam_score REAL NOT NULL,
            scored_tokens INTEGER NOT NULL DEFAULT 0
        );

        CREATE INDEX IF NOT EXISTS idx_predictions_run ON predictions(run_id);
        """

        await self.conn.executescript(schema)

        await self.conn.execute(
            "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,)
        )
        await self.conn.commit()
