"""Database connection management for KùzuDB."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import kuzu

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """Manages the KùzuDB database and its connection.

    The database is opened lazily; the schema is created on first access to
    the connection.
    """

    def __init__(self, db_path: Path) -> None:
        """Initialize the database connection.

        Args:
            db_path: Path to the database.
        """
        self._db_path = db_path
        self._db: kuzu.Database | None = None
        self._conn: kuzu.Connection | None = None
        self._initialized = False

    @property
    def db(self) -> kuzu.Database:
        """Get the database instance, creating if needed."""
        if self._db is None:
            import kuzu

            logger.info(f"Initializing database at: {self._db_path}")
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._db = kuzu.Database(str(self._db_path))
        return self._db

    @property
    def conn(self) -> kuzu.Connection:
        """Get a database connection, initializing schema if needed."""
        if self._conn is None:
            import kuzu

            self._conn = kuzu.Connection(self.db)
            if not self._initialized:
                self._init_schema()
                self._initialized = True
        return self._conn

    def _init_schema(self) -> None:
        """Initialize the database schema."""
        logger.info("Initializing database schema...")

        self.conn.execute("""
            CREATE NODE TABLE IF NOT EXISTS HomeLocation (
                id STRING,
                latitude DOUBLE,
                longitude DOUBLE,
                radius DOUBLE,
                name STRING,
                created_at TIMESTAMP,
                updated_at TIMESTAMP,
                PRIMARY KEY (id)
            )
        """)

        # "order" is reserved in Cypher, hence sort_order
        self.conn.execute("""
            CREATE NODE TABLE IF NOT EXISTS ChecklistItem (
                id STRING,
                title STRING,
                emoji STRING,
                sort_order INT64,
                is_active BOOLEAN,
                category STRING,
                created_at TIMESTAMP,
                forgotten_count INT64,
                last_forgotten_at TIMESTAMP,
                PRIMARY KEY (id)
            )
        """)

        # forgotten_items is a JSON array of titles
        self.conn.execute("""
            CREATE NODE TABLE IF NOT EXISTS ExitEvent (
                id STRING,
                timestamp TIMESTAMP,
                was_complete BOOLEAN,
                dismissed_early BOOLEAN,
                forgotten_items STRING,
                day_of_week INT64,
                hour_of_day INT64,
                PRIMARY KEY (id)
            )
        """)

        logger.info("Database schema initialized successfully")

    def execute(self, query: str, parameters: dict | None = None) -> kuzu.QueryResult:
        """Execute a query on the database.

        Args:
            query: Cypher query string.
            parameters: Optional query parameters.

        Returns:
            Query result.
        """
        if parameters:
            return self.conn.execute(query, parameters=parameters)
        return self.conn.execute(query)

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        if self._db is not None:
            self._db.close()
            self._db = None
        logger.info("Database connection closed")
