"""
Database connection and catalog introspection for SQLite Dumper.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

from .errors import CatalogQueryError, NotFoundError, QuoteEncodingError
from .models import ColumnInfo, ObjectKind, SchemaObject
from .utils import quote_identifier, sql_string_literal

TABLE_SCHEMAS_QUERY = """
    SELECT "name", "type", "sql"
    FROM "sqlite_master"
        WHERE "sql" NOT NULL AND
        "type" == 'table'
        ORDER BY "name"
"""

OTHER_SCHEMAS_QUERY = """
    SELECT "name", "type", "sql"
    FROM "sqlite_master"
        WHERE "sql" NOT NULL AND
        "type" IN ('index', 'trigger', 'view')
"""


def decode_cell(value: Any) -> str:
    """Recover text from a result cell stored as str or raw bytes."""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        try:
            return value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise QuoteEncodingError(value) from e
    raise QuoteEncodingError(value)


class DatabaseConnection:
    """Manages a SQLite database connection with context manager support."""

    def __init__(
        self,
        path: Optional[str] = None,
        connect: Callable[..., sqlite3.Connection] = sqlite3.connect
    ):
        self.path = path
        self.connection: Optional[sqlite3.Connection] = None
        self._connect = connect
        self._owns_connection = False

    @classmethod
    def from_connection(cls, connection: sqlite3.Connection) -> "DatabaseConnection":
        """Wrap a connection the caller already owns. It is never closed here."""
        conn = cls()
        conn.connection = connection
        return conn

    def __enter__(self) -> "DatabaseConnection":
        """Context manager entry - establish connection."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close connection."""
        self.disconnect()

    def connect(self) -> None:
        """Open the database file.

        Raises NotFoundError if the file is missing, since sqlite3 would
        otherwise create an empty database in its place.
        """
        if not Path(self.path).exists():
            raise NotFoundError(str(self.path))
        try:
            self.connection = self._connect(str(self.path))
        except sqlite3.Error as e:
            logging.error(f"Failed to open database: {e}")
            raise CatalogQueryError("connect", str(e)) from e
        self._owns_connection = True
        logging.info(f"Opened {self.path}")

    def disconnect(self) -> None:
        """Close the database connection if this object opened it."""
        if self.connection is not None and self._owns_connection:
            self.connection.close()
            self.connection = None
            self._owns_connection = False
            logging.debug("Database connection closed")

    def _cursor(self, query: str) -> sqlite3.Cursor:
        if self.connection is None:
            raise CatalogQueryError(query, "database connection is not open")
        try:
            return self.connection.cursor()
        except sqlite3.Error as e:
            raise CatalogQueryError(query, str(e)) from e

    def execute_query(self, query: str, params: Optional[tuple] = None) -> list[tuple]:
        """Execute a query and return results."""
        cursor = self._cursor(query)
        try:
            cursor.execute(query, params or ())
            return cursor.fetchall()
        except sqlite3.Error as e:
            raise CatalogQueryError(query, str(e)) from e
        finally:
            cursor.close()

    def iter_query(self, query: str) -> Iterator[tuple]:
        """Execute a query and yield rows one at a time."""
        cursor = self._cursor(query)
        try:
            try:
                cursor.execute(query)
            except sqlite3.Error as e:
                raise CatalogQueryError(query, str(e)) from e
            while True:
                try:
                    row = cursor.fetchone()
                except sqlite3.Error as e:
                    raise CatalogQueryError(query, str(e)) from e
                if row is None:
                    return
                yield row
        finally:
            cursor.close()

    def get_schemas(self, query: str) -> list[SchemaObject]:
        """Run a sqlite_master query returning (name, type, sql) rows."""
        return [
            SchemaObject(
                name=decode_cell(name),
                kind=ObjectKind(decode_cell(kind)),
                sql=decode_cell(sql)
            )
            for name, kind, sql in self.execute_query(query)
        ]

    def get_table_schemas(self) -> list[SchemaObject]:
        """Tables, ordered by name."""
        return self.get_schemas(TABLE_SCHEMAS_QUERY)

    def get_other_schemas(self) -> list[SchemaObject]:
        """Indexes, triggers and views, in catalog order."""
        return self.get_schemas(OTHER_SCHEMAS_QUERY)

    def get_table_columns(self, table: str) -> list[ColumnInfo]:
        """Get column information for a table."""
        results = self.execute_query(f"PRAGMA table_info({quote_identifier(table)})")
        return [
            ColumnInfo(
                cid=row[0],
                name=decode_cell(row[1]),
                type=decode_cell(row[2]),
                notnull=bool(row[3]),
                default=row[4],
                pk=row[5]
            )
            for row in results
        ]

    def build_insert_query(
        self,
        table: str,
        columns: list[str],
        explicit_columns: bool = False
    ) -> str:
        """Build a query whose rows are ready-made INSERT statements.

        Values are rendered by SQLite's quote() function inside the projection.
        """
        target = quote_identifier(table)
        if explicit_columns:
            target += "(" + ",".join(quote_identifier(c) for c in columns) + ")"
        prefix = sql_string_literal(f"INSERT INTO {target} VALUES(")
        values = " || ',' || ".join(f"quote({quote_identifier(c)})" for c in columns)
        return f"SELECT {prefix} || {values} || ')' FROM {quote_identifier(table)}"

    def get_insert_statements(
        self,
        table: str,
        columns: list[str],
        explicit_columns: bool = False
    ) -> Iterator[str]:
        """Yield one INSERT statement per row of a table."""
        query = self.build_insert_query(table, columns, explicit_columns)
        for row in self.iter_query(query):
            yield decode_cell(row[0])
