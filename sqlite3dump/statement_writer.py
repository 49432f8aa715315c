"""
Statement emission for SQLite Dumper.
"""

import logging
from contextlib import closing
from typing import Iterable, Optional, TextIO

from .classifier import classify_table, is_system_table
from .connection import DatabaseConnection
from .errors import WriteError
from .models import DumpConfig, DumpStats, ObjectKind, SchemaObject, TableAction
from .utils import quote_identifier


class StatementWriter:
    """Writes SQL statements, one per line, to a text stream."""

    BEGIN = "BEGIN TRANSACTION"
    COMMIT = "COMMIT"
    RESET_SEQUENCE = 'DELETE FROM "sqlite_sequence"'
    ANALYZE = 'ANALYZE "sqlite_master"'

    def __init__(self, out: TextIO, config: DumpConfig, stats: DumpStats):
        self.out = out
        self.config = config
        self.stats = stats

    def write(self, statement: str) -> None:
        """Write a statement followed by ';' and a newline."""
        line = f"{statement};\n"
        try:
            self.out.write(line)
        except (OSError, ValueError) as e:
            raise WriteError(line, str(e)) from e

    def flush(self) -> None:
        try:
            self.out.flush()
        except (OSError, ValueError) as e:
            raise WriteError("<flush>", str(e)) from e

    def write_begin(self) -> None:
        if self.config.wrap_with_transaction:
            self.write(self.BEGIN)

    def write_commit(self) -> None:
        if self.config.wrap_with_transaction:
            self.write(self.COMMIT)

    @staticmethod
    def drop_statement(schema: SchemaObject) -> Optional[str]:
        """DROP statement for an object, or None when it is never dropped."""
        if schema.kind == ObjectKind.INDEX:
            return f"DROP INDEX IF EXISTS {quote_identifier(schema.name)}"
        if schema.kind == ObjectKind.TABLE and not is_system_table(schema.name):
            return f"DROP TABLE IF EXISTS {quote_identifier(schema.name)}"
        # Triggers and views are never dropped.
        return None

    def write_drops(self, schemas: Iterable[SchemaObject]) -> None:
        for schema in schemas:
            statement = self.drop_statement(schema)
            if statement is None:
                continue
            self.write(statement)
            self.stats.drop_statements += 1

    def write_tables(self, conn: DatabaseConnection, tables: Iterable[SchemaObject]) -> None:
        """Write the table phase.

        The sqlite_sequence reset is held back until every table has been
        created: replay only has that table once an AUTOINCREMENT table exists,
        and names such as "users" sort after it.
        """
        reset_sequence = False
        for schema in tables:
            action = classify_table(schema.name)
            logging.debug(f"Table '{schema.name}': {action.value}")

            if action == TableAction.RESET_SEQUENCE:
                reset_sequence = True
            elif action == TableAction.ANALYZE:
                self.write(self.ANALYZE)
            elif action.is_skipped:
                self.stats.tables_skipped += 1
            else:
                # Virtual tables are not re-registered; their CREATE passes through as-is.
                if not self.config.migration:
                    self.write(schema.sql)
                if self.config.include_data:
                    self.write_rows(conn, schema.name)
                self.stats.tables_dumped += 1

        if reset_sequence:
            self.write(self.RESET_SEQUENCE)

    def write_rows(self, conn: DatabaseConnection, table: str) -> None:
        """Write one INSERT per row; named columns in migration mode."""
        columns = [col.name for col in conn.get_table_columns(table)]
        rows = 0
        inserts = conn.get_insert_statements(
            table, columns, explicit_columns=self.config.migration
        )
        with closing(inserts):
            for insert in inserts:
                self.write(insert)
                rows += 1
        self.stats.rows_dumped += rows
        logging.debug(f"Table '{table}': {rows} rows")

    def write_others(self, others: Iterable[SchemaObject]) -> None:
        for schema in others:
            self.write(schema.sql)
            self.stats.other_objects += 1
