"""
Main dump orchestration for SQLite Dumper.

The statement sequence mirrors CPython's ``sqlite3.Connection.iterdump``:
BEGIN, optional drops, tables in name order, then indexes, triggers and
views in catalog order, then COMMIT.
"""

import logging
import sqlite3
import warnings
from pathlib import Path
from typing import Optional, TextIO, Union

from .classifier import drop_order
from .connection import DatabaseConnection
from .errors import NotFoundError
from .models import DumpConfig, DumpStats, Option, with_migration
from .statement_writer import StatementWriter

Handle = Union[sqlite3.Connection, DatabaseConnection]


class Sqlite3Dumper:
    """Dumps a SQLite database as SQL text."""

    def __init__(self, config: Optional[DumpConfig] = None):
        self.config = config or DumpConfig()

    def dump(self, source: Union[str, Path], out: TextIO) -> Optional[DumpStats]:
        """Dump the database file at ``source``.

        A missing file is not an error: nothing is written and None is returned.
        """
        try:
            with DatabaseConnection(str(source)) as conn:
                return self.dump_db(conn, out)
        except NotFoundError as e:
            logging.warning(f"{e}; nothing to dump")
            return None

    def dump_db(self, handle: Handle, out: TextIO) -> DumpStats:
        """Dump an open database. The handle is left open."""
        conn = handle
        if isinstance(handle, sqlite3.Connection):
            conn = DatabaseConnection.from_connection(handle)

        stats = DumpStats()
        writer = StatementWriter(out, self.config, stats)

        writer.write_begin()

        table_schemas = conn.get_table_schemas()
        other_schemas = conn.get_other_schemas()
        logging.debug(
            f"Catalog: {len(table_schemas)} table(s), {len(other_schemas)} other object(s)"
        )

        if self.config.drop_if_exists:
            writer.write_drops(drop_order(table_schemas, other_schemas))

        writer.write_tables(conn, table_schemas)
        writer.write_others(other_schemas)
        writer.write_commit()
        writer.flush()

        logging.info(
            f"Dumped {stats.tables_dumped} table(s), {stats.other_objects} other object(s), "
            f"{stats.rows_dumped} row(s)"
        )
        return stats


def dump(source: Union[str, Path], out: TextIO, *options: Option) -> Optional[DumpStats]:
    """Dump the database file at ``source`` into ``out``."""
    return Sqlite3Dumper(DumpConfig.from_options(*options)).dump(source, out)


def dump_db(handle: Handle, out: TextIO, *options: Option) -> DumpStats:
    """Dump an already open database into ``out``."""
    return Sqlite3Dumper(DumpConfig.from_options(*options)).dump_db(handle, out)


def dump_migration(handle: Handle, out: TextIO) -> DumpStats:
    """Deprecated: use ``dump_db(handle, out, with_migration())``."""
    warnings.warn(
        "dump_migration() is deprecated, use dump_db(..., with_migration())",
        DeprecationWarning,
        stacklevel=2
    )
    return dump_db(handle, out, with_migration())
