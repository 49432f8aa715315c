"""
SQLite Dumper
=============
Dumps a SQLite database as SQL text that rebuilds it when replayed:
- Tables in name order, then indexes, triggers and views
- Migration (schema-only) mode
- Optional DROP ... IF EXISTS pre-phase
- Optional BEGIN/COMMIT envelope
- Optional row data as INSERT statements
"""

from .config import ConfigLoader
from .connection import DatabaseConnection
from .dumper import Sqlite3Dumper, dump, dump_db, dump_migration
from .errors import (
    CatalogQueryError,
    DumpError,
    NotFoundError,
    QuoteEncodingError,
    WriteError,
)
from .main import main
from .models import (
    ColumnInfo,
    DumpConfig,
    DumpStats,
    ObjectKind,
    SchemaObject,
    TableAction,
    with_data,
    with_drop_if_exists,
    with_migration,
    without_transaction,
)
from .statement_writer import StatementWriter
from .utils import quote_identifier, setup_logging

__version__ = "1.0.0"

__all__ = [
    # Main entry points
    "main",
    "dump",
    "dump_db",
    "dump_migration",
    # Core classes
    "ConfigLoader",
    "DatabaseConnection",
    "Sqlite3Dumper",
    "StatementWriter",
    # Models
    "ColumnInfo",
    "DumpConfig",
    "DumpStats",
    "ObjectKind",
    "SchemaObject",
    "TableAction",
    # Options
    "with_data",
    "with_drop_if_exists",
    "with_migration",
    "without_transaction",
    # Errors
    "CatalogQueryError",
    "DumpError",
    "NotFoundError",
    "QuoteEncodingError",
    "WriteError",
    # Utilities
    "quote_identifier",
    "setup_logging",
]
