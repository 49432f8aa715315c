"""
Classification of catalog tables for the table and drop phases.
"""

from .models import SchemaObject, TableAction

SYSTEM_TABLE_PREFIX = "sqlite_"
SEQUENCE_TABLE = "sqlite_sequence"
LEGACY_STAT_TABLE = "sqlite3_stat1"

# Shadow tables created and maintained by FTS3/4/5 virtual tables.
FTS_SHADOW_SUFFIXES = (
    "_segments",
    "_segdir",
    "_stat",
    "_idx",
    "_docsize",
    "_config",
    "_data",
    "_content",
)


def is_system_table(name: str) -> bool:
    return name.startswith(SYSTEM_TABLE_PREFIX)


def is_fts_shadow_table(name: str) -> bool:
    return name.endswith(FTS_SHADOW_SUFFIXES)


def classify_table(name: str) -> TableAction:
    """
    Decide how the table phase treats a table.

    Rules are checked in order, so the bookkeeping tables win over the
    generic system prefix.
    """
    if name == SEQUENCE_TABLE:
        return TableAction.RESET_SEQUENCE
    if name == LEGACY_STAT_TABLE:
        return TableAction.ANALYZE
    if is_system_table(name):
        return TableAction.SKIP_SYSTEM
    if is_fts_shadow_table(name):
        return TableAction.SKIP_FTS_SHADOW
    return TableAction.ORDINARY


def drop_order(
    tables: list[SchemaObject],
    others: list[SchemaObject]
) -> list[SchemaObject]:
    """Objects to consider for the drop phase: indexes/triggers/views, then tables."""
    return [*others, *tables]
