"""
Data models and enums for SQLite Dumper.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Callable, Optional


class ObjectKind(Enum):
    """Kinds of objects listed in the schema catalog."""
    TABLE = "table"
    INDEX = "index"
    TRIGGER = "trigger"
    VIEW = "view"


class TableAction(Enum):
    """What the table phase does with a catalog table."""
    RESET_SEQUENCE = "reset_sequence"
    ANALYZE = "analyze"
    SKIP_SYSTEM = "skip_system"
    SKIP_FTS_SHADOW = "skip_fts_shadow"
    ORDINARY = "ordinary"

    @property
    def is_skipped(self) -> bool:
        return self in (TableAction.SKIP_SYSTEM, TableAction.SKIP_FTS_SHADOW)


@dataclass(frozen=True)
class SchemaObject:
    """One entry of the sqlite_master catalog."""
    name: str
    kind: ObjectKind
    sql: str


@dataclass(frozen=True)
class ColumnInfo:
    """Table column metadata, as reported by PRAGMA table_info."""
    cid: int
    name: str
    type: str
    notnull: bool
    default: Any
    pk: int


@dataclass
class DumpStats:
    """Statistics for a single database dump."""
    tables_dumped: int = 0
    tables_skipped: int = 0
    rows_dumped: int = 0
    other_objects: int = 0
    drop_statements: int = 0


Option = Callable[["DumpConfig"], "DumpConfig"]


@dataclass(frozen=True)
class DumpConfig:
    """Settings for one dump run."""
    migration: bool = False
    drop_if_exists: bool = False
    wrap_with_transaction: bool = True
    include_data: bool = False

    @classmethod
    def from_options(cls, *options: Option) -> "DumpConfig":
        """Apply functional options in order; repeated options are last-wins."""
        config = cls()
        for option in options:
            config = option(config)
        return config

    @classmethod
    def from_configs(
        cls,
        defaults: dict[str, Any],
        overrides: Optional[dict[str, Any]] = None
    ) -> "DumpConfig":
        """
        Create DumpConfig by merging configs with priority: overrides > defaults.
        """
        known = {f.name for f in fields(cls)}
        settings = {}
        for source in (defaults, overrides or {}):
            unknown = set(source) - known
            if unknown:
                raise ValueError(f"Unknown dump settings: {', '.join(sorted(unknown))}")
            for key, value in source.items():
                if value is None:
                    continue
                if not isinstance(value, bool):
                    raise ValueError(f"Dump setting '{key}' must be true or false, got {value!r}")
                settings[key] = value
        return cls(**settings)


def with_migration(enabled: bool = True) -> Option:
    """Skip CREATE TABLE statements and name columns in row inserts."""
    return lambda config: replace(config, migration=enabled)


def with_drop_if_exists(enabled: bool = True) -> Option:
    """Emit DROP ... IF EXISTS for existing indexes and tables first."""
    return lambda config: replace(config, drop_if_exists=enabled)


def without_transaction(enabled: bool = True) -> Option:
    """Leave out the BEGIN TRANSACTION / COMMIT envelope."""
    return lambda config: replace(config, wrap_with_transaction=not enabled)


def with_data(enabled: bool = True) -> Option:
    """Emit one INSERT statement per row of every ordinary table."""
    return lambda config: replace(config, include_data=enabled)
