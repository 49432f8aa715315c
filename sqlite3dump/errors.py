"""
Exception types raised by SQLite Dumper.
"""


class DumpError(Exception):
    """Base class for all dump failures."""


class NotFoundError(DumpError):
    """The database file to dump does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Database '{path}' does not exist")
        self.path = path


class CatalogQueryError(DumpError):
    """An introspection or data query failed to prepare or execute."""

    def __init__(self, query: str, reason: str):
        super().__init__(f"Query failed: {reason}")
        self.query = query
        self.reason = reason


class WriteError(DumpError):
    """Writing or flushing the output stream failed."""

    def __init__(self, statement: str, reason: str):
        super().__init__(f"Failed to write {statement!r}: {reason}")
        self.statement = statement
        self.reason = reason


class QuoteEncodingError(DumpError):
    """A result cell was neither text nor UTF-8 encoded bytes."""

    def __init__(self, value):
        super().__init__(f"Unexpected cell type {type(value).__name__}: {value!r}")
        self.value = value
