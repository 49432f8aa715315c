"""
Utility functions for SQLite Dumper.
"""

import logging
import sys
from pathlib import Path
from typing import Any


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration.

    Log records go to stderr; stdout is reserved for the dump itself.
    """
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def quote_identifier(name: str) -> str:
    """Quote an identifier, doubling embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


def sql_string_literal(text: str) -> str:
    """Render text as a single-quoted SQL string literal."""
    return "'" + text.replace("'", "''") + "'"
