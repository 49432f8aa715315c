#!/usr/bin/env python3
"""
SQLite Dumper - CLI Entry Point
===============================
Dumps a SQLite database as SQL text on stdout:

    sqlite3dump database.db > database.sql
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .config import ConfigLoader
from .dumper import Sqlite3Dumper
from .errors import DumpError
from .models import DumpConfig
from .utils import setup_logging

USAGE = "usage: sqlite3dump database.db > database.sql"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sqlite3dump',
        description='Dump a SQLite database as SQL statements'
    )
    parser.add_argument('database', help='Path to the SQLite database file')
    parser.add_argument(
        '-c', '--config',
        help='Path to a YAML configuration file'
    )
    parser.add_argument(
        '--migration',
        action='store_true',
        default=None,
        help='Skip CREATE TABLE statements (schema-only / migration mode)'
    )
    parser.add_argument(
        '--drop-if-exists',
        action='store_true',
        default=None,
        help='Emit DROP ... IF EXISTS statements before recreating objects'
    )
    parser.add_argument(
        '--no-transaction',
        dest='wrap_with_transaction',
        action='store_false',
        default=None,
        help='Do not wrap the dump in BEGIN TRANSACTION / COMMIT'
    )
    parser.add_argument(
        '--data',
        dest='include_data',
        action='store_true',
        default=None,
        help='Emit INSERT statements for table rows'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    dump_settings = {}
    log_settings = {'level': 'WARNING'}
    if args.config:
        try:
            config = ConfigLoader(args.config)
        except FileNotFoundError:
            print(f"Error: Configuration file '{args.config}' not found", file=sys.stderr)
            sys.exit(1)
        except (yaml.YAMLError, ValueError) as e:
            print(f"Error: Invalid configuration file: {e}", file=sys.stderr)
            sys.exit(1)
        dump_settings = config.get_dump_settings()
        log_settings.update(config.get_logging_settings())

    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    try:
        dump_config = DumpConfig.from_configs(dump_settings, {
            'migration': args.migration,
            'drop_if_exists': args.drop_if_exists,
            'wrap_with_transaction': args.wrap_with_transaction,
            'include_data': args.include_data,
        })
        Sqlite3Dumper(dump_config).dump(args.database, sys.stdout)
    except (DumpError, ValueError, OSError) as e:
        print(e, file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    print(f"dumped {Path(args.database).name}", file=sys.stderr)


if __name__ == '__main__':
    main()
