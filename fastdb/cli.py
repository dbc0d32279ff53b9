# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Inspect and edit a store file from the shell.
#
# COMMANDS:
# ---------
#   python -m fastdb users.fastdb insert '{"Name": "John", "ID": 1}'
#   python -m fastdb users get '{"Name": "John"}'
#   python -m fastdb users all
#   python -m fastdb users delete '{"Name": "John"}'
#   python -m fastdb users delete-all
#   python -m fastdb users count '{"ID": 1}'
#   python -m fastdb users exists '{"ID": 1}'
#   python -m fastdb users distinct Name
#   python -m fastdb users page 2 10
#   python -m fastdb users backup users-nightly
#
#   --defaults '{...}' sets the default record used by insert.
#
# EXIT CODES:
# -----------
#   0  success
#   1  operational error (reported on the store's error event)
#   2  usage error (bad JSON, empty query, bad page, ...)
#
# ==============================================

import argparse
import json
import sys
from dataclasses import replace
from typing import Any, List, Optional

from fastdb.backup import create_backup
from fastdb.config import get_config
from fastdb.database import Database
from fastdb.errors import FastDBError, UsageError
from fastdb.events import Event
from fastdb.log import configure_logging

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _json_object(text: str) -> dict:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise UsageError(f"Invalid JSON: {e}") from None
    if not isinstance(value, dict):
        raise UsageError("Expected a JSON object")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastdb",
        description="Query and edit a fastdb record store file."
    )
    parser.add_argument("path", help="Store file (.fastdb is appended if missing)")
    parser.add_argument("--defaults", default=None, help="Default record as a JSON object")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")

    commands = parser.add_subparsers(dest="command", required=True)

    insert = commands.add_parser("insert", help="Insert a record")
    insert.add_argument("data", help="Record fields as a JSON object")

    for name, help_text in (
        ("get", "Print the first matching record"),
        ("delete", "Delete matching records"),
        ("count", "Count matching records"),
        ("exists", "Check whether a record matches"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("query", help="Query as a JSON object")

    commands.add_parser("all", help="Print every record")
    commands.add_parser("delete-all", help="Delete every record")

    distinct = commands.add_parser("distinct", help="Distinct values of a field")
    distinct.add_argument("field")

    page = commands.add_parser("page", help="Print one page of records")
    page.add_argument("page", type=int)
    page.add_argument("page_size", type=int)

    backup = commands.add_parser("backup", help="Write a .fastdb-backup copy")
    backup.add_argument("destination")

    return parser


def _run(db: Database, args: argparse.Namespace) -> Any:
    command = args.command

    if command == "insert":
        return db.insert(_json_object(args.data))
    if command == "get":
        return db.get(_json_object(args.query))
    if command == "all":
        return db.get_all()
    if command == "delete":
        return db.delete(_json_object(args.query))
    if command == "delete-all":
        return db.delete_all()
    if command == "count":
        return db.count_entries(_json_object(args.query))
    if command == "exists":
        return db.data_exists(_json_object(args.query))
    if command == "distinct":
        return db.find_distinct(args.field)
    if command == "page":
        return db.paginate_data(args.page, args.page_size)
    if command == "backup":
        db.get_all()
        return create_backup(db, args.destination)

    raise UsageError(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    logging_config = config.logging
    if args.log_level:
        logging_config = replace(logging_config, level=args.log_level.upper())
    configure_logging(logging_config)

    try:
        defaults = _json_object(args.defaults) if args.defaults else None
    except UsageError as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_USAGE

    db = Database(args.path, defaults, config)

    errors: List[Exception] = []
    db.on(Event.ERROR, errors.append)

    try:
        result = _run(db, args)
    except UsageError as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_USAGE
    except (FastDBError, OSError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_FAILED

    if errors:
        for error in errors:
            print(f"✗ {error}", file=sys.stderr)
        if all(isinstance(error, UsageError) for error in errors):
            return EXIT_USAGE
        return EXIT_FAILED

    print(json.dumps(result, indent=config.store.indent, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
