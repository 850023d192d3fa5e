"""Command-line interface for logging quick notes."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Callable
from pathlib import Path

from qlg import logs
from qlg.formatting import format_log_entry
from qlg.store import NoActiveProjectError, Store

_COMMANDS = frozenset(
    {"list", "project", "show", "export", "import", "remove", "search", "help"}
)
_LOG_USAGE = "Usage: qlg <category> <message> [-t tag]"
_DB_ENV = "QLG_DB"


def parse_log_args(args: list[str]) -> tuple[str, str, list[str]]:
    """Split ``<category> <message words...> [-t tag]...`` into its parts."""
    if len(args) < 2:
        raise ValueError(_LOG_USAGE)
    category, *rest = args
    words: list[str] = []
    tags: list[str] = []
    items = iter(rest)
    for arg in items:
        if arg in ("-t", "--tag"):
            tag = next(items, None)
            if tag is not None:
                tags.append(tag)
        else:
            words.append(arg)
    return category, " ".join(words), tags


def export_filename(fmt: str) -> str:
    """Return the export file name for a format, or raise ValueError."""
    if fmt in ("md", "markdown"):
        return "jlog_export.md"
    if fmt == "json":
        return "jlog_export.json"
    raise ValueError(f"Unsupported format: '{fmt}'")


def _open_store() -> Store:
    return Store(os.environ.get(_DB_ENV) or None)


def _with_store(action: Callable[[Store], None]) -> int:
    try:
        with _open_store() as store:
            action(store)
    except (NoActiveProjectError, logs.ImportFormatError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def _print_entries(entries: list[logs.LogEntry]) -> None:
    for entry in entries:
        print(
            format_log_entry(
                entry.log_id, entry.timestamp, entry.category, entry.message, entry.tags
            )
        )


def _cmd_log(args: list[str]) -> int:
    try:
        category, message, tags = parse_log_args(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return _with_store(lambda store: logs.add_log(store, category, message, tags))


def _cmd_list(ns: argparse.Namespace) -> int:
    def action(store: Store) -> None:
        projects = store.list_projects()
        if not projects:
            print("No projects found.")
            return
        print("Projects:")
        for name in projects:
            print(f"- {name}")

    return _with_store(action)


def _cmd_project_set(ns: argparse.Namespace) -> int:
    def action(store: Store) -> None:
        store.set_current_project(ns.name)
        print(f"Current project set to '{ns.name}'")

    return _with_store(action)


def _cmd_project_delete(ns: argparse.Namespace) -> int:
    def action(store: Store) -> None:
        store.delete_project(ns.name)
        print(f"Deleted project '{ns.name}'")

    return _with_store(action)


def _cmd_show(ns: argparse.Namespace) -> int:
    return _with_store(lambda store: _print_entries(logs.fetch_logs(store, ns.category)))


def _cmd_export(ns: argparse.Namespace) -> int:
    directory = Path(ns.path)
    if not directory.is_dir():
        print("Export path must be a directory", file=sys.stderr)
        return 1
    try:
        target = directory / export_filename(ns.format)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    writer = logs.export_json if ns.format == "json" else logs.export_markdown

    def action(store: Store) -> None:
        writer(store, target)
        print(f"Exported logs to {target}")

    return _with_store(action)


def _cmd_import(ns: argparse.Namespace) -> int:
    path = Path(ns.path)
    if path.suffix != ".json":
        print("Unsupported import file (expected .json)", file=sys.stderr)
        return 1

    def action(store: Store) -> None:
        count = logs.import_json(store, path)
        print(f"Imported {count} logs from JSON")

    return _with_store(action)


def _cmd_remove(ns: argparse.Namespace) -> int:
    def action(store: Store) -> None:
        logs.delete_log(store, ns.id)
        print(f"Deleted log with ID {ns.id}")

    return _with_store(action)


def _cmd_search(ns: argparse.Namespace) -> int:
    return _with_store(
        lambda store: _print_entries(logs.search_logs(store, ns.query, ns.tag))
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qlg", description="Log quick notes. Usage: qlg <category> <message>."
    )
    commands = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    listing = commands.add_parser("list", help="List all projects")
    listing.set_defaults(handler=_cmd_list)

    project = commands.add_parser("project", help="Manage projects (set/delete)")
    project_commands = project.add_subparsers(dest="action", required=True)
    set_cmd = project_commands.add_parser("set", help="Set the current project")
    set_cmd.add_argument("name")
    set_cmd.set_defaults(handler=_cmd_project_set)
    delete_cmd = project_commands.add_parser("delete", help="Delete a project")
    delete_cmd.add_argument("name")
    delete_cmd.set_defaults(handler=_cmd_project_delete)

    show = commands.add_parser(
        "show", help="Show logs by category, or all logs if no category is provided"
    )
    show.add_argument("category", nargs="?", help="Optional category to filter logs")
    show.set_defaults(handler=_cmd_show)

    export = commands.add_parser("export", help="Export logs in JSON or Markdown format")
    export.add_argument("format", help="Export format: json or md")
    export.add_argument("path", help="Target directory path")
    export.set_defaults(handler=_cmd_export)

    importing = commands.add_parser("import", help="Import logs from a JSON file")
    importing.add_argument("path", help="Path to the JSON file")
    importing.set_defaults(handler=_cmd_import)

    remove = commands.add_parser("remove", help="Remove a log entry by ID")
    remove.add_argument("id", type=int, help="ID of the log to remove")
    remove.set_defaults(handler=_cmd_remove)

    search = commands.add_parser("search", help="Search logs by query and optional tag")
    search.add_argument("query", nargs="?", default="", help="Message content to search for")
    search.add_argument("-t", "--tag", help="Tag to filter by")
    search.set_defaults(handler=_cmd_search)

    commands.add_parser("help", help="Show this help")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] not in _COMMANDS and not args[0].startswith("-"):
        return _cmd_log(args)
    parser = _build_parser()
    ns = parser.parse_args(args)
    if ns.command == "help":
        parser.print_help()
        return 0
    return ns.handler(ns)


if __name__ == "__main__":
    sys.exit(main())