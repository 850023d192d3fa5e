# qlg

A small terminal tool for jotting down quick notes. Notes are sorted into categories, can carry tags, and belong to a project. Everything is kept in a local SQLite database (`qlg.db`) in your user data directory.

## Installation

```
pip install .
```

## Getting started

Notes are always written to the current project, so set one first:

```
qlg project set myproject
```

To log a note, give a category and then the message. Add tags with `-t` or `--tag`:

```
qlg ideas try caching the parser output -t perf --tag parser
```

Any first word that is not one of the commands below is taken as a category.

## Commands

| Command | What it does |
| --- | --- |
| `qlg <category> <message...> [-t tag]...` | Log a message under a category in the current project |
| `qlg list` | List all projects, sorted by name |
| `qlg project set <name>` | Create the project if it does not exist yet and make it current |
| `qlg project delete <name>` | Delete a project and its logs; if it was current, no project is current afterwards |
| `qlg show [category]` | Show the logs in a category, or all logs, newest first |
| `qlg search [query] [-t tag]` | Find logs whose message contains the query, optionally only those with a tag |
| `qlg remove <id>` | Remove a log entry and its tags by its ID |
| `qlg export <json\|md\|markdown> <directory>` | Export the current project's logs, oldest first, to `jlog_export.json` or `jlog_export.md` in the directory |
| `qlg import <file.json>` | Import logs from a JSON file into the current project |
| `qlg help` | Show the help text |

Logs are printed like this:

```
[3] 2024-05-01 14:32 ideas: try caching the parser output #perf #parser
```

New notes are stamped with the current time in UTC. The time shown is the wall-clock time stored in the timestamp; no time-zone conversion is done.

Commands that need a current project fail with an error and exit status 1 when none is set.

## Database location

By default the database lives in the user data directory that `platformdirs` reports for `qlg`. Set the `QLG_DB` environment variable to a file path to use a different database:

```
QLG_DB=/tmp/notes.db qlg show
```

## Import format

An import file must end in `.json` and hold a JSON array of objects. Each object has `category`, `message` and an RFC 3339 `timestamp`, and can have a list of `tags`:

```json
[
  {
    "category": "ideas",
    "message": "try caching the parser output",
    "timestamp": "2024-05-01T14:32:00+00:00",
    "tags": ["perf"]
  }
]
```

The whole file is checked before anything is added; a malformed entry or timestamp stops the import. A JSON export uses the same format, so it can be imported again.

A Markdown export writes one section per log:

```
### [2024-05-01 14:32] ideas #perf
try caching the parser output
```

## Using it from Python

- `qlg.store.Store(path)` opens (and creates) a database; it is a context manager. It manages projects (`set_current_project`, `delete_project`, `list_projects`) and the current-project state.
- `qlg.logs` has `add_log`, `fetch_logs`, `search_logs`, `delete_log`, `export_entries`, `render_json`, `render_markdown`, `export_json`, `export_markdown` and `import_json`, working on `LogEntry` records.
- `qlg.formatting.format_log_entry` renders a log as the one-line form shown above.
- `qlg.cli.main(argv)` runs the command line and returns the exit status.

## Development

```
pip install -e ".[test]"
pytest
```