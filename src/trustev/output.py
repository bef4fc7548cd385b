"""Terminal rendering for the trustev CLI.

Decoded entities go to stdout and everything else (status lines, errors,
request traces) goes to stderr, so ``trustev --json decision ID | jq``
always sees clean JSON.

Entities are rendered from the pydantic models themselves, keyed by their
wire (Pascal-case) names so the output matches what the service sends:

* ``json``  -- the model dumped by alias.
* ``plain`` -- one ``Name<TAB>value`` line per field, for ``cut``/``awk``.
* ``rich``  -- a two-column field table.

Lists of entities (case statuses, profiles) are shown as tables with one
row per entity. Credential material is never passed to this module.
"""

from __future__ import annotations

import enum
import json
import os
import sys
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table


Row = Union[BaseModel, Mapping[str, Any]]


class OutputFormat(str, enum.Enum):
    """Values accepted by ``--json``/``--plain`` and ``output.format``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Renders entities on stdout and diagnostics on stderr.

    ``AUTO`` becomes ``RICH`` when stdout is a colour-capable terminal and
    ``PLAIN`` otherwise. ``quiet`` drops info/success lines; ``verbose``
    enables the dispatchers' request traces.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = (
            no_color
            or os.environ.get("NO_COLOR") is not None
            or os.environ.get("TERM") == "dumb"
        )
        self._quiet = quiet
        self._verbose = verbose
        if format == OutputFormat.AUTO:
            interactive = sys.stdout.isatty() and not self._no_color
            format = OutputFormat.RICH if interactive else OutputFormat.PLAIN
        self._format = format
        self._console = Console(file=sys.stdout, no_color=self._no_color, force_terminal=True)
        self._errors = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # ------------------------------------------------------------------ #
    # Entities (stdout)
    # ------------------------------------------------------------------ #

    def show(self, record: Optional[Row]) -> None:
        """Render one entity, or nothing when the service returned no body."""
        if record is None:
            return
        if self._format == OutputFormat.JSON:
            self._write(json.dumps(_jsonable(record), indent=2, ensure_ascii=False, default=str))
            return
        fields = _wire_fields(record)
        if self._format == OutputFormat.PLAIN:
            for name, value in fields.items():
                self._write(f"{name}\t{_cell(value)}")
        else:
            table = Table(show_header=False, box=None, pad_edge=False)
            table.add_column(style="bold cyan")
            table.add_column()
            for name, value in fields.items():
                table.add_row(name, _cell(value))
            self._console.print(table)

    def show_table(
        self,
        records: Sequence[Row],
        columns: Sequence[str],
        title: Optional[str] = None,
    ) -> None:
        """Render *records* one per row, picking *columns* by wire name."""
        rows = [[_cell(_wire_fields(record).get(column)) for column in columns] for record in records]
        if self._format == OutputFormat.JSON:
            self._write(json.dumps([dict(zip(columns, row)) for row in rows], indent=2, ensure_ascii=False))
        elif self._format == OutputFormat.PLAIN:
            self._write("\t".join(columns))
            for row in rows:
                self._write("\t".join(row))
        else:
            table = Table(title=title, header_style="bold cyan")
            for column in columns:
                table.add_column(column)
            for row in rows:
                table.add_row(*row)
            self._console.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._note(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._note(message, f"[green]{message}[/green]")

    def suggest(self, message: str) -> None:
        if not self._quiet:
            self._note(f"Try: {message}", f"[dim]Try: {message}[/dim]")

    def error(self, message: str) -> None:
        """Always shown, even with ``--quiet``."""
        self._note(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._note(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")

    def _write(self, line: str) -> None:
        print(line, file=sys.stdout, flush=True)

    def _note(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._errors.print(markup)


def _wire_fields(record: Row) -> dict[str, Any]:
    """Field values of *record* keyed by wire name, enums and dates kept as objects."""
    if isinstance(record, BaseModel):
        return {
            field.alias or name: getattr(record, name)
            for name, field in type(record).model_fields.items()
        }
    return dict(record)


def _cell(value: Any) -> str:
    """Text form of a field value: enum names, ISO dates, nested entities as JSON."""
    if value is None:
        return ""
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True, exclude_none=True)
    if isinstance(value, (dict, list)):
        return json.dumps(_jsonable(value), ensure_ascii=False, default=str)
    return str(value)


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    return value


# ------------------------------------------------------------------ #
# Process-wide manager, installed by the root CLI callback
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def show(record: Optional[Row]) -> None:
    get_output().show(record)


def show_table(records: Sequence[Row], columns: Sequence[str], title: Optional[str] = None) -> None:
    get_output().show_table(records, columns, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def error(message: str) -> None:
    get_output().error(message)
