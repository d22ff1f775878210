"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors and tables
- Machine mode (--json): Structured JSON output for scripts and deploy tools

Example:
    from ..utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=is_json_output())
        out.success("Detected builders", count=3)
        out.records("Builders", ["src", "use"], [b.to_dict() for b in builders])
        raise typer.Exit(out.finish())
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.markup import escape
from rich.table import Table


class ExitCode:
    """Standardized exit codes for CLI commands.

    Scripts can check $? and know exactly what failed:
        0 = Success (including "nothing to build")
        1 = Detection error (ambiguous manifest, conflicting routes)
        2 = Project path not found
        3 = Unsupported Node.js version range
    """

    SUCCESS = 0
    DETECTION_ERROR = 1
    PATH_NOT_FOUND = 2
    UNSUPPORTED_RUNTIME = 3


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for pretty terminal output with colors and tables.
    In JSON mode: Collects structured data and outputs JSON at the end.

    Text derived from the project (paths, regexes) is escaped before printing
    since ``[name]`` segments would otherwise be read as Rich markup.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        # Ensure _data is a fresh dict for each instance
        self._data = {
            "status": "success",
            "warnings": [],
            "errors": [],
        }

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str, *, suggestion: str | None = None) -> None:
        """Output a warning message."""
        if self.json_mode:
            warning_obj: dict[str, Any] = {"message": message}
            if suggestion:
                warning_obj["suggestion"] = suggestion
            self._data["warnings"].append(warning_obj)
        else:
            self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")
            if suggestion:
                self.console.print(f"  [dim]→ {escape(suggestion)}[/dim]")

    def error(
        self,
        message: str,
        *,
        code: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.DETECTION_ERROR,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if code:
                error_obj["code"] = code
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            label = f"[bold]{escape(code)}[/bold]: " if code else ""
            self.console.print(f"[red]✗[/red] {label}{escape(message)}")
            if suggestion:
                self.console.print(f"  [dim]→ {escape(suggestion)}[/dim]")

    def renderable(self, renderable: Any) -> None:
        """Output any Rich renderable (human mode only)."""
        if not self.json_mode:
            self.console.print(renderable)

    def records(
        self,
        title: str,
        columns: list[str],
        records: list[dict[str, Any]],
        *,
        data_key: str | None = None,
    ) -> None:
        """Output a list of records.

        Human mode shows the given columns as a table; JSON mode keeps the
        complete records under ``data_key`` (defaults to snake_case of title).
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = records
            return

        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        for col in columns:
            table.add_column(col)
        for i, record in enumerate(records, 1):
            cells = [record.get(col) for col in columns]
            table.add_row(
                str(i), *("" if c is None else escape(str(c)) for c in cells)
            )
        self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Set arbitrary data in JSON output."""
        self._data[key] = value

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        Returns the exit code that should be passed to typer.Exit().
        """
        if self.json_mode:
            # Add exit_code to JSON for programmatic access
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code
