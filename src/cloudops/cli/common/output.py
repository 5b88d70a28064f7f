"""Output formatting utilities for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def raw(self, text: str) -> None:
        """Print text verbatim, without markup, emoji codes or wrapping."""
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}", highlight=False)

    def apis_table(self, apis: Iterable[Any], title: str = "APIs") -> None:
        """
        Expects objects with .id .type .name .identity_name
        (like cloudops.core.apis.ApiMetadata)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("ID", style="ok", no_wrap=True)
        t.add_column("Type", style="meta")
        t.add_column("Name")
        t.add_column("Identity", style="meta")

        for a in apis:
            api_type = a.type.value if a.type is not None else ""
            t.add_row(str(a.id), api_type, a.name or "", a.identity_name or "")

        console.print(t)

    def extractions_table(
        self, extractions: Iterable[Any], title: str = "Extractions"
    ) -> None:
        """
        Render CloudStack template extractions.

        Expects objects with .id .name .extract_mode .status
        .upload_percentage .zone_name
        (like cloudops.core.cloudstack.TemplateExtraction)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("ID", style="ok", no_wrap=True)
        t.add_column("Name")
        t.add_column("Mode", style="meta")
        t.add_column("Status")
        t.add_column("Uploaded", justify="right")
        t.add_column("Zone", style="meta")

        for e in extractions:
            mode = e.extract_mode.value if e.extract_mode is not None else ""
            t.add_row(
                str(e.id),
                e.name or "",
                mode,
                e.status or "",
                f"{e.upload_percentage}%",
                e.zone_name or "",
            )

        console.print(t)


out = Out()
