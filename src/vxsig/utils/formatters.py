"""Rich output formatters for CLI display."""

from __future__ import annotations

import json
from typing import Any, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vxsig.diff.models import MetadataPair, ParseResult

console = Console()
err_console = Console(stderr=True)


def print_table(
    rows: Sequence[dict[str, Any]],
    title: str | None = None,
    columns: Sequence[str] | None = None,
) -> None:
    """Render a list of dicts as a Rich table."""
    if not rows:
        console.print("[dim]No results.[/dim]")
        return

    cols = columns or list(rows[0].keys())
    table = Table(title=title)
    for col in cols:
        table.add_column(col, overflow="fold")

    for row in rows:
        table.add_row(*(str(row.get(c, "")) for c in cols))

    console.print(table)


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str, indent=2))


def metadata_rows(metadata: MetadataPair) -> list[dict[str, str]]:
    return [
        {
            "role": role,
            "name": record.name,
            "original_name": record.original_name,
            "hash": record.content_hash,
        }
        for role, record in (("primary", metadata.primary), ("secondary", metadata.secondary))
    ]


def result_to_dict(result: ParseResult) -> dict[str, Any]:
    data: dict[str, Any] = {
        "path": result.path,
        "matches": {
            "function": result.function_matches,
            "basic_block": result.basic_block_matches,
            "instruction": result.instruction_matches,
        },
    }
    if result.metadata is not None:
        data["metadata"] = metadata_rows(result.metadata)
    return data


def print_error(msg: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(msg)}")
