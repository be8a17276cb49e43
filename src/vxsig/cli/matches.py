"""vxsig matches: list address pairs from one match table."""

from __future__ import annotations

from itertools import islice
from pathlib import Path

import typer

from vxsig.config.defaults import DEFAULT_MATCH_LIMIT


def matches_cmd(
    diff_path: Path = typer.Argument(..., help="Path to a .BinDiff result file"),
    granularity: str = typer.Option(
        "function", "--granularity", "-g", help="function, basic-block or instruction"
    ),
    limit: int = typer.Option(DEFAULT_MATCH_LIMIT, "--limit", "-l", min=0, help="Max pairs to show"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the first matches of one granularity in storage order."""
    from vxsig.cli.app import EXIT_CODES, get_context
    from vxsig.diff.cursor import query_matches
    from vxsig.diff.errors import DiffResultError
    from vxsig.diff.models import Granularity, format_address
    from vxsig.diff.queries import MATCH_COLUMNS
    from vxsig.diff.store import open_store
    from vxsig.utils.formatters import print_error, print_json, print_table

    ctx = get_context()
    reader = ctx.ensure_config().reader

    try:
        selected = Granularity.from_label(granularity)
    except ValueError as exc:
        print_error(str(exc))
        raise typer.Exit(1)

    try:
        with open_store(diff_path, timeout=reader.timeout_seconds) as store:
            store.validate_schema({selected.table: MATCH_COLUMNS})
            cursor = query_matches(store, selected, address_width=reader.address_width)
            try:
                pairs = list(islice(cursor, limit))
            finally:
                cursor.close()
    except DiffResultError as exc:
        print_error(str(exc))
        raise typer.Exit(EXIT_CODES.get(exc.kind, 1))

    rows = [
        {"primary": format_address(p.primary), "secondary": format_address(p.secondary)}
        for p in pairs
    ]
    if output_json:
        print_json(rows)
    else:
        print_table(rows, title=f"{selected.label} matches")
