"""vxsig inspect: summarize a BinDiff result."""

from __future__ import annotations

from pathlib import Path

import typer


def inspect_cmd(
    diff_path: Path = typer.Argument(..., help="Path to a .BinDiff result file"),
    metadata: bool = typer.Option(True, "--metadata/--no-metadata", help="Read per-binary metadata"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Count function, basic block and instruction matches."""
    from vxsig.cli.app import EXIT_CODES, get_context
    from vxsig.diff.dispatch import CountingSink
    from vxsig.diff.errors import DiffResultError
    from vxsig.diff.reader import parse_diff_result
    from vxsig.utils.formatters import (
        metadata_rows,
        print_error,
        print_json,
        print_table,
        result_to_dict,
    )

    ctx = get_context()
    config = ctx.ensure_config()

    try:
        result = parse_diff_result(
            diff_path,
            CountingSink(),
            CountingSink(),
            CountingSink(),
            metadata_requested=metadata,
            config=config.reader,
        )
    except DiffResultError as exc:
        print_error(str(exc))
        raise typer.Exit(EXIT_CODES.get(exc.kind, 1))

    if output_json:
        print_json(result_to_dict(result))
        return

    print_table(
        [
            {"granularity": "function", "matches": result.function_matches},
            {"granularity": "basic block", "matches": result.basic_block_matches},
            {"granularity": "instruction", "matches": result.instruction_matches},
        ],
        title=str(diff_path),
    )
    if result.metadata is not None:
        print_table(metadata_rows(result.metadata), title="Binaries")
