"""Root Typer application with subcommand registration."""

from __future__ import annotations

from typing import Optional

import typer

from vxsig import VxsigContext, __version__

app = typer.Typer(
    name="vxsig",
    help="vxsig: inspect BinDiff results used for signature synthesis",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_ctx = VxsigContext()

# Exit status per error kind; anything else unexpected stays at 1.
EXIT_CODES = {
    "not_found": 2,
    "io_error": 3,
    "schema_error": 4,
    "callback_error": 5,
}


def get_context() -> VxsigContext:
    return _ctx


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vxsig {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Optional[str] = typer.Option(None, "--config", "-C", help="Path to vxsig.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True
    ),
) -> None:
    """vxsig: inspect BinDiff results used for signature synthesis."""
    from vxsig.config.loader import load_config
    from vxsig.utils.logging import setup_logging_from_config

    _ctx.config = load_config(config)
    setup_logging_from_config(_ctx.config.logging, verbose=verbose)


# -- Subcommand registration --
from vxsig.cli.inspect import inspect_cmd  # noqa: E402
from vxsig.cli.matches import matches_cmd  # noqa: E402

app.command(name="inspect")(inspect_cmd)
app.command(name="matches")(matches_cmd)
