"""Root Typer application with subcommand registration."""

from __future__ import annotations

from typing import Optional

import typer

from syscallsym import SyscallSymContext, __version__

app = typer.Typer(
    name="syscallsym",
    help="syscallsym: recover function names in stripped binaries from their raw syscalls",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Shared state across commands
_ctx = SyscallSymContext()


def get_context() -> SyscallSymContext:
    return _ctx


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"syscallsym {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Optional[str] = typer.Option(None, "--config", "-C", help="Path to syscallsym.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging (per-site drop reasons)"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True
    ),
) -> None:
    """syscallsym: recover function names in stripped binaries from their raw syscalls."""
    from syscallsym.config.loader import load_config
    from syscallsym.utils.formatters import print_error
    from syscallsym.utils.logging import setup_logging

    setup_logging(level="DEBUG" if verbose else "WARNING", json_output=json_logs)
    try:
        _ctx.config = load_config(config)
    except (FileNotFoundError, ValueError) as exc:
        print_error(str(exc))
        raise typer.Exit(1) from exc


# -- Subcommand registration --
from syscallsym.cli.resolve import analyze_bin_cmd, resolve_cmd  # noqa: E402
from syscallsym.cli.table import table_cmd  # noqa: E402

app.command(name="resolve")(resolve_cmd)
app.command(name="analyze-bin")(analyze_bin_cmd)
app.command(name="table")(table_cmd)
