"""syscallsym table: show the syscall numbering the engine resolves against."""

from __future__ import annotations

from typing import Optional

import typer


def table_cmd(
    arch: Optional[str] = typer.Option(None, "--arch", "-a", help="x86_64 or x86 (default from config)"),
    table: Optional[str] = typer.Option(None, "--table", "-t", help="Explicit asm/unistd_*.h header"),
) -> None:
    """Print the syscall number -> name table for an architecture."""
    from syscallsym.cli.app import get_context
    from syscallsym.errors import SyscallSymError
    from syscallsym.utils.formatters import print_error, print_table

    ctx = get_context()
    architecture = arch or ctx.ensure_config().architecture
    try:
        syscalls = ctx.ensure_table(architecture, table)
    except SyscallSymError as exc:
        print_error(str(exc))
        raise typer.Exit(1) from exc

    print_table(
        [{"number": e.number, "name": e.name} for e in syscalls.entries()],
        title=f"{syscalls.architecture.value} syscalls ({syscalls.source})",
    )
