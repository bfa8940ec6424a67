"""syscallsym resolve / analyze-bin: run the engine and emit symbols."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

import typer

if TYPE_CHECKING:
    from syscallsym.analysis.pipeline import ResolutionReport
    from syscallsym.extraction.instructions import InstructionStream


def _output_format(fmt: Optional[str], output: Optional[Path]) -> str:
    """Resolve and check the output format before any work is done."""
    from syscallsym.cli.app import get_context
    from syscallsym.emission.symbols import SERIALIZERS

    fmt = fmt or get_context().ensure_config().emission.format
    if fmt != "table" and fmt not in SERIALIZERS:
        raise typer.BadParameter(f"Unknown format {fmt!r}; use table, json, csv or objcopy")
    if fmt == "table" and output is not None:
        raise typer.BadParameter("--output needs --format json, csv or objcopy")
    return fmt


def _emit(report: ResolutionReport, fmt: str, output: Optional[Path]) -> None:
    from syscallsym.emission.symbols import serialize
    from syscallsym.utils.formatters import print_success, print_summary, print_table

    print_summary(report.as_summary())

    if fmt == "table":
        print_table(
            [s.as_row() for s in report.symbols],
            title=f"Recovered symbols ({report.architecture.value})",
        )
        return

    text = serialize(list(report.symbols), fmt)
    if output is not None:
        output.write_text(text)
        print_success(f"Wrote {len(report.symbols)} symbol(s) to {output}")
    else:
        typer.echo(text, nl=False)


def _run(
    stream: InstructionStream,
    functions_path: Path,
    architecture: str,
    table: Optional[str],
    fmt: str,
    output: Optional[Path],
    prefix: Optional[str],
    stop_at_function_boundary: Optional[bool],
) -> None:
    from syscallsym.analysis.pipeline import resolve_symbols
    from syscallsym.cli.app import get_context
    from syscallsym.extraction.functions import parse_function_list

    ctx = get_context()
    cfg = ctx.ensure_config()

    syscall_table = ctx.ensure_table(architecture, table)
    functions = parse_function_list(functions_path.read_text())

    options = cfg.resolver
    if stop_at_function_boundary is not None:
        options = options.model_copy(update={"stop_at_function_boundary": stop_at_function_boundary})

    report = resolve_symbols(
        stream,
        functions,
        syscall_table,
        architecture,
        options=options,
        prefix=prefix if prefix is not None else cfg.emission.prefix,
    )
    _emit(report, fmt, output)


def _require_file(path: Path) -> None:
    from syscallsym.utils.formatters import print_error

    if not path.is_file():
        print_error(f"File not found: {path}")
        raise typer.Exit(1)


def resolve_cmd(
    disassembly: Path = typer.Argument(..., help="objdump -d -M intel listing of the binary"),
    functions: Path = typer.Argument(..., help="Function entry addresses, one per line"),
    arch: Optional[str] = typer.Option(None, "--arch", "-a", help="x86_64 or x86 (default from config)"),
    table: Optional[str] = typer.Option(None, "--table", "-t", help="Explicit asm/unistd_*.h header"),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="table, json, csv or objcopy"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write symbols to file"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Symbol name prefix (default sys_)"),
    stop_at_function_boundary: Optional[bool] = typer.Option(
        None,
        "--stop-at-function-boundary/--scan-across-functions",
        help="Bound the backward accumulator scan at the enclosing function entry",
    ),
) -> None:
    """Resolve syscall-based symbol names from a saved disassembly listing."""
    from syscallsym.cli.app import get_context
    from syscallsym.errors import SyscallSymError
    from syscallsym.extraction.instructions import parse_objdump
    from syscallsym.utils.formatters import print_error

    _require_file(disassembly)
    _require_file(functions)
    fmt = _output_format(fmt, output)

    architecture = arch or get_context().ensure_config().architecture
    try:
        stream = parse_objdump(disassembly.read_text(errors="replace"))
        _run(stream, functions, architecture, table, fmt, output, prefix, stop_at_function_boundary)
    except SyscallSymError as exc:
        print_error(str(exc))
        raise typer.Exit(1) from exc


def analyze_bin_cmd(
    binary: Path = typer.Argument(..., help="Path to the stripped ELF binary"),
    functions: Path = typer.Argument(..., help="Function entry addresses, one per line"),
    arch: Optional[str] = typer.Option(None, "--arch", "-a", help="Override the architecture read from the ELF header"),
    backend: Optional[str] = typer.Option(None, "--backend", "-b", help="capstone or objdump"),
    table: Optional[str] = typer.Option(None, "--table", "-t", help="Explicit asm/unistd_*.h header"),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="table, json, csv or objcopy"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write symbols to file"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Symbol name prefix (default sys_)"),
    stop_at_function_boundary: Optional[bool] = typer.Option(
        None,
        "--stop-at-function-boundary/--scan-across-functions",
        help="Bound the backward accumulator scan at the enclosing function entry",
    ),
) -> None:
    """Disassemble an ELF binary directly and resolve syscall-based symbol names."""
    from syscallsym.arch import Architecture
    from syscallsym.cli.app import get_context
    from syscallsym.errors import SyscallSymError
    from syscallsym.extraction.elf_loader import detect_architecture, disassemble_elf
    from syscallsym.extraction.instructions import parse_objdump
    from syscallsym.extraction.objdump_runner import run_objdump
    from syscallsym.utils.formatters import print_error

    _require_file(binary)
    _require_file(functions)
    fmt = _output_format(fmt, output)

    dis_cfg = get_context().ensure_config().disassembly
    backend = backend or dis_cfg.backend
    try:
        architecture = Architecture.parse(arch) if arch else detect_architecture(binary)
        if backend == "capstone":
            stream = disassemble_elf(binary, architecture)
        elif backend == "objdump":
            stream = parse_objdump(run_objdump(binary, dis_cfg.objdump_path, dis_cfg.timeout))
        else:
            raise typer.BadParameter(f"Unknown backend {backend!r}; use capstone or objdump")
        _run(stream, functions, architecture.value, table, fmt, output, prefix, stop_at_function_boundary)
    except SyscallSymError as exc:
        print_error(str(exc))
        raise typer.Exit(1) from exc
