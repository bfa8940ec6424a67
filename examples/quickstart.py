"""syscallsym quickstart: resolve symbols for a binary using the library API."""

import sys
from pathlib import Path

from syscallsym import SyscallSymContext
from syscallsym.analysis.pipeline import resolve_symbols
from syscallsym.config.loader import load_config
from syscallsym.emission.symbols import to_objcopy_args
from syscallsym.extraction.elf_loader import detect_architecture, disassemble_elf
from syscallsym.extraction.functions import parse_function_list


def main():
    if len(sys.argv) != 3:
        print(f"usage: {sys.argv[0]} BINARY FUNCTION_LIST")
        return 1
    binary, function_list = Path(sys.argv[1]), Path(sys.argv[2])

    # 1. Load configuration
    ctx = SyscallSymContext()
    ctx.config = load_config()

    # 2. Disassemble and load the collaborator artifacts
    arch = detect_architecture(binary)
    stream = disassemble_elf(binary, arch)
    functions = parse_function_list(function_list.read_text())
    table = ctx.ensure_table(arch)

    # 3. Resolve
    report = resolve_symbols(stream, functions, table, arch, options=ctx.config.resolver)
    print(f"Sites: {report.sites_found}  resolved: {report.sites_resolved}  accepted: {report.accepted_count}")

    # 4. Hand the symbols to objcopy
    print(to_objcopy_args(report.symbols), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
