"""Default configuration values and paths."""

from __future__ import annotations

from pathlib import Path

CONFIG_FILE_NAMES = [
    "syscallsym.yaml",
    "syscallsym.yml",
    ".syscallsym.yaml",
    ".syscallsym.yml",
]

CONFIG_SEARCH_PATHS = [
    Path.cwd(),
    Path.home() / ".config" / "syscallsym",
    Path.home(),
]

# Directories holding the kernel's asm/unistd_*.h headers on common distros.
DEFAULT_HEADER_SEARCH_PATHS = [
    "/usr/include/x86_64-linux-gnu",
    "/usr/include/i386-linux-gnu",
    "/usr/include",
]

DEFAULT_ARCHITECTURE = "x86_64"
DEFAULT_SYMBOL_PREFIX = "sys_"
DEFAULT_OUTPUT_FORMAT = "table"
DEFAULT_DISASSEMBLY_BACKEND = "capstone"
DEFAULT_OBJDUMP_TIMEOUT = 300
