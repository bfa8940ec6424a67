"""Syscall number -> name tables parsed from kernel ``asm/unistd_*.h`` headers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Sequence

from syscallsym.arch import Architecture
from syscallsym.errors import TableNotFound
from syscallsym.utils.logging import get_logger

log = get_logger(__name__)

_DEFINE_NR = re.compile(r"^\s*#\s*define\s+__NR_(\w+)\s+(.+?)\s*$")


@dataclass(frozen=True)
class SyscallTableEntry:
    number: int
    name: str


class SyscallTable(Mapping[int, str]):
    """Read-only mapping of syscall number to name for one architecture."""

    def __init__(
        self,
        architecture: Architecture,
        entries: Iterable[SyscallTableEntry],
        source: str = "",
    ) -> None:
        self.architecture = architecture
        self.source = source
        self._names: dict[int, str] = {}
        for entry in entries:
            # first definition of a number wins; later aliases are ignored
            self._names.setdefault(entry.number, entry.name)

    def __getitem__(self, number: int) -> str:
        return self._names[number]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def entries(self) -> list[SyscallTableEntry]:
        return [SyscallTableEntry(number=n, name=self._names[n]) for n in self]


def _parse_number(literal: str) -> int | None:
    literal = literal.strip()
    if literal.startswith("(") and literal.endswith(")"):
        literal = literal[1:-1].strip()
    try:
        return int(literal, 0)
    except ValueError:
        # symbolic definitions such as (__NR_SYSCALL_BASE + 1)
        return None


def parse_unistd_header(text: str) -> list[SyscallTableEntry]:
    """Extract ``#define __NR_<name> <number>`` definitions from header text."""
    entries: list[SyscallTableEntry] = []
    for line in text.splitlines():
        match = _DEFINE_NR.match(line)
        if match is None:
            continue
        number = _parse_number(match.group(2))
        if number is None or number < 0:
            continue
        entries.append(SyscallTableEntry(number=number, name=match.group(1)))
    return entries


def candidate_paths(
    architecture: Architecture,
    search_paths: Sequence[str | Path] = (),
    explicit: str | Path | None = None,
) -> list[Path]:
    """Header locations to try, in order."""
    candidates: list[Path] = []
    if explicit is not None:
        candidates.append(Path(explicit).expanduser())
    for directory in search_paths:
        candidates.append(Path(directory).expanduser() / architecture.unistd_header)
    return candidates


def load_syscall_table(
    architecture: str | Architecture,
    search_paths: Sequence[str | Path] = (),
    explicit: str | Path | None = None,
) -> SyscallTable:
    """Load the syscall table for ``architecture``.

    An ``explicit`` header replaces ``search_paths`` entirely. Raises
    UnsupportedArchitecture for an unknown identifier and TableNotFound when no
    candidate header exists or defines any syscall.
    """
    arch = Architecture.parse(architecture)
    if explicit is not None:
        candidates = candidate_paths(arch, explicit=explicit)
    else:
        candidates = candidate_paths(arch, search_paths)

    for path in candidates:
        if not path.is_file():
            continue
        entries = parse_unistd_header(path.read_text(errors="replace"))
        if not entries:
            log.warning("syscall_header_empty", path=str(path))
            continue
        table = SyscallTable(arch, entries, source=str(path))
        log.info("syscall_table_loaded", architecture=arch.value, path=str(path), syscalls=len(table))
        return table

    raise TableNotFound(arch.value, tuple(str(p) for p in candidates))
