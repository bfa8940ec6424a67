"""Exception hierarchy for the resolution engine.

``UnsupportedArchitecture``, ``TableNotFound`` and ``DisassemblyError`` abort a
run. ``UnresolvableSite`` and ``UnattributableSyscall`` only ever drop a single
site; the pipeline catches them, counts them and moves on.
"""

from __future__ import annotations

from enum import Enum


class SyscallSymError(Exception):
    """Base class for all syscallsym errors."""


class UnsupportedArchitecture(SyscallSymError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported architecture: {name!r}")
        self.name = name


class TableNotFound(SyscallSymError, FileNotFoundError):
    def __init__(self, architecture: str, searched: tuple[str, ...] = ()) -> None:
        where = ", ".join(searched) if searched else "no candidate paths"
        super().__init__(f"No syscall table for {architecture} (searched: {where})")
        self.architecture = architecture
        self.searched = searched


class DisassemblyError(SyscallSymError):
    """An external disassembly collaborator failed to produce a listing."""


class DropReason(str, Enum):
    NO_ACCUMULATOR_LOAD = "no_accumulator_load"
    NON_IMMEDIATE_OPERAND = "non_immediate_operand"
    UNKNOWN_NUMBER = "unknown_number"
    NO_PRECEDING_FUNCTION = "no_preceding_function"


class UnresolvableSite(SyscallSymError):
    def __init__(self, address: int, reason: DropReason, detail: str = "") -> None:
        message = f"Syscall site {address:#x} unresolvable: {reason.value}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.address = address
        self.reason = reason
        self.detail = detail


class UnattributableSyscall(SyscallSymError):
    reason = DropReason.NO_PRECEDING_FUNCTION

    def __init__(self, address: int) -> None:
        super().__init__(f"No function entry precedes syscall site {address:#x}")
        self.address = address
