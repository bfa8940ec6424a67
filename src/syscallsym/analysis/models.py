"""Frozen records passed between resolution stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SyscallSite:
    address: int
    index: int  # position in the InstructionStream


@dataclass(frozen=True)
class ResolvedSyscall:
    site_address: int
    syscall_number: int
    syscall_name: str


@dataclass(frozen=True)
class FunctionSyscallAssociation:
    function_address: int
    syscall_name: str
    site_address: int = 0


@dataclass(frozen=True)
class AcceptedAssociation:
    function_address: int
    syscall_name: str
