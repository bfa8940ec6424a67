"""Recover the syscall number loaded before each syscall site.

The scan is textual: walk backward from the site to the most recent ``mov``
into the accumulator and accept its source only when it is a hexadecimal
immediate. Values computed in registers or loaded from memory are not traced.
"""

from __future__ import annotations

import re

from syscallsym.analysis.models import ResolvedSyscall, SyscallSite
from syscallsym.errors import DropReason, UnresolvableSite
from syscallsym.extraction.instructions import Instruction, InstructionStream
from syscallsym.extraction.syscall_table import SyscallTable

ACCUMULATOR_REGISTERS = frozenset({"rax", "eax"})
_HEX_IMMEDIATE = re.compile(r"^0x[0-9a-f]+$", re.IGNORECASE)


def is_accumulator_load(insn: Instruction) -> bool:
    if insn.mnemonic != "mov":
        return False
    operands = insn.operand_list()
    return len(operands) == 2 and operands[0].lower() in ACCUMULATOR_REGISTERS


def find_accumulator_load(
    stream: InstructionStream,
    site: SyscallSite,
    stop_index: int = 0,
    max_backtrack: int | None = None,
) -> Instruction | None:
    """Most recent accumulator ``mov`` strictly before ``site``.

    ``stop_index`` is the earliest stream position the scan may reach.
    """
    for walked, insn in enumerate(stream.iter_backward(site.index, stop_index)):
        if max_backtrack is not None and walked >= max_backtrack:
            break
        if is_accumulator_load(insn):
            return insn
    return None


def parse_immediate(operand: str) -> int | None:
    operand = operand.strip()
    if not _HEX_IMMEDIATE.match(operand):
        return None
    return int(operand, 16)


def resolve_site(
    stream: InstructionStream,
    site: SyscallSite,
    table: SyscallTable,
    stop_index: int = 0,
    max_backtrack: int | None = None,
) -> ResolvedSyscall:
    """Resolve one site or raise UnresolvableSite naming why it was dropped."""
    load = find_accumulator_load(stream, site, stop_index, max_backtrack)
    if load is None:
        raise UnresolvableSite(site.address, DropReason.NO_ACCUMULATOR_LOAD)

    source = load.operand_list()[1]
    number = parse_immediate(source)
    if number is None:
        raise UnresolvableSite(
            site.address, DropReason.NON_IMMEDIATE_OPERAND, f"{load.address:#x}: {source}"
        )

    name = table.get(number)
    if name is None:
        raise UnresolvableSite(site.address, DropReason.UNKNOWN_NUMBER, str(number))

    return ResolvedSyscall(site_address=site.address, syscall_number=number, syscall_name=name)
