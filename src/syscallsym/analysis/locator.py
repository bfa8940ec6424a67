"""Find instructions that enter the kernel."""

from __future__ import annotations

from typing import Callable, Iterator

from syscallsym.analysis.models import SyscallSite
from syscallsym.arch import Architecture
from syscallsym.extraction.instructions import Instruction, InstructionStream

LEGACY_SYSCALL_VECTOR = 0x80


def _is_syscall_instruction(insn: Instruction) -> bool:
    return insn.mnemonic == "syscall"


def _is_legacy_interrupt(insn: Instruction) -> bool:
    if insn.mnemonic != "int":
        return False
    operands = insn.operand_list()
    if len(operands) != 1:
        return False
    try:
        return int(operands[0], 0) == LEGACY_SYSCALL_VECTOR
    except ValueError:
        return False


_MATCHERS: dict[Architecture, Callable[[Instruction], bool]] = {
    Architecture.X86_64: _is_syscall_instruction,
    Architecture.X86: _is_legacy_interrupt,
}


def find_syscall_sites(
    stream: InstructionStream, architecture: Architecture
) -> Iterator[SyscallSite]:
    """Yield syscall sites in increasing address order."""
    matches = _MATCHERS[Architecture.parse(architecture)]
    for index, insn in enumerate(stream):
        if matches(insn):
            yield SyscallSite(address=insn.address, index=index)
