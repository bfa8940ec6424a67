"""Direct ELF disassembly using pyelftools + capstone, no objdump required."""

from __future__ import annotations

from pathlib import Path

from capstone import CS_ARCH_X86, CS_MODE_32, CS_MODE_64, CS_OPT_SYNTAX_INTEL, Cs, CsInsn
from capstone.x86 import X86_OP_IMM
from elftools.common.exceptions import ELFError
from elftools.elf.constants import SH_FLAGS
from elftools.elf.elffile import ELFFile

from syscallsym.arch import Architecture
from syscallsym.errors import DisassemblyError, UnsupportedArchitecture
from syscallsym.extraction.instructions import Instruction, InstructionStream
from syscallsym.utils.logging import get_logger

log = get_logger(__name__)

_MACHINES = {
    "EM_X86_64": Architecture.X86_64,
    "EM_386": Architecture.X86,
}


def detect_architecture(path: Path) -> Architecture:
    """Read the ELF header and map ``e_machine`` to a supported architecture."""
    try:
        with open(path, "rb") as f:
            machine = ELFFile(f).header.e_machine
    except (OSError, ELFError) as exc:
        raise DisassemblyError(f"Cannot read ELF header of {path}: {exc}") from exc

    try:
        return _MACHINES[machine]
    except KeyError:
        raise UnsupportedArchitecture(str(machine)) from None


def _create_disassembler(architecture: Architecture) -> Cs:
    mode = CS_MODE_64 if architecture is Architecture.X86_64 else CS_MODE_32
    md = Cs(CS_ARCH_X86, mode)
    md.syntax = CS_OPT_SYNTAX_INTEL
    md.detail = True
    md.skipdata = True
    return md


def _render_operands(insn: CsInsn) -> str:
    """Operand text in objdump's form: no space after commas, hex immediates.

    Capstone prints small immediates in decimal (``mov eax, 1``); the resolver
    only accepts hexadecimal literals, as objdump prints them.
    """
    if not insn.op_str:
        return ""
    parts = [part.strip() for part in insn.op_str.split(", ")]
    operands = getattr(insn, "operands", ())
    if operands and len(operands) == len(parts):
        for i, op in enumerate(operands):
            if op.type == X86_OP_IMM:
                width = (op.size or 8) * 8
                parts[i] = hex(op.imm & ((1 << width) - 1))
    return ",".join(parts)


def disassemble_bytes(data: bytes, base_address: int, architecture: Architecture) -> list[Instruction]:
    """Disassemble a raw code buffer loaded at ``base_address``."""
    md = _create_disassembler(architecture)
    return [
        Instruction(
            address=insn.address,
            mnemonic=insn.mnemonic.lower(),
            operands=_render_operands(insn),
        )
        for insn in md.disasm(data, base_address)
        # skipdata emits ".byte" pseudo-instructions for undecodable bytes
        if not insn.mnemonic.startswith(".")
    ]


def disassemble_elf(path: Path, architecture: Architecture | None = None) -> InstructionStream:
    """Disassemble every executable section of the ELF at ``path``."""
    path = Path(path)
    if not path.is_file():
        raise DisassemblyError(f"Binary not found: {path}")

    arch = architecture or detect_architecture(path)
    instructions: list[Instruction] = []
    sections = 0

    try:
        with open(path, "rb") as f:
            elf = ELFFile(f)
            for section in elf.iter_sections():
                if section["sh_type"] != "SHT_PROGBITS":
                    continue
                if not section["sh_flags"] & SH_FLAGS.SHF_EXECINSTR:
                    continue
                instructions.extend(disassemble_bytes(section.data(), section["sh_addr"], arch))
                sections += 1
    except ELFError as exc:
        raise DisassemblyError(f"Failed to parse ELF {path}: {exc}") from exc

    log.info(
        "elf_disassembled",
        path=str(path),
        architecture=arch.value,
        sections=sections,
        instructions=len(instructions),
    )
    return InstructionStream(instructions)
