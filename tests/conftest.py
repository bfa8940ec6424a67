"""Shared test fixtures."""

from __future__ import annotations

import struct
from typing import Callable

import pytest

from syscallsym.arch import Architecture
from syscallsym.config.models import ResolverConfig, SyscallSymConfig, SyscallTableConfig
from syscallsym.extraction.instructions import Instruction, InstructionStream
from syscallsym.extraction.syscall_table import SyscallTable, parse_unistd_header

UNISTD_64 = """\
#ifndef _ASM_UNISTD_64_H
#define _ASM_UNISTD_64_H 1

#define __NR_read 0
#define __NR_write 1
#define __NR_open 2
#define __NR_close 3
#define __NR_mmap 9
#define __NR_exit 60
#define __NR_kill 62
#define __NR_exit_group 231

#endif /* _ASM_UNISTD_64_H */
"""

UNISTD_32 = """\
#define __NR_restart_syscall 0
#define __NR_exit 1
#define __NR_fork 2
#define __NR_read 3
#define __NR_write 4
"""

# objdump -d -M intel output for a tiny static binary with four functions:
#   0x401000 exits, 0x401010 writes twice, 0x401030 reads and writes,
#   0x401050 takes its syscall number from a register.
SAMPLE_LISTING = """\

sample:     file format elf64-x86-64


Disassembly of section .text:

0000000000401000 <.text>:
  401000:\tb8 3c 00 00 00       \tmov    eax,0x3c
  401005:\t31 ff                \txor    edi,edi
  401007:\t0f 05                \tsyscall 
  401009:\tc3                   \tret    
  40100a:\t66 0f 1f 44 00 00    \tnop    WORD PTR [rax+rax*1+0x0]
  401010:\tb8 01 00 00 00       \tmov    eax,0x1
  401015:\t0f 05                \tsyscall 
  401017:\tb8 01 00 00 00       \tmov    eax,0x1
  40101c:\t0f 05                \tsyscall 
  40101e:\tc3                   \tret    
  401030:\t48 c7 c0 00 00 00 00 \tmov    rax,0x0
  401037:\t0f 05                \tsyscall 
  401039:\tb8 01 00 00 00       \tmov    eax,0x1
  40103e:\t0f 05                \tsyscall 
  401040:\tc3                   \tret    
  401050:\t89 f8                \tmov    eax,edi
  401052:\t0f 05                \tsyscall 
  401054:\te8 a7 ff ff ff       \tcall   401000 <.text>
  401059:\tc3                   \tret    
"""

SAMPLE_FUNCTIONS = """\
0x401000
0x401010
0x401030
0x401050
"""


@pytest.fixture
def table_64() -> SyscallTable:
    return SyscallTable(Architecture.X86_64, parse_unistd_header(UNISTD_64), source="<test>")


@pytest.fixture
def table_32() -> SyscallTable:
    return SyscallTable(Architecture.X86, parse_unistd_header(UNISTD_32), source="<test>")


@pytest.fixture
def header_dir(tmp_path):
    """An include directory laid out like /usr/include/x86_64-linux-gnu."""
    asm = tmp_path / "include" / "asm"
    asm.mkdir(parents=True)
    (asm / "unistd_64.h").write_text(UNISTD_64)
    (asm / "unistd_32.h").write_text(UNISTD_32)
    return tmp_path / "include"


@pytest.fixture
def sample_config(header_dir) -> SyscallSymConfig:
    return SyscallSymConfig(
        syscall_table=SyscallTableConfig(search_paths=[str(header_dir)]),
        resolver=ResolverConfig(),
    )


@pytest.fixture
def build_stream() -> Callable[..., InstructionStream]:
    """Build a stream from (address, mnemonic, operands) triples."""

    def _build(*triples: tuple[int, str, str]) -> InstructionStream:
        return InstructionStream(Instruction(a, m, o) for a, m, o in triples)

    return _build


@pytest.fixture
def sample_listing() -> str:
    return SAMPLE_LISTING


@pytest.fixture
def sample_functions() -> str:
    return SAMPLE_FUNCTIONS


@pytest.fixture
def unistd_64() -> str:
    return UNISTD_64


# mov eax, 0x3c ; xor edi, edi ; syscall
EXIT_CODE = bytes.fromhex("b83c000000" "31ff" "0f05")
TEXT_ADDRESS = 0x401000


def build_elf64(code: bytes, text_address: int = TEXT_ADDRESS) -> bytes:
    """Minimal ET_EXEC x86-64 image: ELF header, .text, .shstrtab, section headers."""
    shstrtab = b"\0.text\0.shstrtab\0"
    text_offset = 0x40
    shstrtab_offset = text_offset + len(code)
    shoff = (shstrtab_offset + len(shstrtab) + 7) & ~7

    ident = b"\x7fELF" + bytes([2, 1, 1, 0]) + bytes(8)  # ELFCLASS64, little endian
    header = struct.pack(
        "<16sHHIQQQIHHHHHH",
        ident,
        2,  # ET_EXEC
        62,  # EM_X86_64
        1,
        text_address,
        0,
        shoff,
        0,
        64,
        56,
        0,
        64,
        3,
        2,
    )
    section = struct.Struct("<IIQQQQIIQQ")
    sections = b"".join(
        [
            section.pack(0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
            # .text: SHT_PROGBITS, SHF_ALLOC | SHF_EXECINSTR
            section.pack(1, 1, 0x6, text_address, text_offset, len(code), 0, 0, 16, 0),
            # .shstrtab: SHT_STRTAB
            section.pack(7, 3, 0, 0, shstrtab_offset, len(shstrtab), 0, 0, 1, 0),
        ]
    )
    body = header + code + shstrtab
    return body + bytes(shoff - len(body)) + sections


@pytest.fixture
def exit_elf(tmp_path):
    """A stripped x86-64 executable whose only function calls exit."""
    path = tmp_path / "exit.elf"
    path.write_bytes(build_elf64(EXIT_CODE))
    return path
