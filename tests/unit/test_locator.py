"""Tests for syscall site location."""

import pytest

from syscallsym.analysis.locator import find_syscall_sites
from syscallsym.arch import Architecture
from syscallsym.errors import UnsupportedArchitecture


def test_x86_64_matches_syscall_only(build_stream):
    stream = build_stream(
        (0x10, "mov", "eax,0x3c"),
        (0x15, "syscall", ""),
        (0x17, "int", "0x80"),
        (0x19, "sysenter", ""),
        (0x1b, "syscall", ""),
    )
    sites = list(find_syscall_sites(stream, Architecture.X86_64))
    assert [s.address for s in sites] == [0x15, 0x1b]
    assert [s.index for s in sites] == [1, 4]


def test_x86_matches_int_0x80_only(build_stream):
    stream = build_stream(
        (0x10, "int", "0x80"),
        (0x12, "int", "0x3"),
        (0x14, "int3", ""),
        (0x15, "syscall", ""),
        (0x17, "int", "128"),
        (0x19, "mov", "eax,0x80"),
    )
    sites = list(find_syscall_sites(stream, "x86"))
    assert [s.address for s in sites] == [0x10, 0x17]


def test_sites_are_lazy_and_ordered(build_stream):
    stream = build_stream((0x30, "syscall", ""), (0x10, "syscall", ""), (0x20, "syscall", ""))
    sites = find_syscall_sites(stream, "x86_64")
    assert next(sites).address == 0x10
    assert [s.address for s in sites] == [0x20, 0x30]


def test_unsupported_architecture(build_stream):
    with pytest.raises(UnsupportedArchitecture):
        list(find_syscall_sites(build_stream(), "arm64"))


@pytest.mark.parametrize("alias", ["amd64", "x86-64", "64", "64-bit-x86", "X86_64"])
def test_architecture_aliases_64(alias):
    assert Architecture.parse(alias) is Architecture.X86_64


@pytest.mark.parametrize("alias", ["i386", "i686", "32", "32-bit-x86", "x86"])
def test_architecture_aliases_32(alias):
    arch = Architecture.parse(alias)
    assert arch is Architecture.X86
    assert arch.unistd_header == "asm/unistd_32.h"
