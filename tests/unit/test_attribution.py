"""Tests for function attribution and the two deduplication passes."""

import pytest

from syscallsym.analysis.attribution import (
    attribute,
    deduplicate,
    drop_repeated_pairs,
    drop_shared_functions,
)
from syscallsym.analysis.models import (
    AcceptedAssociation,
    FunctionSyscallAssociation,
    ResolvedSyscall,
)
from syscallsym.errors import UnattributableSyscall
from syscallsym.extraction.functions import FunctionAddressIndex


def _assoc(function_address, name, site=0):
    return FunctionSyscallAssociation(function_address=function_address, syscall_name=name, site_address=site)


def test_attribute_nearest_preceding():
    functions = FunctionAddressIndex([0x100, 0x200, 0x300])
    syscall = ResolvedSyscall(site_address=0x250, syscall_number=1, syscall_name="write")
    assert attribute(syscall, functions) == _assoc(0x200, "write", 0x250)


def test_attribute_without_preceding_function():
    functions = FunctionAddressIndex([0x300])
    syscall = ResolvedSyscall(site_address=0x250, syscall_number=1, syscall_name="write")
    with pytest.raises(UnattributableSyscall) as excinfo:
        attribute(syscall, functions)
    assert excinfo.value.address == 0x250


def test_attribute_empty_index():
    syscall = ResolvedSyscall(site_address=0x250, syscall_number=60, syscall_name="exit")
    with pytest.raises(UnattributableSyscall):
        attribute(syscall, FunctionAddressIndex())


def test_repeated_pair_drops_every_copy():
    associations = [_assoc(0x100, "write", 0x110), _assoc(0x100, "write", 0x120), _assoc(0x200, "exit")]
    assert drop_repeated_pairs(associations) == [_assoc(0x200, "exit")]


def test_shared_function_drops_all():
    associations = [_assoc(0x100, "read"), _assoc(0x100, "write"), _assoc(0x200, "exit")]
    assert drop_shared_functions(associations) == [_assoc(0x200, "exit")]


def test_same_syscall_in_different_functions_is_kept():
    associations = [_assoc(0x100, "exit"), _assoc(0x200, "exit")]
    assert deduplicate(associations) == [
        AcceptedAssociation(0x100, "exit"),
        AcceptedAssociation(0x200, "exit"),
    ]


def test_pair_pass_runs_before_address_pass():
    # write twice + read once: the pair pass removes both writes, leaving read
    # as the function's only association.
    associations = [_assoc(0x100, "write"), _assoc(0x100, "write"), _assoc(0x100, "read")]
    assert deduplicate(associations) == [AcceptedAssociation(0x100, "read")]


def test_deduplicate_output_unique_per_function():
    associations = [
        _assoc(0x300, "kill"),
        _assoc(0x100, "read"),
        _assoc(0x100, "write"),
        _assoc(0x200, "exit"),
        _assoc(0x400, "open"),
        _assoc(0x400, "open"),
    ]
    accepted = deduplicate(associations)
    addresses = [a.function_address for a in accepted]
    assert addresses == [0x200, 0x300]
    assert len(set(addresses)) == len(addresses)


def test_deduplicate_empty():
    assert deduplicate([]) == []
