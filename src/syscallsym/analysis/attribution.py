"""Attribute resolved syscalls to functions and keep only unambiguous ones."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from syscallsym.analysis.models import (
    AcceptedAssociation,
    FunctionSyscallAssociation,
    ResolvedSyscall,
)
from syscallsym.errors import UnattributableSyscall
from syscallsym.extraction.functions import FunctionAddressIndex


def attribute(resolved: ResolvedSyscall, functions: FunctionAddressIndex) -> FunctionSyscallAssociation:
    """Pair a syscall with the nearest function entry at or before its site."""
    function_address = functions.preceding(resolved.site_address)
    if function_address is None:
        raise UnattributableSyscall(resolved.site_address)
    return FunctionSyscallAssociation(
        function_address=function_address,
        syscall_name=resolved.syscall_name,
        site_address=resolved.site_address,
    )


def drop_repeated_pairs(
    associations: Sequence[FunctionSyscallAssociation],
) -> list[FunctionSyscallAssociation]:
    """Remove every association whose (function, syscall) pair occurs more than once.

    All copies go, not all but one: a function that issues the same syscall
    from two sites is left unnamed.
    """
    counts = Counter((a.function_address, a.syscall_name) for a in associations)
    return [a for a in associations if counts[(a.function_address, a.syscall_name)] == 1]


def drop_shared_functions(
    associations: Sequence[FunctionSyscallAssociation],
) -> list[FunctionSyscallAssociation]:
    """Remove every association whose function address occurs more than once."""
    counts = Counter(a.function_address for a in associations)
    return [a for a in associations if counts[a.function_address] == 1]


def deduplicate(associations: Iterable[FunctionSyscallAssociation]) -> list[AcceptedAssociation]:
    """Run both grouping passes over the complete association list."""
    survivors = drop_shared_functions(drop_repeated_pairs(list(associations)))
    return [
        AcceptedAssociation(function_address=a.function_address, syscall_name=a.syscall_name)
        for a in sorted(survivors, key=lambda a: a.function_address)
    ]
