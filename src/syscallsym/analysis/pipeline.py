"""End-to-end resolution: sites -> numbers -> functions -> accepted symbols."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from syscallsym.analysis.attribution import attribute, deduplicate
from syscallsym.analysis.locator import find_syscall_sites
from syscallsym.analysis.models import (
    AcceptedAssociation,
    FunctionSyscallAssociation,
    ResolvedSyscall,
)
from syscallsym.analysis.resolver import resolve_site
from syscallsym.arch import Architecture
from syscallsym.config.defaults import DEFAULT_SYMBOL_PREFIX
from syscallsym.config.models import ResolverConfig
from syscallsym.emission.symbols import SymbolDescriptor, emit_symbols
from syscallsym.errors import DropReason, UnattributableSyscall, UnresolvableSite
from syscallsym.extraction.functions import FunctionAddressIndex
from syscallsym.extraction.instructions import InstructionStream
from syscallsym.extraction.syscall_table import SyscallTable
from syscallsym.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ResolutionReport:
    architecture: Architecture
    sites_found: int
    resolved: tuple[ResolvedSyscall, ...] = ()
    associations: tuple[FunctionSyscallAssociation, ...] = ()
    accepted: tuple[AcceptedAssociation, ...] = ()
    symbols: tuple[SymbolDescriptor, ...] = ()
    dropped: dict[DropReason, int] = field(default_factory=dict)

    @property
    def sites_resolved(self) -> int:
        return len(self.resolved)

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    def as_summary(self) -> dict[str, int]:
        summary = {
            "sites_found": self.sites_found,
            "sites_resolved": self.sites_resolved,
            "attributed": len(self.associations),
            "accepted": self.accepted_count,
        }
        for reason, count in self.dropped.items():
            summary[f"dropped_{reason.value}"] = count
        return summary


def _stop_index(
    stream: InstructionStream, functions: FunctionAddressIndex, site_address: int
) -> int:
    """Stream position of the entry of the function enclosing ``site_address``."""
    entry = functions.preceding(site_address)
    if entry is None:
        return 0
    try:
        return stream.index_of(entry)
    except KeyError:
        # entry is not an instruction boundary in this listing; scan unbounded
        return 0


def resolve_symbols(
    stream: InstructionStream,
    functions: FunctionAddressIndex,
    table: SyscallTable,
    architecture: str | Architecture,
    options: ResolverConfig | None = None,
    prefix: str = DEFAULT_SYMBOL_PREFIX,
) -> ResolutionReport:
    """Run the whole engine; unresolvable sites are counted, never fatal."""
    arch = Architecture.parse(architecture)
    options = options or ResolverConfig()
    dropped: Counter[DropReason] = Counter()
    resolved: list[ResolvedSyscall] = []
    associations: list[FunctionSyscallAssociation] = []
    sites_found = 0

    for site in find_syscall_sites(stream, arch):
        sites_found += 1
        stop = _stop_index(stream, functions, site.address) if options.stop_at_function_boundary else 0
        try:
            syscall = resolve_site(stream, site, table, stop, options.max_backtrack)
        except UnresolvableSite as exc:
            dropped[exc.reason] += 1
            log.debug("site_unresolvable", address=hex(exc.address), reason=exc.reason.value, detail=exc.detail)
            continue
        resolved.append(syscall)

        try:
            associations.append(attribute(syscall, functions))
        except UnattributableSyscall as exc:
            dropped[exc.reason] += 1
            log.debug("syscall_unattributable", address=hex(exc.address), syscall=syscall.syscall_name)

    # both dedup passes need the complete association list
    accepted = deduplicate(associations)
    symbols = emit_symbols(accepted, prefix=prefix)

    report = ResolutionReport(
        architecture=arch,
        sites_found=sites_found,
        resolved=tuple(resolved),
        associations=tuple(associations),
        accepted=tuple(accepted),
        symbols=tuple(symbols),
        dropped=dict(dropped),
    )
    log.info("resolution_complete", architecture=arch.value, **report.as_summary())
    return report
