"""syscallsym: name functions in stripped binaries after the syscalls they make."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from syscallsym.version import __version__

if TYPE_CHECKING:
    from syscallsym.arch import Architecture
    from syscallsym.config.models import SyscallSymConfig
    from syscallsym.extraction.syscall_table import SyscallTable


@dataclass
class SyscallSymContext:
    """Dependency-injection container shared across CLI commands."""

    config: SyscallSymConfig | None = None
    _tables: dict[tuple[str, str | None], SyscallTable] = field(default_factory=dict)

    def ensure_config(self) -> SyscallSymConfig:
        if self.config is None:
            from syscallsym.config.loader import load_config

            self.config = load_config()
        return self.config

    def ensure_table(
        self, architecture: str | Architecture, explicit: str | None = None
    ) -> SyscallTable:
        """Load (once per architecture and path) the syscall table to resolve against."""
        from syscallsym.arch import Architecture
        from syscallsym.extraction.syscall_table import load_syscall_table

        arch = Architecture.parse(architecture)
        cfg = self.ensure_config().syscall_table
        explicit = explicit or cfg.paths.get(arch.value)
        key = (arch.value, explicit)
        if key not in self._tables:
            self._tables[key] = load_syscall_table(arch, cfg.search_paths, explicit)
        return self._tables[key]


__all__ = ["SyscallSymContext", "__version__"]
