"""Supported target architectures."""

from __future__ import annotations

from enum import Enum

from syscallsym.errors import UnsupportedArchitecture

_ALIASES = {
    "x86_64": "x86_64",
    "x86-64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "64": "x86_64",
    "64-bit-x86": "x86_64",
    "x86": "x86",
    "i386": "x86",
    "i686": "x86",
    "ia32": "x86",
    "x86_32": "x86",
    "32": "x86",
    "32-bit-x86": "x86",
}


class Architecture(str, Enum):
    X86_64 = "x86_64"
    X86 = "x86"

    @classmethod
    def parse(cls, name: str | Architecture) -> Architecture:
        """Map a user-facing identifier (``amd64``, ``i386``, ``32`` ...) to a member."""
        if isinstance(name, Architecture):
            return name
        canonical = _ALIASES.get(str(name).strip().lower())
        if canonical is None:
            raise UnsupportedArchitecture(str(name))
        return cls(canonical)

    @property
    def word_size(self) -> int:
        return 64 if self is Architecture.X86_64 else 32

    @property
    def unistd_header(self) -> str:
        """Kernel header defining ``__NR_*`` numbers, relative to an include dir."""
        return f"asm/unistd_{self.word_size}.h"
