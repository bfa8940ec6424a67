"""Instruction stream model and the objdump listing parser."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from syscallsym.utils.logging import get_logger

log = get_logger(__name__)

# "  401000:\tb8 3c 00 00 00       \tmov    eax,0x3c"
_OBJDUMP_LINE = re.compile(r"^\s*([0-9a-fA-F]+):\t(.*)$")
_RAW_BYTES = re.compile(r"^(?:[0-9a-fA-F]{2}\s?)+$")
_SYMBOL_ANNOTATION = re.compile(r"\s*<[^>]*>")


@dataclass(frozen=True)
class Instruction:
    address: int
    mnemonic: str
    operands: str = ""

    def operand_list(self) -> tuple[str, ...]:
        """Split operands on top-level commas (commas inside ``[...]`` are kept)."""
        if not self.operands:
            return ()
        parts: list[str] = []
        depth = 0
        current: list[str] = []
        for char in self.operands:
            if char == "[":
                depth += 1
            elif char == "]":
                depth = max(depth - 1, 0)
            if char == "," and depth == 0:
                parts.append("".join(current).strip())
                current = []
                continue
            current.append(char)
        parts.append("".join(current).strip())
        return tuple(parts)


class InstructionStream(Sequence[Instruction]):
    """Immutable, address-ordered instruction sequence.

    Sites are addressed by index so the resolver can walk backward from any
    point without re-slicing the listing.
    """

    def __init__(self, instructions: Iterable[Instruction]) -> None:
        self._instructions = tuple(sorted(instructions, key=lambda insn: insn.address))
        self._index = {insn.address: i for i, insn in enumerate(self._instructions)}

    def __len__(self) -> int:
        return len(self._instructions)

    def __getitem__(self, index):  # type: ignore[override]
        return self._instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def index_of(self, address: int) -> int:
        """Return the position of the instruction at ``address``."""
        try:
            return self._index[address]
        except KeyError:
            raise KeyError(f"No instruction at {address:#x}") from None

    def iter_backward(self, index: int, stop: int = 0) -> Iterator[Instruction]:
        """Yield instructions strictly before ``index``, most recent first.

        Iteration ends after the instruction at position ``stop``.
        """
        for i in range(index - 1, max(stop, 0) - 1, -1):
            yield self._instructions[i]


def parse_objdump_line(line: str) -> Instruction | None:
    """Parse one ``objdump -d -M intel`` line; non-instruction lines give None."""
    match = _OBJDUMP_LINE.match(line.rstrip("\n"))
    if match is None:
        return None

    address = int(match.group(1), 16)
    fields = match.group(2).split("\t")
    if len(fields) >= 2:
        text = "\t".join(fields[1:])
    else:
        # --no-show-raw-insn output, or a byte-only continuation line
        text = fields[0]
        if _RAW_BYTES.match(text.strip()):
            return None

    text = text.split("#", 1)[0]
    text = _SYMBOL_ANNOTATION.sub("", text).strip()
    if not text:
        return None

    mnemonic, _, operands = text.partition(" ")
    return Instruction(
        address=address,
        mnemonic=mnemonic.lower(),
        operands=operands.strip().replace(", ", ","),
    )


def parse_objdump(text: str) -> InstructionStream:
    """Build an InstructionStream from a full objdump listing."""
    instructions = [
        insn
        for insn in (parse_objdump_line(line) for line in text.splitlines())
        if insn is not None
    ]
    log.debug("objdump_parsed", instructions=len(instructions))
    return InstructionStream(instructions)
