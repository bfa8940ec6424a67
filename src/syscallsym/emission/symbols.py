"""Turn accepted associations into symbol descriptors and serialize them."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import asdict, dataclass
from typing import Iterable, Sequence

from syscallsym.analysis.models import AcceptedAssociation
from syscallsym.config.defaults import DEFAULT_SYMBOL_PREFIX

SYMBOL_FIELDS = ("name", "address", "kind", "visibility")


@dataclass(frozen=True)
class SymbolDescriptor:
    name: str
    address: int
    kind: str = "function"
    visibility: str = "global"

    def as_row(self) -> dict[str, str]:
        row = asdict(self)
        row["address"] = f"{self.address:#x}"
        return row


def emit_symbols(
    accepted: Iterable[AcceptedAssociation], prefix: str = DEFAULT_SYMBOL_PREFIX
) -> list[SymbolDescriptor]:
    """One global function symbol per accepted association, ordered by address."""
    descriptors = {
        SymbolDescriptor(name=f"{prefix}{a.syscall_name}", address=a.function_address)
        for a in accepted
    }
    return sorted(descriptors, key=lambda d: (d.address, d.name))


def to_json(symbols: Sequence[SymbolDescriptor]) -> str:
    return json.dumps([s.as_row() for s in symbols], indent=2)


def to_csv(symbols: Sequence[SymbolDescriptor]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=SYMBOL_FIELDS, lineterminator="\n")
    writer.writeheader()
    for symbol in symbols:
        writer.writerow(symbol.as_row())
    return buf.getvalue()


def to_objcopy_args(symbols: Sequence[SymbolDescriptor]) -> str:
    """``objcopy --add-symbol`` arguments, one per line."""
    return "".join(
        f"--add-symbol {s.name}={s.address:#x},{s.kind},{s.visibility}\n" for s in symbols
    )


SERIALIZERS = {
    "json": to_json,
    "csv": to_csv,
    "objcopy": to_objcopy_args,
}


def serialize(symbols: Sequence[SymbolDescriptor], fmt: str) -> str:
    try:
        return SERIALIZERS[fmt](symbols)
    except KeyError:
        raise ValueError(f"Unknown symbol format: {fmt!r}") from None
