"""Function entry address index and the function-list parser."""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, Iterator

from syscallsym.utils.logging import get_logger

log = get_logger(__name__)


class FunctionAddressIndex:
    """Sorted, de-duplicated set of function entry addresses."""

    def __init__(self, addresses: Iterable[int] = ()) -> None:
        self._addresses = tuple(sorted(set(addresses)))

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[int]:
        return iter(self._addresses)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, int) and self.preceding(address) == address

    def preceding(self, address: int) -> int | None:
        """Greatest function address <= ``address``, or None."""
        i = bisect_right(self._addresses, address)
        if i == 0:
            return None
        return self._addresses[i - 1]


def parse_address(token: str) -> int:
    """Parse ``0x401000`` or bare ``401000`` as hexadecimal."""
    token = token.strip().lower()
    if token.startswith("0x"):
        token = token[2:]
    return int(token, 16)


def parse_function_list(text: str) -> FunctionAddressIndex:
    """Parse a function-discovery listing: one address per line, first column.

    Extra columns (e.g. a size) are ignored, as are blank lines and ``#``
    comments. Lines whose first token is not an address are skipped.
    """
    addresses: list[int] = []
    skipped = 0
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            addresses.append(parse_address(line.split()[0]))
        except ValueError:
            skipped += 1
    if skipped:
        log.warning("function_list_lines_skipped", count=skipped)
    index = FunctionAddressIndex(addresses)
    log.debug("function_index_built", functions=len(index))
    return index
