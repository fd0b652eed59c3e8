"""Turn raw fuzzer bytes into a valid ``AddressGenerator``.

Bytes are consumed front to back. Once the input is exhausted every read
yields zeros, so any byte string (including an empty one) decodes.
"""

from __future__ import annotations

from .addrgen import AddressGenerator, max_seed
from .config import NUMBER_OF_ADDRESSES
from .types import AddressType

ADDRESS_TYPES = tuple(AddressType)


class Unstructured:
    def __init__(self, data: bytes):
        self._data = bytes(data)
        self._pos = 0

    def remaining(self) -> int:
        return len(self._data) - self._pos

    def take(self, size: int) -> bytes:
        chunk = self._data[self._pos:self._pos + size]
        self._pos += len(chunk)
        return chunk

    def int_in_range(self, lo: int, hi: int) -> int:
        if lo > hi:
            raise ValueError(f"empty range [{lo}, {hi}]")
        span = hi - lo
        if span == 0:
            return lo
        raw = self.take((span.bit_length() + 7) // 8)
        return lo + int.from_bytes(raw, "big") % (span + 1)

    def choose_index(self, n: int) -> int:
        if n <= 0:
            raise ValueError("cannot choose from an empty set")
        # Little-endian selector, missing trailing bytes read as zero
        raw = self.take(4).ljust(4, b"\x00")
        return (int.from_bytes(raw, "little") * n) >> 32


def address_generator_from_bytes(data: bytes, count: int = NUMBER_OF_ADDRESSES) -> AddressGenerator:
    u = Unstructured(data)
    seed = u.int_in_range(0, max_seed(count))
    types = tuple(ADDRESS_TYPES[u.choose_index(len(ADDRESS_TYPES))] for _ in range(count))
    return AddressGenerator(address_seed=seed, address_types=types)
