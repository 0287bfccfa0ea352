# src/txbench/generators/base.py
"""Integer generator protocol shared by key choosers and transaction lengths."""

from __future__ import annotations

from typing import Protocol


class IntegerGenerator(Protocol):
    """Produces a stream of integers.

    next_int() draws a new value; last_int() repeats the most recent one
    without advancing the stream.
    """

    def next_int(self) -> int: ...

    def last_int(self) -> int: ...


def fnv_hash64(value: int) -> int:
    """64-bit FNV-1a hash of the low 8 bytes of value, as a non-negative int."""
    hash_value = 0xCBF29CE484222325
    for _ in range(8):
        octet = value & 0xFF
        value >>= 8
        hash_value ^= octet
        hash_value = (hash_value * 1099511628211) & 0xFFFFFFFFFFFFFFFF
    return hash_value & 0x7FFFFFFFFFFFFFFF
