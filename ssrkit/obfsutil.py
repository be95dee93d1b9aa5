"""Helpers shared by obfuscation plugins: header sizing and a fast PRNG."""

from __future__ import annotations

import time

_MASK64 = (1 << 64) - 1


def get_head_size(data: bytes | None, def_size: int) -> int:
    """Length of the address header at the start of ``data``.

    Falls back to ``def_size`` when the header type is unknown or the
    data is too short to tell.
    """
    if data is None or len(data) < 2:
        return def_size
    head_type = data[0] & 0x7
    if head_type == 1:
        return 7
    if head_type == 4:
        return 19
    if head_type == 3:
        length = data[1]
        return 4 + (length - 256 if length >= 128 else length)
    return def_size


class XorShift128Plus:
    """xorshift128+ generator seeded from a 32-bit value (the current time by default)."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = int(time.time())
        seed &= 0xFFFFFFFF
        self._s0 = seed | 0x100000000
        self._s1 = ((seed << 32) | 0x1) & _MASK64

    def next(self) -> int:
        """Return the next unsigned 64-bit value."""
        x = self._s0
        y = self._s1
        self._s0 = y
        x ^= (x << 23) & _MASK64
        x ^= x >> 17
        x ^= y ^ (y >> 26)
        self._s1 = x
        return (x + y) & _MASK64