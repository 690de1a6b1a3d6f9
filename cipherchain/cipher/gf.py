"""GF(2^8) arithmetic under the reduction polynomial x^8 + x^4 + x^3 + x + 1."""

from __future__ import annotations

# Low byte of 0x11B, folded back in whenever a shift overflows bit 7.
REDUCTION = 0x1B


def gmul(a: int, b: int) -> int:
    """Multiply two bytes in GF(2^8)."""
    a &= 0xFF
    b &= 0xFF
    res = 0
    for _ in range(8):
        if b & 1:
            res ^= a
        hi = a & 0x80
        a = (a << 1) & 0xFF
        if hi:
            a ^= REDUCTION
        b >>= 1
    return res & 0xFF
