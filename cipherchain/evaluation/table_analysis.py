"""Structural checks on the TBC-128 substitution tables.

Verifies the forward table is a permutation, that the inverse table undoes
it for every byte, and reports differential uniformity (max DDT entry).

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Sequence

import numpy as np

from ..cipher.tables import INV_SBOX, SBOX


@dataclass
class TableAnalysisResult:
    table_size: int
    is_bijective: bool
    inverse_consistent: bool    # inv[fwd[b]] == b and fwd[inv[b]] == b for all b
    fixed_points: int           # b with fwd[b] == b
    ddt_max: int                # Max DDT entry over non-zero input differences
    differential_uniformity: str  # "good" / "fair" / "poor"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        bij = "bijective" if self.is_bijective else "NOT bijective"
        inv = "inverse OK" if self.inverse_consistent else "inverse MISMATCH"
        return (
            f"S-box ({self.table_size}-entry): {bij}, {inv}, "
            f"fixed points={self.fixed_points}, "
            f"DDT_max={self.ddt_max} ({self.differential_uniformity})"
        )


def ddt(table: Sequence[int]) -> np.ndarray:
    """Difference distribution table: ddt[dx, dy] = #{x : S(x) ^ S(x ^ dx) == dy}."""
    s = np.asarray(table, dtype=np.int64)
    n = len(s)
    x = np.arange(n)
    out = np.zeros((n, n), dtype=np.int64)
    for dx in range(n):
        out[dx] = np.bincount(s[x] ^ s[x ^ dx], minlength=n)
    return out


def _rate_differential_uniformity(ddt_max: int) -> str:
    if ddt_max <= 4:
        return "good"
    elif ddt_max <= 8:
        return "fair"
    else:
        return "poor"


def analyze_tables(
    forward: Sequence[int] = SBOX,
    inverse: Sequence[int] = INV_SBOX,
) -> TableAnalysisResult:
    fwd = np.asarray(forward, dtype=np.int64)
    inv = np.asarray(inverse, dtype=np.int64)
    x = np.arange(len(fwd))

    bijective = len(np.unique(fwd)) == len(fwd)
    consistent = (
        len(inv) == len(fwd)
        and bool(np.all(inv[fwd] == x))
        and bool(np.all(fwd[inv] == x))
    )
    ddt_max = int(ddt(fwd)[1:].max())

    return TableAnalysisResult(
        table_size=len(fwd),
        is_bijective=bool(bijective),
        inverse_consistent=consistent,
        fixed_points=int(np.count_nonzero(fwd == x)),
        ddt_max=ddt_max,
        differential_uniformity=_rate_differential_uniformity(ddt_max),
    )
