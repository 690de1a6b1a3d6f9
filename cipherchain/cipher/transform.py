"""Round operations on the 4x4 TBC-128 state.

The state is a list of four rows. Bytes are loaded column-major: block
byte ``4*c + r`` lives at ``state[r][c]``. Round keys are lists of four
words where word ``c`` byte ``r`` pairs with ``state[r][c]``. Both
conventions are private to this package; ciphertexts are not expected to
match any external implementation.

All operations mutate the state in place.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from typing import List, Sequence

from .gf import gmul
from .tables import inv_substitute, substitute

State = List[List[int]]

BLOCK_SIZE = 16


def state_from_block(block: Sequence[int]) -> State:
    """Load 16 bytes into a new state. Missing bytes read as zero."""
    state = [[0] * 4 for _ in range(4)]
    for c in range(4):
        for r in range(4):
            i = 4 * c + r
            state[r][c] = block[i] if i < len(block) else 0
    return state


def state_to_block(state: State) -> bytes:
    return bytes(state[r][c] for c in range(4) for r in range(4))


# ---------------------------------------------------------------------------
# SubBytes
# ---------------------------------------------------------------------------

def sub_bytes(state: State) -> None:
    for row in state:
        for c in range(4):
            row[c] = substitute(row[c])


def inv_sub_bytes(state: State) -> None:
    for row in state:
        for c in range(4):
            row[c] = inv_substitute(row[c])


# ---------------------------------------------------------------------------
# ShiftRows
# ---------------------------------------------------------------------------

def shift_rows(state: State) -> None:
    """Rotate row r left by r positions."""
    for r in range(1, 4):
        state[r] = state[r][r:] + state[r][:r]


def inv_shift_rows(state: State) -> None:
    """Rotate row r right by r positions."""
    for r in range(1, 4):
        state[r] = state[r][-r:] + state[r][:-r]


# ---------------------------------------------------------------------------
# MixColumns
# ---------------------------------------------------------------------------

def _mix(state: State, coeffs: Sequence[int]) -> None:
    # Row i of the matrix is coeffs rotated right by i.
    for c in range(4):
        col = [state[r][c] for r in range(4)]
        for r in range(4):
            acc = 0
            for k in range(4):
                acc ^= gmul(coeffs[(k - r) % 4], col[k])
            state[r][c] = acc


def mix_columns(state: State) -> None:
    _mix(state, (0x02, 0x03, 0x01, 0x01))


def inv_mix_columns(state: State) -> None:
    _mix(state, (0x0E, 0x0B, 0x0D, 0x09))


# ---------------------------------------------------------------------------
# AddRoundKey
# ---------------------------------------------------------------------------

def add_round_key(state: State, round_key: Sequence[Sequence[int]]) -> None:
    """XOR the state with a round key (word c, byte r -> state[r][c])."""
    for r in range(4):
        for c in range(4):
            state[r][c] ^= round_key[c][r]
