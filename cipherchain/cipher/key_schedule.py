"""Key expansion for TBC-128: 16-byte key -> 11 round keys of 4 words each.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from typing import List

from .tables import RCON, substitute

KEY_WORDS = 4      # Nk
BLOCK_WORDS = 4    # Nb
ROUNDS = 10        # Nr
TOTAL_WORDS = BLOCK_WORDS * (ROUNDS + 1)

Word = List[int]


def _rot_word(word: Word) -> Word:
    return word[1:] + word[:1]


def _sub_word(word: Word) -> Word:
    return [substitute(b) for b in word]


def expand_key(key: bytes) -> List[Word]:
    """Expand a 16-byte key into 44 four-byte words.

    Every fourth word is rotated, substituted and mixed with the round
    constant for its round before being XORed with the word four
    positions back.
    """
    if len(key) != 4 * KEY_WORDS:
        raise ValueError(f"expand_key requires a {4 * KEY_WORDS}-byte key, got {len(key)}")

    words: List[Word] = [list(key[4 * i:4 * i + 4]) for i in range(KEY_WORDS)]

    for i in range(KEY_WORDS, TOTAL_WORDS):
        temp = list(words[i - 1])
        if i % KEY_WORDS == 0:
            temp = _sub_word(_rot_word(temp))
            temp[0] ^= RCON[i // KEY_WORDS]
        words.append([words[i - KEY_WORDS][j] ^ temp[j] for j in range(4)])

    return words


def round_key(words: List[Word], round_index: int) -> List[Word]:
    """Return the four words that make up the key for ``round_index``."""
    if not 0 <= round_index <= ROUNDS:
        raise IndexError(f"round_index out of range: {round_index}")
    start = round_index * BLOCK_WORDS
    return words[start:start + BLOCK_WORDS]
