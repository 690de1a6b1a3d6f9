"""TBC-128: a 10-round, 128-bit substitution-permutation block cipher.

The round structure follows the familiar SubBytes / ShiftRows / MixColumns /
AddRoundKey layout, but the state and round-key indexing conventions are
private to this package. Ciphertexts round-trip through this engine only.

Two message modes are supported:

- ``codebook``: the padded message is split into 16-byte blocks, each one
  encrypted independently with the same round keys.
- ``single``: only the first padded block is processed; anything after it
  is dropped.

For messages that fit in one block both modes produce identical output.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal

from ..errors import DecryptionError, EncryptionError, FormatError
from .encoding import (
    KeyFormat,
    bytes_to_hex,
    bytes_to_text,
    is_valid_hex,
    normalize_block_key,
    text_to_bytes,
)
from .key_schedule import ROUNDS, Word, expand_key, round_key
from .transform import (
    BLOCK_SIZE,
    add_round_key,
    inv_mix_columns,
    inv_shift_rows,
    inv_sub_bytes,
    mix_columns,
    shift_rows,
    state_from_block,
    state_to_block,
    sub_bytes,
)

BlockMode = Literal["codebook", "single"]


def pad(data: bytes) -> bytes:
    """Append ``n`` bytes of value ``n`` so the length is a multiple of 16.

    Already-aligned input gets a full extra block.
    """
    n = BLOCK_SIZE - (len(data) % BLOCK_SIZE)
    return data + bytes([n]) * n


def unpad(data: bytes) -> bytes:
    """Strip padding if the last byte is a plausible pad length.

    Any other final byte leaves the data untouched: malformed padding is
    accepted rather than rejected.
    """
    if not data:
        return data
    n = data[-1]
    if 0 < n <= BLOCK_SIZE:
        return data[:-n]
    return data


def encrypt_block(block: bytes, words: List[Word]) -> bytes:
    state = state_from_block(block)

    add_round_key(state, round_key(words, 0))
    for r in range(1, ROUNDS):
        sub_bytes(state)
        shift_rows(state)
        mix_columns(state)
        add_round_key(state, round_key(words, r))

    # Final round has no MixColumns
    sub_bytes(state)
    shift_rows(state)
    add_round_key(state, round_key(words, ROUNDS))

    return state_to_block(state)


def decrypt_block(block: bytes, words: List[Word]) -> bytes:
    state = state_from_block(block)

    add_round_key(state, round_key(words, ROUNDS))
    inv_shift_rows(state)
    inv_sub_bytes(state)
    for r in range(ROUNDS - 1, 0, -1):
        add_round_key(state, round_key(words, r))
        inv_mix_columns(state)
        inv_shift_rows(state)
        inv_sub_bytes(state)
    add_round_key(state, round_key(words, 0))

    return state_to_block(state)


def _blocks(data: bytes) -> List[bytes]:
    return [data[i:i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE)]


@dataclass(frozen=True)
class BlockCipher128:
    """Text-in / hex-out wrapper around :func:`encrypt_block`."""

    mode: BlockMode = "codebook"

    def _select(self, data: bytes) -> List[bytes]:
        blocks = _blocks(data)
        if self.mode == "single":
            return blocks[:1]
        return blocks

    def encrypt(self, plaintext: str, key: str, key_format: KeyFormat = "text") -> str:
        """Encrypt text and return lowercase hex (32 digits per block)."""
        try:
            words = expand_key(normalize_block_key(key, key_format))
            padded = pad(text_to_bytes(plaintext))
            out = b"".join(encrypt_block(b, words) for b in self._select(padded))
            return bytes_to_hex(out)
        except Exception as exc:
            raise EncryptionError(f"Block encryption error: {exc}") from exc

    def decrypt(self, ciphertext: str, key: str, key_format: KeyFormat = "text") -> str:
        """Decrypt hex produced by :meth:`encrypt` back into text.

        Raises:
            FormatError: ciphertext is not hex or not a whole number of blocks.
            DecryptionError: anything else went wrong.
        """
        if not is_valid_hex(ciphertext):
            raise FormatError("Block decryption requires hexadecimal input")
        if len(ciphertext) % (2 * BLOCK_SIZE) != 0:
            raise FormatError(
                f"Invalid ciphertext length: {len(ciphertext)} hex digits "
                f"is not a multiple of {2 * BLOCK_SIZE}"
            )

        try:
            words = expand_key(normalize_block_key(key, key_format))
            data = bytes.fromhex(ciphertext)
            out = b"".join(decrypt_block(b, words) for b in self._select(data))
            return bytes_to_text(unpad(out))
        except Exception as exc:
            raise DecryptionError(f"Block decryption error: {exc}") from exc


def encrypt_text(plaintext: str, key: str, key_format: KeyFormat = "text", *, mode: BlockMode = "codebook") -> str:
    return BlockCipher128(mode=mode).encrypt(plaintext, key, key_format)


def decrypt_text(ciphertext: str, key: str, key_format: KeyFormat = "text", *, mode: BlockMode = "codebook") -> str:
    return BlockCipher128(mode=mode).decrypt(ciphertext, key, key_format)
