"""Classical mod-26 letter ciphers.

- Repeating-key (Vigenere): key letter ``i`` is ``key[i % len(key)]``.
- Running-key (autokey): the key stream is the key followed by the
  plaintext itself, so decryption must recover letters one at a time.

Both ciphers uppercase their input and drop every character outside A-Z
before doing anything else.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

import re
from typing import List

from ..errors import ConfigError

_NON_LETTERS = re.compile(r"[^A-Z]")
_A = ord("A")


def normalize_text(text: str) -> str:
    """Uppercase ``text`` and keep only A-Z."""
    return _NON_LETTERS.sub("", text.upper())


def _to_num(letter: str) -> int:
    return ord(letter) - _A


def _to_letter(num: int) -> str:
    return chr(num % 26 + _A)


def _require_key(key: str, cipher_name: str) -> str:
    normalized = normalize_text(key)
    if not normalized:
        raise ConfigError(f"{cipher_name} key must contain at least one letter")
    return normalized


# ============================================================================
# REPEATING KEY (VIGENERE)
# ============================================================================

def encrypt_repeating_key(plaintext: str, key: str) -> str:
    text = normalize_text(plaintext)
    if not text:
        return ""
    k = _require_key(key, "Repeating-key")
    return "".join(
        _to_letter(_to_num(ch) + _to_num(k[i % len(k)])) for i, ch in enumerate(text)
    )


def decrypt_repeating_key(ciphertext: str, key: str) -> str:
    text = normalize_text(ciphertext)
    if not text:
        return ""
    k = _require_key(key, "Repeating-key")
    return "".join(
        _to_letter(_to_num(ch) - _to_num(k[i % len(k)])) for i, ch in enumerate(text)
    )


# ============================================================================
# RUNNING KEY (AUTOKEY)
# ============================================================================

def encrypt_running_key(plaintext: str, key: str) -> str:
    text = normalize_text(plaintext)
    if not text:
        return ""
    stream = _require_key(key, "Running-key") + text
    return "".join(_to_letter(_to_num(ch) + _to_num(stream[i])) for i, ch in enumerate(text))


def decrypt_running_key(ciphertext: str, key: str) -> str:
    text = normalize_text(ciphertext)
    if not text:
        return ""
    stream: List[str] = list(_require_key(key, "Running-key"))
    out: List[str] = []
    for i, ch in enumerate(text):
        plain = _to_letter(_to_num(ch) - _to_num(stream[i]))
        out.append(plain)
        # Each recovered letter becomes key material for a later position.
        stream.append(plain)
    return "".join(out)
