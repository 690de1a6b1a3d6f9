"""Byte, hex and text conversions plus key normalization.

Text is mapped one character per byte: each code point is truncated to its
low 8 bits, so characters outside Latin-1 lose information. Decoding maps
each byte back to the character with that code point.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

import re
from typing import Literal

from ..errors import ConfigError, FormatError

KeyFormat = Literal["text", "hex"]

_HEX_RE = re.compile(r"[0-9A-Fa-f]*")

KEY_SIZE = 16


def text_to_bytes(text: str) -> bytes:
    return bytes(ord(ch) & 0xFF for ch in text)


def bytes_to_text(data: bytes) -> str:
    return "".join(chr(b) for b in data)


def is_valid_hex(text: str) -> bool:
    """True if ``text`` contains only hex digits (the empty string counts)."""
    return _HEX_RE.fullmatch(text) is not None


def hex_to_bytes(text: str) -> bytes:
    if not is_valid_hex(text):
        raise FormatError("Input is not a hexadecimal string")
    if len(text) % 2 != 0:
        raise FormatError("Hexadecimal string has an odd number of digits")
    return bytes.fromhex(text)


def bytes_to_hex(data: bytes) -> str:
    return data.hex()


def normalize_block_key(key: str, key_format: KeyFormat = "text") -> bytes:
    """Turn a user key into exactly 16 bytes (zero-padded or truncated)."""
    if key_format == "hex":
        if not is_valid_hex(key) or len(key) % 2 != 0:
            raise ConfigError("Hex key must be pairs of hexadecimal digits")
        raw = bytes.fromhex(key)
    elif key_format == "text":
        raw = text_to_bytes(key)
    else:
        raise ValueError(f"Unknown key format: {key_format}")

    if len(raw) < KEY_SIZE:
        raw = raw + b"\x00" * (KEY_SIZE - len(raw))
    return raw[:KEY_SIZE]


# ============================================================================
# DISPLAY FORMATTERS
# ============================================================================

def format_to_hex(text: str) -> str:
    """Hex dump of a text value, two digits per character."""
    return bytes_to_hex(text_to_bytes(text))


def format_from_hex(text: str) -> str:
    """Inverse of :func:`format_to_hex`."""
    return bytes_to_text(hex_to_bytes(text))


def format_for_display(text: str, max_length: int = 100) -> str:
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."
