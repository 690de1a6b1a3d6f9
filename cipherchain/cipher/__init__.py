"""Cipher engines: TBC-128 block cipher and classical letter ciphers."""

from .block import BlockCipher128, decrypt_text, encrypt_text, pad, unpad
from .classical import (
    decrypt_repeating_key,
    decrypt_running_key,
    encrypt_repeating_key,
    encrypt_running_key,
    normalize_text,
)
from .gf import gmul
from .key_schedule import expand_key
from .registry import EngineRegistry, StageEngine, builtin_engines

__all__ = [
    "BlockCipher128",
    "encrypt_text",
    "decrypt_text",
    "pad",
    "unpad",
    "encrypt_repeating_key",
    "decrypt_repeating_key",
    "encrypt_running_key",
    "decrypt_running_key",
    "normalize_text",
    "gmul",
    "expand_key",
    "EngineRegistry",
    "StageEngine",
    "builtin_engines",
]
