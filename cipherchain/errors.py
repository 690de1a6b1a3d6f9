"""Exception hierarchy shared by the cipher engines and the pipeline.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations


class CipherChainError(Exception):
    """Base class for every error raised by cipherchain."""


class ConfigError(CipherChainError, ValueError):
    """A stage is missing a parameter it needs (e.g. an empty key)."""


class FormatError(CipherChainError, ValueError):
    """Ciphertext is not hex, or its length is not a whole number of blocks."""


# Name used by the block engine's decrypt contract.
InvalidInputError = FormatError


class EncryptionError(CipherChainError):
    """Wraps any lower-level failure raised while encrypting."""


class DecryptionError(CipherChainError):
    """Wraps any lower-level failure raised while decrypting."""
