"""cipherchain: compose classical and block ciphers into a reversible chain.

Research / education only. Do NOT use in production.
"""

from .errors import (
    CipherChainError,
    ConfigError,
    DecryptionError,
    EncryptionError,
    FormatError,
    InvalidInputError,
)
from .pipeline import Mode, PipelineConfiguration, PipelineResult, StageConfig, run_pipeline

__version__ = "0.1.0"

__all__ = [
    "CipherChainError",
    "ConfigError",
    "DecryptionError",
    "EncryptionError",
    "FormatError",
    "InvalidInputError",
    "Mode",
    "PipelineConfiguration",
    "PipelineResult",
    "StageConfig",
    "run_pipeline",
]
