from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    # Default stage parameters
    default_block_key: str = Field(default="mysecretkey12345")
    default_block_key_format: Literal["text", "hex"] = Field(default="text")
    default_running_key: str = Field(default="SECRET")
    default_repeating_key: str = Field(default="CIPHER")

    # Block engine
    block_mode: Literal["codebook", "single"] = Field(
        default="codebook",
        description="codebook: every 16-byte block independently; single: first block only",
    )

    # Logging
    log_level: str = Field(default="INFO")

    # Evaluation / reproducibility
    global_seed: int = Field(default=1337)
    roundtrip_vectors: int = Field(default=200, ge=1, le=100_000)

    # Paths
    reports_dir: str = Field(default="test-reports")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        default_block_key=os.getenv("CIPHERCHAIN_BLOCK_KEY", "mysecretkey12345"),
        default_block_key_format=os.getenv("CIPHERCHAIN_BLOCK_KEY_FORMAT", "text").strip().lower(),
        default_running_key=os.getenv("CIPHERCHAIN_RUNNING_KEY", "SECRET"),
        default_repeating_key=os.getenv("CIPHERCHAIN_REPEATING_KEY", "CIPHER"),
        block_mode=os.getenv("CIPHERCHAIN_BLOCK_MODE", "codebook").strip().lower(),
        log_level=os.getenv("CIPHERCHAIN_LOG_LEVEL", "INFO").strip().upper(),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        roundtrip_vectors=int(os.getenv("CIPHERCHAIN_ROUNDTRIP_VECTORS", "200")),
        reports_dir=os.getenv("CIPHERCHAIN_REPORTS_DIR", "test-reports"),
    )
