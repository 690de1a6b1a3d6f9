"""Stage engines: one entry per cipher type the pipeline can dispatch to.

Every engine exposes the same ``apply(text, parameters, direction)`` call, so
the orchestrator never branches on the cipher type itself.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config import load_settings
from ..errors import ConfigError
from .block import BlockCipher128, BlockMode
from .classical import (
    decrypt_repeating_key,
    decrypt_running_key,
    encrypt_repeating_key,
    encrypt_running_key,
)

StageType = Literal["block", "running-key", "repeating-key"]
Direction = Literal["encrypt", "decrypt"]


class BlockParameters(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    key: str = Field(default="")
    key_format: Literal["text", "hex"] = Field(default="text", alias="keyFormat")


class ClassicalParameters(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: str = Field(default="")


@dataclass(frozen=True)
class StageEngine:
    """A cipher type with its parameter schema and both directions."""
    stage_type: str
    name: str
    description: str
    parameters: Type[BaseModel]
    forward: Callable[[str, Any], str]
    inverse: Callable[[str, Any], str]

    def parse_parameters(self, raw: Mapping[str, Any]) -> BaseModel:
        try:
            return self.parameters.model_validate(dict(raw))
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()
            )
            raise ConfigError(f"Invalid {self.name} parameters: {problems}") from exc

    def apply(self, text: str, parameters: Mapping[str, Any], direction: Direction) -> str:
        params = self.parse_parameters(parameters)
        if direction == "encrypt":
            return self.forward(text, params)
        if direction == "decrypt":
            return self.inverse(text, params)
        raise ValueError(f"Unknown direction: {direction}")


def builtin_engines(block_mode: BlockMode = "codebook") -> Dict[str, StageEngine]:
    """Return the closed set of engines keyed by stage type."""
    block = BlockCipher128(mode=block_mode)
    engines: Dict[str, StageEngine] = {}

    engines["block"] = StageEngine(
        stage_type="block",
        name="TBC-128",
        description="128-bit substitution-permutation block cipher, hex output",
        parameters=BlockParameters,
        forward=lambda text, p: block.encrypt(text, p.key, p.key_format),
        inverse=lambda text, p: block.decrypt(text, p.key, p.key_format),
    )
    engines["running-key"] = StageEngine(
        stage_type="running-key",
        name="Running-key",
        description="Autokey cipher: the plaintext extends the key stream",
        parameters=ClassicalParameters,
        forward=lambda text, p: encrypt_running_key(text, p.key),
        inverse=lambda text, p: decrypt_running_key(text, p.key),
    )
    engines["repeating-key"] = StageEngine(
        stage_type="repeating-key",
        name="Repeating-key",
        description="Vigenere cipher: the key repeats across the message",
        parameters=ClassicalParameters,
        forward=lambda text, p: encrypt_repeating_key(text, p.key),
        inverse=lambda text, p: decrypt_repeating_key(text, p.key),
    )

    return engines


class EngineRegistry:
    """Lookup of stage engines by stage type."""

    def __init__(self, block_mode: Optional[BlockMode] = None):
        if block_mode is None:
            block_mode = load_settings().block_mode
        self.block_mode: BlockMode = block_mode
        self._engines = builtin_engines(block_mode)

    def get(self, stage_type: str) -> StageEngine:
        if stage_type not in self._engines:
            raise KeyError(f"Unknown stage type: {stage_type}")
        return self._engines[stage_type]

    def list(self) -> List[StageEngine]:
        return [self._engines[t] for t in sorted(self._engines)]

    def exists(self, stage_type: str) -> bool:
        return stage_type in self._engines
