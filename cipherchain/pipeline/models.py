from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..cipher.registry import Direction, StageType
from ..config import Settings, load_settings


class Mode(str, Enum):
    ENCRYPTING = "encrypting"
    DECRYPTING = "decrypting"

    @property
    def direction(self) -> Direction:
        return "encrypt" if self is Mode.ENCRYPTING else "decrypt"

    def toggled(self) -> "Mode":
        return Mode.DECRYPTING if self is Mode.ENCRYPTING else Mode.ENCRYPTING

    @classmethod
    def _missing_(cls, value):
        # Case-insensitive: "Encrypting" and "DECRYPTING" resolve too.
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return None


class StageConfig(BaseModel):
    """One configured cipher instance within the chain."""

    id: str = Field(..., min_length=1, max_length=80)
    type: StageType
    enabled: bool = Field(default=True)
    # Shape depends on ``type``; validated by the matching engine at run time.
    parameters: Dict[str, Any] = Field(default_factory=dict)


class PipelineConfiguration(BaseModel):
    """Ordered stage list. Order matters: decryption walks it backwards."""

    stages: List[StageConfig] = Field(default_factory=list)

    @field_validator("stages")
    @classmethod
    def _unique_ids(cls, v: List[StageConfig]) -> List[StageConfig]:
        seen = set()
        for stage in v:
            if stage.id in seen:
                raise ValueError(f"Duplicate stage id: {stage.id}")
            seen.add(stage.id)
        return v

    def enabled_stages(self) -> List[StageConfig]:
        return [s for s in self.stages if s.enabled]

    def get(self, stage_id: str) -> StageConfig:
        for stage in self.stages:
            if stage.id == stage_id:
                return stage
        raise KeyError(f"Unknown stage id: {stage_id}")

    def index_of(self, stage_id: str) -> int:
        for i, stage in enumerate(self.stages):
            if stage.id == stage_id:
                return i
        raise KeyError(f"Unknown stage id: {stage_id}")


class StageResult(BaseModel):
    stage_id: str
    output: str


class PipelineResult(BaseModel):
    intermediate_results: List[StageResult] = Field(default_factory=list)
    final_result: str = Field(default="")
    error: Optional[str] = Field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None

    def output_of(self, stage_id: str) -> Optional[str]:
        for r in self.intermediate_results:
            if r.stage_id == stage_id:
                return r.output
        return None


def default_configuration(settings: Optional[Settings] = None) -> PipelineConfiguration:
    """Initial chain: block cipher on, both classical ciphers off."""
    s = settings or load_settings()
    return PipelineConfiguration(
        stages=[
            StageConfig(
                id="block1",
                type="block",
                enabled=True,
                parameters={"key": s.default_block_key, "keyFormat": s.default_block_key_format},
            ),
            StageConfig(
                id="running1",
                type="running-key",
                enabled=False,
                parameters={"key": s.default_running_key},
            ),
            StageConfig(
                id="repeating1",
                type="repeating-key",
                enabled=False,
                parameters={"key": s.default_repeating_key},
            ),
        ]
    )
