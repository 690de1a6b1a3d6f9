"""Cipher-chain pipeline: configuration models, orchestrator and session."""

from .models import (
    Mode,
    PipelineConfiguration,
    PipelineResult,
    StageConfig,
    StageResult,
    default_configuration,
)
from .orchestrator import processing_order, run_pipeline
from .session import PipelineSession

__all__ = [
    "Mode",
    "PipelineConfiguration",
    "PipelineResult",
    "StageConfig",
    "StageResult",
    "default_configuration",
    "processing_order",
    "run_pipeline",
    "PipelineSession",
]
