"""Pipeline orchestrator: run the enabled stages over an input text.

``run_pipeline`` is a pure function of (input, configuration, mode). Callers
re-invoke it after every input or configuration change; nothing is cached
between runs.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from ..cipher.registry import EngineRegistry
from ..errors import CipherChainError
from .models import Mode, PipelineConfiguration, PipelineResult, StageConfig, StageResult

logger = logging.getLogger(__name__)


def processing_order(config: PipelineConfiguration, mode: Mode) -> List[StageConfig]:
    """Enabled stages in the order they run for ``mode``."""
    stages = config.enabled_stages()
    if mode is Mode.DECRYPTING:
        stages.reverse()
    return stages


def run_pipeline(
    input_text: str,
    config: PipelineConfiguration,
    mode: Union[Mode, str] = Mode.ENCRYPTING,
    *,
    registry: Optional[EngineRegistry] = None,
    previous: Optional[PipelineResult] = None,
) -> PipelineResult:
    """Apply every enabled stage to ``input_text``.

    Encrypting walks the stages in configured order, decrypting walks the
    same list backwards. Each stage's output feeds the next stage and is
    recorded in processing order.

    A failing stage stops the run. The returned result then carries the
    error message together with the intermediate and final values of
    ``previous`` (the last run the caller displayed), unchanged.

    Args:
        input_text: Text entered by the user (plaintext or ciphertext).
        config: Ordered stage configuration.
        mode: Encrypting or decrypting.
        registry: Optional engine registry; uses default if not provided.
        previous: Result of the preceding run, kept on failure.

    Returns:
        PipelineResult with intermediate results, final result and error.
    """
    mode = Mode(mode)

    if not input_text:
        return PipelineResult()

    stages = processing_order(config, mode)
    if not stages:
        return PipelineResult(final_result=input_text)

    reg = registry or EngineRegistry()
    logger.debug(
        "Running %d stage(s) %s: %s",
        len(stages), mode.value, ", ".join(s.id for s in stages),
    )

    current = input_text
    intermediate: List[StageResult] = []
    for stage in stages:
        try:
            engine = reg.get(stage.type)
            current = engine.apply(current, stage.parameters, mode.direction)
        except (CipherChainError, KeyError, ValueError) as e:
            message = f"{stage.id} ({stage.type}): {e}"
            logger.warning("Pipeline aborted at stage %s", message)
            kept = previous or PipelineResult()
            return PipelineResult(
                intermediate_results=list(kept.intermediate_results),
                final_result=kept.final_result,
                error=message,
            )
        intermediate.append(StageResult(stage_id=stage.id, output=current))

    logger.debug("Pipeline finished, %d characters out", len(current))
    return PipelineResult(intermediate_results=intermediate, final_result=current)
