"""Mutable pipeline session driven by an external configuration surface.

Every mutation re-runs :func:`run_pipeline` from scratch, except
:meth:`PipelineSession.toggle_mode`, which swaps input and output in place.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..cipher.registry import EngineRegistry
from ..config import Settings, load_settings
from .models import Mode, PipelineConfiguration, PipelineResult, StageResult, default_configuration
from .orchestrator import run_pipeline

logger = logging.getLogger(__name__)


class PipelineSession:
    def __init__(
        self,
        configuration: Optional[PipelineConfiguration] = None,
        *,
        settings: Optional[Settings] = None,
        registry: Optional[EngineRegistry] = None,
    ):
        self._settings = settings or load_settings()
        self._initial = configuration or default_configuration(self._settings)
        self.registry = registry or EngineRegistry(block_mode=self._settings.block_mode)
        self.reset()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def intermediate_results(self) -> List[StageResult]:
        return self.result.intermediate_results

    @property
    def final_result(self) -> str:
        return self.result.final_result

    @property
    def error(self) -> Optional[str]:
        return self.result.error

    @property
    def is_encrypting(self) -> bool:
        return self.mode is Mode.ENCRYPTING

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_input(self, text: str) -> PipelineResult:
        self.input = text
        return self._recompute()

    def toggle_stage(self, stage_id: str, enabled: bool) -> PipelineResult:
        self.configuration.get(stage_id).enabled = enabled
        return self._recompute()

    def update_stage_param(self, stage_id: str, name: str, value: Any) -> PipelineResult:
        stage = self.configuration.get(stage_id)
        stage.parameters = {**stage.parameters, name: value}
        return self._recompute()

    def reorder_stages(self, source_index: int, destination_index: int) -> PipelineResult:
        """Move the stage at ``source_index`` so it ends up at ``destination_index``."""
        stages = list(self.configuration.stages)
        n = len(stages)
        if not (0 <= source_index < n and 0 <= destination_index < n):
            raise IndexError(f"reorder indices out of range: {source_index} -> {destination_index}")
        moved = stages.pop(source_index)
        stages.insert(destination_index, moved)
        self.configuration.stages = stages
        return self._recompute()

    def toggle_mode(self) -> None:
        """Flip direction and treat the last output as the new input.

        No recomputation happens here: the previous input becomes the
        displayed result as-is and any error message stays visible.
        """
        self.mode = self.mode.toggled()
        self.input, final = self.result.final_result, self.input
        self.result = PipelineResult(final_result=final, error=self.result.error)
        logger.debug("Mode switched to %s", self.mode.value)

    def reset(self) -> None:
        self.input = ""
        self.mode = Mode.ENCRYPTING
        self.configuration = self._initial.model_copy(deep=True)
        self.result = PipelineResult()

    def _recompute(self) -> PipelineResult:
        self.result = run_pipeline(
            self.input,
            self.configuration,
            self.mode,
            registry=self.registry,
            previous=self.result,
        )
        return self.result
