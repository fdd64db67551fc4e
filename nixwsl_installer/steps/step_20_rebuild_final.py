from __future__ import annotations

from ..context import StepContext
from .step_14_rebuild_bootstrap import RebuildStep


class RebuildFinalStep(RebuildStep):
    step_id = "20_rebuild_final"

    def flake_dir(self, ctx: StepContext) -> str:
        return ctx.cfg.guest_clone_path
