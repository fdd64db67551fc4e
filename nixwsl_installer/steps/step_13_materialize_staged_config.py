from __future__ import annotations

from ..context import StepContext
from ..lib.paths import windows_to_wsl_path
from ..pipeline import StepResult


class MaterializeStagedConfigStep:
    """Bootstrap phase: copy the host-side clone into the guest config dir."""

    step_id = "13_materialize_staged_config"

    def run(self, ctx: StepContext) -> StepResult:
        source = windows_to_wsl_path(str(ctx.cfg.local_repo_dir))
        ctx.guest.materialize(source, ctx.cfg.guest_config_dir)
        return StepResult.success(f"from {source}")
