from __future__ import annotations

from ..context import StepContext
from ..pipeline import StepResult


class MaterializeGuestConfigStep:
    """Finalize phase: clone inside the guest, then copy it into the config dir."""

    step_id = "16_materialize_guest_config"

    def run(self, ctx: StepContext) -> StepResult:
        clone_dir = ctx.cfg.guest_clone_path
        ctx.guest.clone_if_absent(ctx.cfg.repo_url, clone_dir)
        ctx.guest.materialize(clone_dir, ctx.cfg.guest_config_dir)
        return StepResult.success(f"from {clone_dir}")
