from __future__ import annotations

from ..context import StepContext
from ..pipeline import StepResult


class RebuildStep:
    """nixos-rebuild switch against a flake directory inside the guest."""

    step_id = "14_rebuild_bootstrap"

    def flake_dir(self, ctx: StepContext) -> str:
        return ctx.cfg.guest_config_dir

    def run(self, ctx: StepContext) -> StepResult:
        flake_dir = self.flake_dir(ctx)
        ctx.guest.rebuild(flake_dir, ctx.cfg.build_target)
        return StepResult.success(f"{flake_dir}#{ctx.cfg.build_target}")


class RebuildBootstrapStep(RebuildStep):
    step_id = "14_rebuild_bootstrap"
