from __future__ import annotations

from ..context import StepContext
from ..pipeline import StepResult


class SetDefaultDistributionStep:
    step_id = "12_set_default_distribution"

    def run(self, ctx: StepContext) -> StepResult:
        ctx.host.set_default(ctx.cfg.distro_name)
        return StepResult.success()
