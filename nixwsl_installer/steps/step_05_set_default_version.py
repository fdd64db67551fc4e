from __future__ import annotations

from ..context import StepContext
from ..pipeline import StepResult


class SetDefaultVersionStep:
    step_id = "05_set_default_version"

    def run(self, ctx: StepContext) -> StepResult:
        ctx.host.set_default_version(2)
        return StepResult.success()
