from __future__ import annotations

from ..context import StepContext
from ..pipeline import StepResult


class CheckVirtualizationStep:
    step_id = "02_check_virtualization"

    def run(self, ctx: StepContext) -> StepResult:
        if not ctx.host.virtualization_enabled():
            return StepResult.failure(
                "Hardware virtualization is disabled; enable VT-x/AMD-V in the firmware settings"
            )
        return StepResult.success()
