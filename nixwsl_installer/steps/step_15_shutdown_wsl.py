from __future__ import annotations

from ..context import StepContext
from ..pipeline import StepResult


class ShutdownWslStep:
    step_id = "15_shutdown_wsl"

    def run(self, ctx: StepContext) -> StepResult:
        # Restart the VM so the new system's init takes over.
        ctx.host.shutdown()
        return StepResult.success()
