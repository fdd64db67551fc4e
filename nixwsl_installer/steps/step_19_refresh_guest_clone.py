from __future__ import annotations

from ..context import StepContext
from ..pipeline import StepResult


class RefreshGuestCloneStep:
    step_id = "19_refresh_guest_clone"

    def run(self, ctx: StepContext) -> StepResult:
        ctx.guest.reclone(ctx.cfg.repo_url, ctx.cfg.guest_clone_path)
        return StepResult.success()
