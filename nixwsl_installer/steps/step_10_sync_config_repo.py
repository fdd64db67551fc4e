from __future__ import annotations

from ..context import StepContext
from ..lib.git import sync_repository
from ..pipeline import StepResult


class SyncConfigRepoStep:
    step_id = "10_sync_config_repo"

    def run(self, ctx: StepContext) -> StepResult:
        action = sync_repository(
            ctx.cfg.repo_url,
            ctx.cfg.local_repo_dir,
            runner=ctx.runner,
            dry_run=ctx.dry_run,
        )
        return StepResult.success(action)
