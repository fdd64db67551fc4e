from __future__ import annotations

from ..context import StepContext
from ..lib.wslconfig import ensure_option, has_option, read_text
from ..pipeline import StepResult


class PatchWslConfigStep:
    step_id = "06_patch_wslconfig"

    def is_satisfied(self, ctx: StepContext) -> bool:
        text, _ = read_text(ctx.cfg.wslconfig_path)
        return has_option(text, ctx.cfg.kernel_command_line)

    def run(self, ctx: StepContext) -> StepResult:
        ensure_option(ctx.cfg.wslconfig_path, ctx.cfg.kernel_command_line, dry_run=ctx.dry_run)
        return StepResult.success()
