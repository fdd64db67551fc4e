from __future__ import annotations

import logging

from ..context import StepContext
from ..pipeline import StepResult

logger = logging.getLogger(__name__)


class UnregisterExistingStep:
    step_id = "08_unregister_existing"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return not ctx.host.is_registered(ctx.cfg.distro_name)

    def run(self, ctx: StepContext) -> StepResult:
        logger.info("Unregistering existing distribution %s", ctx.cfg.distro_name)
        ctx.host.unregister(ctx.cfg.distro_name)
        return StepResult.success()
