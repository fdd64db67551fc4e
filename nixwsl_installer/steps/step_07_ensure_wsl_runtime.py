from __future__ import annotations

import logging

from ..context import StepContext
from ..pipeline import StepResult

logger = logging.getLogger(__name__)


class EnsureWslRuntimeStep:
    step_id = "07_ensure_wsl_runtime"

    def is_satisfied(self, ctx: StepContext) -> bool:
        version = ctx.host.runtime_version()
        if version is not None:
            logger.info("WSL runtime present (major version %d)", version)
        return version is not None

    def run(self, ctx: StepContext) -> StepResult:
        ctx.host.install_runtime()
        return StepResult.success("installed")
