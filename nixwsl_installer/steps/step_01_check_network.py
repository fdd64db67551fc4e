from __future__ import annotations

import logging

from ..context import StepContext
from ..lib.net import is_reachable
from ..pipeline import StepResult

logger = logging.getLogger(__name__)


class CheckNetworkStep:
    step_id = "01_check_network"

    def run(self, ctx: StepContext) -> StepResult:
        url = ctx.cfg.network_check_url
        if ctx.dry_run:
            logger.info("Would check reachability of %s", url)
            return StepResult.success()
        if not is_reachable(url, session=ctx.session):
            return StepResult.failure(f"No network connectivity to {url}")
        return StepResult.success(f"{url} reachable")
