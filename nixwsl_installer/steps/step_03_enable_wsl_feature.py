from __future__ import annotations

import logging

from ..context import StepContext
from ..pipeline import StepResult

logger = logging.getLogger(__name__)


class EnableFeatureStep:
    """Enable a Windows optional feature unless dism already reports it enabled.

    Subclasses set ``step_id`` and ``feature_attr`` (the config field naming
    the feature).
    """

    feature_attr: str

    def feature(self, ctx: StepContext) -> str:
        return str(getattr(ctx.cfg, self.feature_attr))

    def is_satisfied(self, ctx: StepContext) -> bool:
        return ctx.host.feature_enabled(self.feature(ctx))

    def run(self, ctx: StepContext) -> StepResult:
        name = self.feature(ctx)
        reboot = ctx.host.enable_feature(name)
        logger.info("Enabled Windows feature %s", name)
        return StepResult.success("reboot required" if reboot else "")


class EnableWslFeatureStep(EnableFeatureStep):
    step_id = "03_enable_wsl_feature"
    feature_attr = "wsl_feature"
