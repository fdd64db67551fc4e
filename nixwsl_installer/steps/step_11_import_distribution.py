from __future__ import annotations

import logging

from ..context import StepContext
from ..pipeline import StepResult

logger = logging.getLogger(__name__)


class ImportDistributionStep:
    step_id = "11_import_distribution"

    def run(self, ctx: StepContext) -> StepResult:
        cfg = ctx.cfg
        if not ctx.dry_run:
            cfg.distro_dir.mkdir(parents=True, exist_ok=True)
        ctx.host.import_distribution(cfg.distro_name, str(cfg.distro_dir), str(cfg.image_path))
        logger.info("Imported %s into %s", cfg.distro_name, cfg.distro_dir)
        return StepResult.success()
