from __future__ import annotations

import logging

from ..context import StepContext
from ..lib.download import download_with_retry
from ..pipeline import StepResult

logger = logging.getLogger(__name__)


class DownloadImageStep:
    step_id = "09_download_image"

    def is_satisfied(self, ctx: StepContext) -> bool:
        return ctx.cfg.image_path.is_file()

    def run(self, ctx: StepContext) -> StepResult:
        cfg = ctx.cfg
        if ctx.dry_run:
            logger.info("Would download %s -> %s", cfg.image_url, cfg.image_path)
            return StepResult.success()

        attempt = download_with_retry(
            cfg.image_url,
            cfg.image_path,
            attempts=cfg.download_attempts,
            backoff=cfg.download_backoff,
            session=ctx.session,
            sleep=ctx.sleep,
        )
        return StepResult.success(f"downloaded on attempt {attempt}")
