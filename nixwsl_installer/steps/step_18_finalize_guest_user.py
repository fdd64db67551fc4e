from __future__ import annotations

import logging

from ..context import StepContext
from ..pipeline import StepResult

logger = logging.getLogger(__name__)


class FinalizeGuestUserStep:
    step_id = "18_finalize_guest_user"

    def run(self, ctx: StepContext) -> StepResult:
        guest = ctx.guest
        guest.fix_home_ownership()
        guest.set_password(ctx.cfg.guest_password)
        guest.clear_profile_state()
        logger.info("Guest user %s finalized", guest.user)
        return StepResult.success()
