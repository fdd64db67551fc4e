from __future__ import annotations

from .step_14_rebuild_bootstrap import RebuildStep


class RebuildFromGuestCloneStep(RebuildStep):
    step_id = "17_rebuild_from_guest_clone"
