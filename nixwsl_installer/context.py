from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .config import ProvisioningConfig
from .lib.command import Runner, run_cmd
from .lib.guest import NixosGuest
from .lib.wsl import WslHost


@dataclass(frozen=True)
class StepContext:
    """Everything a step may touch, passed explicitly to every step."""

    cfg: ProvisioningConfig
    runner: Runner = run_cmd
    session: Optional[Any] = None
    sleep: Callable[[float], None] = time.sleep
    dry_run: bool = False
    host: WslHost = field(init=False)
    guest: NixosGuest = field(init=False)

    def __post_init__(self) -> None:
        host = WslHost(runner=self.runner, dry_run=self.dry_run)
        object.__setattr__(self, "host", host)
        object.__setattr__(self, "guest", NixosGuest(host, self.cfg.distro_name, user=self.cfg.guest_user))
