from __future__ import annotations

import logging
import shlex

from .command import CmdResult
from .wsl import WslHost

logger = logging.getLogger(__name__)

NIX_FLAKES_CONFIG = "experimental-features = nix-command flakes"


class NixosGuest:
    """Commands issued inside the NixOS guest distribution."""

    def __init__(self, host: WslHost, distro: str, *, user: str = "nixos") -> None:
        self.host = host
        self.distro = distro
        self.user = user

    @property
    def home(self) -> str:
        return f"/home/{self.user}"

    def run(self, script: str, *, as_user: bool = False, input_text: str | None = None) -> CmdResult:
        return self.host.exec(self.distro, script, user=self.user if as_user else "root", input_text=input_text)

    def materialize(self, source: str, target: str) -> None:
        """Create target and copy the contents of source into it."""

        src = shlex.quote(source.rstrip("/") + "/.")
        dst = shlex.quote(target)
        self.run(f"mkdir -p {dst} && cp -rf {src} {dst}/")
        logger.info("Copied %s into %s (%s)", source, target, self.distro)

    def rebuild(self, flake_dir: str, target: str) -> None:
        flake = shlex.quote(f"{flake_dir.rstrip('/')}#{target}")
        cfg = shlex.quote(NIX_FLAKES_CONFIG)
        self.run(f"NIX_CONFIG={cfg} nixos-rebuild switch --flake {flake}")
        logger.info("Rebuilt %s from %s#%s", self.distro, flake_dir, target)

    def clone_if_absent(self, url: str, dest: str) -> None:
        d = shlex.quote(dest)
        self.run(f"[ -d {d}/.git ] || git clone {shlex.quote(url)} {d}", as_user=True)

    def reclone(self, url: str, dest: str) -> None:
        d = shlex.quote(dest)
        self.run(f"rm -rf {d} && git clone {shlex.quote(url)} {d}", as_user=True)

    def fix_home_ownership(self) -> None:
        self.run(f"chown -R {self.user}:users {shlex.quote(self.home)}")

    def set_password(self, password: str) -> None:
        # Credentials go over stdin so they never reach the command log.
        self.run("chpasswd", input_text=f"{self.user}:{password}\n")

    def clear_profile_state(self) -> None:
        """Drop stale user profile generations and per-user GC roots."""

        self.run(
            f"rm -rf {shlex.quote(self.home)}/.local/state/nix/profiles "
            f"/nix/var/nix/profiles/per-user/{self.user} "
            f"/nix/var/nix/gcroots/per-user/{self.user}"
        )
