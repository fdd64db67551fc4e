from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from .command import CmdResult, Runner, run_cmd

logger = logging.getLogger(__name__)

WSL_EXE = "wsl.exe"
DISM_EXE = "dism.exe"
POWERSHELL_EXE = "powershell.exe"

# dism.exe: "reboot required" is still a successful enable.
DISM_REBOOT_REQUIRED = 3010

# Ask wsl.exe for UTF-8 instead of UTF-16LE console output.
WSL_ENV = {"WSL_UTF8": "1"}

_FEATURE_STATE_RE = re.compile(r"^\s*State\s*:\s*(\w+)", re.IGNORECASE | re.MULTILINE)
_WSL_VERSION_RE = re.compile(r"WSL version:\s*(\d+)\.", re.IGNORECASE)

_VIRT_QUERY = (
    "(Get-CimInstance Win32_Processor).VirtualizationFirmwareEnabled; "
    "(Get-CimInstance Win32_ComputerSystem).HypervisorPresent"
)


def parse_feature_state(output: str) -> Optional[str]:
    m = _FEATURE_STATE_RE.search(output or "")
    return m.group(1) if m else None


def parse_wsl_major_version(output: str) -> Optional[int]:
    m = _WSL_VERSION_RE.search(output or "")
    return int(m.group(1)) if m else None


def parse_distribution_list(output: str) -> List[str]:
    """Parse `wsl --list --quiet`: one name per line, possibly NUL-padded."""

    names: List[str] = []
    for line in (output or "").replace("\x00", "").splitlines():
        name = line.strip().lstrip("\ufeff")
        if name:
            names.append(name)
    return names


class WslHost:
    """Host-side WSL control plane: optional features, runtime and distributions."""

    def __init__(self, *, runner: Runner = run_cmd, dry_run: bool = False) -> None:
        self._run = runner
        self.dry_run = dry_run

    def _wsl(self, args: Sequence[str], *, check: bool = True, input_text: str | None = None) -> CmdResult:
        return self._run([WSL_EXE, *args], check=check, env=WSL_ENV, input_text=input_text, dry_run=self.dry_run)

    # Windows optional features

    def feature_enabled(self, feature: str) -> bool:
        r = self._run(
            [DISM_EXE, "/online", "/get-featureinfo", f"/featurename:{feature}"],
            check=False,
            dry_run=self.dry_run,
        )
        if r.returncode != 0:
            return False
        return (parse_feature_state(r.stdout) or "").lower() == "enabled"

    def enable_feature(self, feature: str) -> bool:
        """Enable a feature; returns True when Windows asks for a reboot."""

        r = self._run(
            [DISM_EXE, "/online", "/enable-feature", f"/featurename:{feature}", "/all", "/norestart"],
            ok_codes=(0, DISM_REBOOT_REQUIRED),
            dry_run=self.dry_run,
        )
        reboot = r.returncode == DISM_REBOOT_REQUIRED
        if reboot:
            logger.warning("Feature %s enabled; a reboot is required to activate it", feature)
        return reboot

    def virtualization_enabled(self) -> bool:
        if self.dry_run:
            return True
        r = self._run(
            [POWERSHELL_EXE, "-NoProfile", "-NonInteractive", "-Command", _VIRT_QUERY],
            check=False,
        )
        if r.returncode != 0:
            return False
        return any(line.strip().lower() == "true" for line in r.stdout.splitlines())

    # WSL runtime

    def runtime_version(self) -> Optional[int]:
        r = self._wsl(["--version"], check=False)
        if r.returncode != 0:
            return None
        return parse_wsl_major_version(r.stdout)

    def install_runtime(self) -> None:
        self._wsl(["--install", "--no-distribution"])

    def set_default_version(self, version: int = 2) -> None:
        self._wsl(["--set-default-version", str(version)])

    def shutdown(self) -> None:
        self._wsl(["--shutdown"])

    # Distributions

    def list_distributions(self) -> List[str]:
        r = self._wsl(["--list", "--quiet"], check=False)
        if r.returncode != 0:
            # wsl.exe exits non-zero when no distribution is registered.
            return []
        return parse_distribution_list(r.stdout)

    def is_registered(self, name: str) -> bool:
        wanted = name.lower()
        return any(d.lower() == wanted for d in self.list_distributions())

    def unregister(self, name: str) -> None:
        self._wsl(["--unregister", name])

    def import_distribution(self, name: str, install_dir: str, image: str, *, version: int = 2) -> None:
        self._wsl(["--import", name, install_dir, image, "--version", str(version)])

    def set_default(self, name: str) -> None:
        self._wsl(["--set-default", name])

    def exec(self, name: str, script: str, *, user: str = "root", input_text: str | None = None) -> CmdResult:
        """Run a shell script inside a distribution; non-zero exit raises.

        ``input_text`` is fed to the script on stdin and never logged.
        """

        return self._wsl(["-d", name, "-u", user, "--", "bash", "-lc", script], input_text=input_text)
