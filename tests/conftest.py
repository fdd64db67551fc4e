from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import pytest
import requests

from nixwsl_installer.config import ProvisioningConfig
from nixwsl_installer.lib.command import CmdResult, CommandError
from nixwsl_installer.logging_utils import reset_logging


class FakeWindowsHost:
    """Command runner that simulates dism, wsl.exe, powershell and git."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.enabled_features: set = set()
        self.wsl_installed = False
        self.distros: List[str] = []
        self.virtualization = True
        self.diverged = False
        self.failing_guest_scripts: List[str] = []
        self.inputs: List[Optional[str]] = []

    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env=None,
        cwd=None,
        input_text=None,
        ok_codes: Sequence[int] = (0,),
        dry_run: bool = False,
    ) -> CmdResult:
        argv = [str(a) for a in argv]
        self.calls.append(argv)
        self.inputs.append(input_text)
        rc, out = (0, "") if dry_run else self._dispatch(argv)
        if check and rc not in ok_codes:
            raise CommandError(argv, rc, stderr=out)
        return CmdResult(argv=argv, returncode=rc, stdout=out, stderr="")

    def _dispatch(self, argv: List[str]):
        exe, args = argv[0], argv[1:]
        if exe == "dism.exe":
            feature = next(a.split(":", 1)[1] for a in args if a.startswith("/featurename:"))
            if "/get-featureinfo" in args:
                state = "Enabled" if feature in self.enabled_features else "Disabled"
                return 0, f"Feature Name : {feature}\nState : {state}\n"
            self.enabled_features.add(feature)
            return 0, "The operation completed successfully."
        if exe == "powershell.exe":
            return 0, "True\nFalse\n" if self.virtualization else "False\nFalse\n"
        if exe == "git":
            if args[0] == "clone":
                Path(args[2]).mkdir(parents=True, exist_ok=True)
                return 0, ""
            if "pull" in args:
                return (1, "fatal: Not possible to fast-forward, aborting.") if self.diverged else (0, "")
        if exe == "wsl.exe":
            return self._wsl(args)
        return 0, ""

    def _wsl(self, args: List[str]):
        if args == ["--version"]:
            return (0, "WSL version: 2.3.26.0\nKernel version: 5.15\n") if self.wsl_installed else (1, "")
        if args[:1] == ["--install"]:
            self.wsl_installed = True
            return 0, ""
        if args == ["--list", "--quiet"]:
            if not self.distros:
                return 1, "Windows Subsystem for Linux has no installed distributions."
            return 0, "\n".join(self.distros) + "\n"
        if args[:1] == ["--unregister"]:
            self.distros.remove(args[1])
            return 0, ""
        if args[:1] == ["--import"]:
            self.distros.append(args[1])
            return 0, ""
        if args[:1] == ["-d"]:
            script = args[-1]
            if any(s in script for s in self.failing_guest_scripts):
                return 1, f"guest command failed: {script}"
        return 0, ""

    def commands(self, exe: str) -> List[List[str]]:
        return [c for c in self.calls if c[0] == exe]

    def guest_scripts(self) -> List[str]:
        return [c[-1] for c in self.calls if c[0] == "wsl.exe" and c[1:2] == ["-d"]]


class FakeResponse:
    def __init__(self, chunks: Sequence[bytes] = (b"image-bytes",), status_code: int = 200) -> None:
        self.chunks = list(chunks)
        self.status_code = status_code

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size: int = 1):
        yield from self.chunks


class FakeSession:
    def __init__(self, *, get_failures: int = 0, offline: bool = False) -> None:
        self.get_failures = get_failures
        self.offline = offline
        self.get_calls: List[str] = []
        self.head_calls: List[str] = []

    def head(self, url, **kwargs):
        self.head_calls.append(url)
        if self.offline:
            raise requests.ConnectionError("network unreachable")
        return FakeResponse(status_code=200)

    def get(self, url, **kwargs):
        self.get_calls.append(url)
        if len(self.get_calls) <= self.get_failures:
            raise requests.ConnectionError(f"transient failure #{len(self.get_calls)}")
        return FakeResponse()


class RecordingNotifier:
    def __init__(self) -> None:
        self.events: List[tuple] = []

    def notify(self, step_id: str, reason: str) -> None:
        self.events.append((step_id, reason))


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def host() -> FakeWindowsHost:
    return FakeWindowsHost()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def cfg(tmp_path: Path) -> ProvisioningConfig:
    return ProvisioningConfig(
        install_root=tmp_path / "root",
        wslconfig_path=tmp_path / "home" / ".wslconfig",
        repo_url="https://example.invalid/dotfiles.git",
        download_backoff=2.0,
    )


def find_log(cfg: ProvisioningConfig) -> Optional[Path]:
    logs = sorted(cfg.logs_dir.glob("setup_*.log"))
    return logs[-1] if logs else None


class ClosingSession(FakeSession):
    """FakeSession that records whether it was used as a context manager."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False
