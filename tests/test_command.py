from __future__ import annotations

from types import SimpleNamespace

import pytest

from nixwsl_installer.lib import command
from nixwsl_installer.lib.command import CommandError, run_cmd


def _fake_run(returncode=0, stdout="", stderr=""):
    calls = []

    def fake(argv, **kwargs):
        calls.append((argv, kwargs))
        return SimpleNamespace(returncode=returncode, stdout=stdout, stderr=stderr)

    return fake, calls


def test_strips_nul_bytes(monkeypatch):
    fake, calls = _fake_run(stdout="N\x00i\x00x\x00O\x00S\x00\n")
    monkeypatch.setattr(command.subprocess, "run", fake)

    r = run_cmd(["wsl.exe", "--list", "--quiet"], env={"WSL_UTF8": "1"})

    assert r.stdout == "NixOS\n"
    assert calls[0][1]["env"]["WSL_UTF8"] == "1"


def test_nonzero_exit_raises(monkeypatch):
    fake, _ = _fake_run(returncode=2, stderr="bad option")
    monkeypatch.setattr(command.subprocess, "run", fake)

    with pytest.raises(CommandError) as exc:
        run_cmd(["git", "pull", "--ff-only"])
    assert exc.value.returncode == 2
    assert "bad option" in str(exc.value)


def test_ok_codes_and_check_false(monkeypatch):
    fake, _ = _fake_run(returncode=3010)
    monkeypatch.setattr(command.subprocess, "run", fake)

    assert run_cmd(["dism.exe"], ok_codes=(0, 3010)).returncode == 3010
    assert run_cmd(["dism.exe"], check=False).returncode == 3010


def test_missing_executable(monkeypatch):
    def boom(argv, **kwargs):
        raise FileNotFoundError(2, "No such file", argv[0])

    monkeypatch.setattr(command.subprocess, "run", boom)

    with pytest.raises(CommandError) as exc:
        run_cmd(["wsl.exe", "--version"])
    assert exc.value.returncode == 127
    assert run_cmd(["wsl.exe", "--version"], check=False).returncode == 127


def test_dry_run_does_not_execute(monkeypatch):
    monkeypatch.setattr(command.subprocess, "run", lambda *a, **k: pytest.fail("executed"))
    assert run_cmd(["wsl.exe", "--shutdown"], dry_run=True).returncode == 0
