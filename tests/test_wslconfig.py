from __future__ import annotations

from nixwsl_installer.context import StepContext
from nixwsl_installer.lib.wslconfig import ensure_option, has_option, patch_text, read_text
from nixwsl_installer.steps import PatchWslConfigStep

VALUE = "cgroup_no_v1=all"
LINE = f"kernelCommandLine = {VALUE}"


def test_adds_section_when_missing():
    text = "[interop]\nappendWindowsPath = false\n"
    out, changed = patch_text(text, VALUE)

    assert changed
    assert out.count("[wsl2]") == 1
    assert out.count(LINE) == 1
    assert out.startswith("[interop]\nappendWindowsPath = false\n")


def test_empty_file_gets_section_and_line():
    out, changed = patch_text("", VALUE)
    assert changed
    assert out == f"[wsl2]\n{LINE}\n"


def test_inserts_line_into_existing_section():
    text = "[wsl2]\nmemory=8GB\n\n[experimental]\nsparseVhd=true\n"
    out, changed = patch_text(text, VALUE)

    assert changed
    lines = out.splitlines()
    assert lines[0] == "[wsl2]"
    assert lines[1] == LINE
    assert "memory=8GB" in lines
    assert "sparseVhd=true" in lines
    # key lands in [wsl2], not in [experimental]
    assert lines.index(LINE) < lines.index("[experimental]")


def test_replaces_different_value_without_duplicating():
    text = "[wsl2]\nkernelCommandLine = quiet\nswap=0\n"
    out, changed = patch_text(text, VALUE)

    assert changed
    assert out == f"[wsl2]\n{LINE}\nswap=0\n"
    assert "quiet" not in out


def test_key_in_other_section_is_ignored():
    text = "[other]\nkernelCommandLine = cgroup_no_v1=all\n"
    assert not has_option(text, VALUE)
    out, _ = patch_text(text, VALUE)
    assert out.count("kernelCommandLine") == 2
    assert out.count("[wsl2]") == 1


def test_correct_file_is_byte_identical(tmp_path):
    path = tmp_path / ".wslconfig"
    original = f"[WSL2]\r\nmemory=4GB\r\nKernelCommandLine={VALUE}\r\n".encode("utf-8")
    path.write_bytes(original)

    assert ensure_option(path, VALUE) is False
    assert path.read_bytes() == original
    assert not (tmp_path / ".wslconfig.bak").exists()


def test_patch_backs_up_and_keeps_crlf(tmp_path):
    path = tmp_path / ".wslconfig"
    original = b"[wsl2]\r\nmemory=4GB\r\n"
    path.write_bytes(original)

    assert ensure_option(path, VALUE) is True
    assert (tmp_path / ".wslconfig.bak").read_bytes() == original
    assert path.read_bytes() == f"[wsl2]\r\n{LINE}\r\nmemory=4GB\r\n".encode("utf-8")


def test_missing_file_is_created(tmp_path):
    path = tmp_path / "profile" / ".wslconfig"
    assert ensure_option(path, VALUE) is True
    assert path.read_text(encoding="utf-8") == f"[wsl2]\n{LINE}\n"


def test_dry_run_does_not_write(tmp_path):
    path = tmp_path / ".wslconfig"
    assert ensure_option(path, VALUE, dry_run=True) is True
    assert not path.exists()


def test_bom_file_gets_line_in_existing_section(tmp_path):
    path = tmp_path / ".wslconfig"
    path.write_bytes(b"\xef\xbb\xbf[wsl2]\r\nmemory=4GB\r\n")

    assert ensure_option(path, VALUE) is True
    data = path.read_bytes()
    assert data == b"\xef\xbb\xbf" + f"[wsl2]\r\n{LINE}\r\nmemory=4GB\r\n".encode("utf-8")
    assert data.count(b"[wsl2]") == 1


def test_correct_bom_file_is_byte_identical(tmp_path):
    path = tmp_path / ".wslconfig"
    original = b"\xef\xbb\xbf" + f"[wsl2]\r\n{LINE}\r\n".encode("utf-8")
    path.write_bytes(original)

    assert read_text(path) == (f"[wsl2]\r\n{LINE}\r\n", True)
    assert ensure_option(path, VALUE) is False
    assert path.read_bytes() == original


def test_patch_step_gate_sees_through_bom(cfg, host):
    cfg.wslconfig_path.parent.mkdir(parents=True)
    cfg.wslconfig_path.write_bytes(b"\xef\xbb\xbf" + f"[wsl2]\n{LINE}\n".encode("utf-8"))
    step = PatchWslConfigStep()

    assert step.is_satisfied(StepContext(cfg, runner=host)) is True
