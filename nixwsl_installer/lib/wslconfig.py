from __future__ import annotations

import codecs
import logging
import re
import shutil
from pathlib import Path
from typing import List, Tuple

logger = logging.getLogger(__name__)

WSL2_SECTION = "wsl2"
KERNEL_CMDLINE_KEY = "kernelCommandLine"

_SECTION_RE = re.compile(r"^\s*\[([^\]]+)\]\s*$")


def _key_re(key: str) -> re.Pattern:
    return re.compile(rf"^\s*{re.escape(key)}\s*=\s*(.*?)\s*$", re.IGNORECASE)


def _newline_of(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def _section_bounds(lines: List[str], section: str) -> Tuple[int, int] | None:
    """Return (header_index, end_index) for the first matching section."""

    start = None
    for i, line in enumerate(lines):
        m = _SECTION_RE.match(line)
        if not m:
            continue
        if start is not None:
            return start, i
        if m.group(1).strip().lower() == section.lower():
            start = i
    if start is None:
        return None
    return start, len(lines)


def has_option(text: str, value: str, *, section: str = WSL2_SECTION, key: str = KERNEL_CMDLINE_KEY) -> bool:
    lines = text.splitlines()
    bounds = _section_bounds(lines, section)
    if bounds is None:
        return False
    key_re = _key_re(key)
    for line in lines[bounds[0] + 1 : bounds[1]]:
        m = key_re.match(line)
        if m:
            return m.group(1) == value
    return False


def patch_text(text: str, value: str, *, section: str = WSL2_SECTION, key: str = KERNEL_CMDLINE_KEY) -> Tuple[str, bool]:
    """Ensure ``[section]`` holds ``key = value``.

    Returns the new text and whether anything changed. Unrelated lines and
    the file's newline style are preserved; an already-correct file comes
    back unchanged.
    """

    if has_option(text, value, section=section, key=key):
        return text, False

    nl = _newline_of(text)
    wanted = f"{key} = {value}"
    lines = text.splitlines()
    bounds = _section_bounds(lines, section)

    if bounds is None:
        out = list(lines)
        if out and out[-1].strip():
            out.append("")
        out += [f"[{section}]", wanted]
    else:
        header, end = bounds
        key_re = _key_re(key)
        out = list(lines)
        for i in range(header + 1, end):
            if key_re.match(out[i]):
                out[i] = wanted
                break
        else:
            out.insert(header + 1, wanted)

    return nl.join(out) + nl, True


def read_text(path: Path) -> Tuple[str, bool]:
    """Read a .wslconfig; returns (text, had_bom). Missing file reads as empty."""

    if not path.exists():
        return "", False
    raw = path.read_bytes()
    bom = raw.startswith(codecs.BOM_UTF8)
    # utf-8-sig drops the BOM; newline="" keeps CRLF intact.
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        return f.read(), bom


def ensure_option(path: Path, value: str, *, section: str = WSL2_SECTION, key: str = KERNEL_CMDLINE_KEY, dry_run: bool = False) -> bool:
    """Patch a .wslconfig file in place (backup first). Returns True if written."""

    text, bom = read_text(path)

    new_text, changed = patch_text(text, value, section=section, key=key)
    if not changed:
        logger.info("%s already sets %s = %s", path, key, value)
        return False

    if dry_run:
        logger.info("Would patch %s (%s = %s)", path, key, value)
        return True

    if path.exists():
        backup = path.with_name(path.name + ".bak")
        shutil.copy2(path, backup)
        logger.info("Backed up %s to %s", path, backup)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8-sig" if bom else "utf-8", newline="") as f:
        f.write(new_text)
    logger.info("Patched %s: [%s] %s = %s", path, section, key, value)
    return True
