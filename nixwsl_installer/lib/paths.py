from __future__ import annotations

import re
from pathlib import PureWindowsPath

_DRIVE_RE = re.compile(r"^([A-Za-z]):$")


def windows_to_wsl_path(path: str) -> str:
    """Translate C:\\Users\\me\\x into /mnt/c/Users/me/x (as seen from the guest)."""

    p = PureWindowsPath(path)
    m = _DRIVE_RE.match(p.drive)
    if not m:
        # Already a POSIX-style path (or relative); pass through.
        return str(path).replace("\\", "/")
    rest = "/".join(part for part in p.parts[1:])
    base = f"/mnt/{m.group(1).lower()}"
    return f"{base}/{rest}" if rest else base
