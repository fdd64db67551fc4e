from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def default_log_path(logs_dir: Path, now: Optional[datetime] = None) -> Path:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"setup_{stamp}.log"


def configure_logging(
    log_path: str,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Configure logging: one `[yyyy-MM-dd HH:mm:ss] message` line per event.

    A log file that cannot be opened must not stop the installer, so we fall
    back to the working directory and finally to console-only logging.

    Returns the actual file path being used (None when console-only).
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_nixwsl_configured", False):
        return getattr(logger, "_nixwsl_log_path", log_path)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers: list[logging.Handler] = []
    chosen_path: Optional[str] = None

    for candidate in (Path(log_path), Path.cwd() / Path(log_path).name):
        try:
            candidate.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(candidate, encoding="utf-8")
        except OSError:
            continue
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)
        chosen_path = str(candidate)
        break

    if also_console or not handlers:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_nixwsl_configured", True)
    setattr(logger, "_nixwsl_log_path", chosen_path)
    setattr(logger, "_nixwsl_handlers", handlers)

    logging.getLogger(__name__).debug("Logging initialized (requested=%s, actual=%s)", log_path, chosen_path)
    return chosen_path


def reset_logging() -> None:
    """Remove handlers installed by configure_logging (used between runs)."""

    logger = logging.getLogger()
    if not getattr(logger, "_nixwsl_configured", False):
        return
    for h in getattr(logger, "_nixwsl_handlers", []):
        logger.removeHandler(h)
        h.close()
    setattr(logger, "_nixwsl_configured", False)
    setattr(logger, "_nixwsl_log_path", None)
