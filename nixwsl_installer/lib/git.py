from __future__ import annotations

import logging
from pathlib import Path

from .command import Runner, run_cmd

logger = logging.getLogger(__name__)


def clone(url: str, dest: Path, *, runner: Runner = run_cmd, dry_run: bool = False) -> None:
    if not dry_run:
        dest.parent.mkdir(parents=True, exist_ok=True)
    runner(["git", "clone", url, str(dest)], dry_run=dry_run)


def pull_ff_only(dest: Path, *, runner: Runner = run_cmd, dry_run: bool = False) -> None:
    """Fast-forward the checkout; git refuses (non-zero exit) on diverged history."""

    runner(["git", "-C", str(dest), "pull", "--ff-only"], dry_run=dry_run)


def sync_repository(url: str, dest: Path, *, runner: Runner = run_cmd, dry_run: bool = False) -> str:
    """Clone when absent, otherwise fast-forward. Returns "cloned" or "updated"."""

    if dest.exists():
        logger.info("Updating %s", dest)
        pull_ff_only(dest, runner=runner, dry_run=dry_run)
        return "updated"

    logger.info("Cloning %s into %s", url, dest)
    clone(url, dest, runner=runner, dry_run=dry_run)
    return "cloned"
