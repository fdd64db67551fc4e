from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Any, Callable, Optional

from .config import ConfigError, ProvisioningConfig, load_config
from .context import StepContext
from .lib.command import Runner, run_cmd
from .logging_utils import configure_logging, default_log_path
from .notify import FailureNotifier, NullNotifier, PauseNotifier
from .pipeline import PipelineResult, run_pipeline
from .state_store import save_summary
from .steps import (
    CheckNetworkStep,
    CheckVirtualizationStep,
    DownloadImageStep,
    EnableVmPlatformStep,
    EnableWslFeatureStep,
    EnsureWslRuntimeStep,
    FinalizeGuestUserStep,
    ImportDistributionStep,
    MaterializeGuestConfigStep,
    MaterializeStagedConfigStep,
    PatchWslConfigStep,
    RebuildBootstrapStep,
    RebuildFinalStep,
    RebuildFromGuestCloneStep,
    RefreshGuestCloneStep,
    SetDefaultDistributionStep,
    SetDefaultVersionStep,
    ShutdownWslStep,
    SyncConfigRepoStep,
    UnregisterExistingStep,
)

logger = logging.getLogger(__name__)

COMPLETE_MESSAGE = "Setup complete."


def build_steps():
    return [
        CheckNetworkStep(),
        CheckVirtualizationStep(),
        EnableWslFeatureStep(),
        EnableVmPlatformStep(),
        SetDefaultVersionStep(),
        PatchWslConfigStep(),
        EnsureWslRuntimeStep(),
        UnregisterExistingStep(),
        DownloadImageStep(),
        SyncConfigRepoStep(),
        ImportDistributionStep(),
        SetDefaultDistributionStep(),
        MaterializeStagedConfigStep(),
        RebuildBootstrapStep(),
        ShutdownWslStep(),
        MaterializeGuestConfigStep(),
        RebuildFromGuestCloneStep(),
        FinalizeGuestUserStep(),
        RefreshGuestCloneStep(),
        RebuildFinalStep(),
    ]


def run(
    cfg: ProvisioningConfig,
    *,
    runner: Runner = run_cmd,
    session: Optional[Any] = None,
    sleep: Optional[Callable[[float], None]] = None,
    notifier: Optional[FailureNotifier] = None,
    log_path: Optional[str] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
) -> PipelineResult:
    """Run the provisioning sequence and record a run summary."""

    actual_log_path = configure_logging(log_path=log_path or str(default_log_path(cfg.logs_dir)))
    logger.info("Installing %s (release %s) under %s", cfg.distro_name, cfg.release_tag, cfg.install_root)

    ctx = StepContext(cfg=cfg, runner=runner, session=session, sleep=sleep or time.sleep, dry_run=dry_run)

    result = run_pipeline(
        ctx=ctx,
        steps=build_steps(),
        notifier=notifier,
        start_at=start_at,
        stop_after=stop_after,
    )

    summary = result.to_dict()
    summary["log_path"] = actual_log_path
    summary["dry_run"] = dry_run
    try:
        save_summary(str(cfg.summary_path), summary)
    except OSError as e:
        logger.warning("Unable to write run summary %s: %s", cfg.summary_path, e)

    if result.ok and stop_after is not None:
        logger.info("Partial run finished after %s", stop_after)
    elif result.ok:
        logger.info(COMPLETE_MESSAGE)
    else:
        failed = result.failed
        logger.error("Setup aborted at %s: %s", failed.step_id, failed.result.reason)
    return result


def _fatal(notifier: FailureNotifier, stage: str, reason: str) -> int:
    print(f"nixwsl-installer: {reason}", file=sys.stderr)
    notifier.notify(stage, reason)
    return 1


def main(argv: Optional[list[str]] = None, *, notifier: Optional[FailureNotifier] = None) -> int:
    p = argparse.ArgumentParser(prog="nixwsl-installer")
    p.add_argument("--config", default=None, help="YAML file with ProvisioningConfig overrides")
    p.add_argument("--install-root", default=None, help="Directory for the image, distro and logs")
    p.add_argument("--distro", default=None, help="WSL distribution name")
    p.add_argument("--release", default=None, help="NixOS-WSL release tag")
    p.add_argument("--repo", default=None, help="Configuration (dotfiles) repository URL")
    p.add_argument("--target", default=None, help="Flake output to build (nixosConfigurations.<target>)")
    p.add_argument("--user", default=None, help="Guest login user")
    p.add_argument("--log", default=None, help="Log file path (default: <install-root>/logs/setup_<ts>.log)")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 09_download_image)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")
    p.add_argument("--no-pause", action="store_true", help="Do not wait for Enter on failure")

    args = p.parse_args(argv)
    if notifier is None:
        notifier = NullNotifier() if args.no_pause else PauseNotifier()

    try:
        cfg = load_config(
            args.config,
            overrides={
                "install_root": args.install_root,
                "distro_name": args.distro,
                "release_tag": args.release,
                "repo_url": args.repo,
                "build_target": args.target,
                "guest_user": args.user,
            },
        )
    except (ConfigError, FileNotFoundError) as e:
        return _fatal(notifier, "config", f"invalid configuration: {e}")

    known = [s.step_id for s in build_steps()]
    for flag, sid in (("--start-at", args.start_at), ("--stop-after", args.stop_after)):
        if sid is not None and sid not in known:
            return _fatal(notifier, "arguments", f"{flag}: unknown step id {sid}")

    result = run(
        cfg,
        notifier=notifier,
        log_path=args.log,
        start_at=args.start_at,
        stop_after=args.stop_after,
        dry_run=bool(args.dry_run),
    )
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
