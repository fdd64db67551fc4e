from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .context import StepContext
from .notify import FailureNotifier, NullNotifier

logger = logging.getLogger(__name__)


def one_line(text: str) -> str:
    return "; ".join(ln.strip() for ln in text.splitlines() if ln.strip())


class Step(Protocol):
    """A single idempotent step.

    Steps may also define ``is_satisfied(ctx) -> bool``; when it returns True
    the step is skipped without performing its action.
    """

    step_id: str

    def run(self, ctx: StepContext) -> "StepResult":
        ...


@dataclass(frozen=True)
class StepResult:
    ok: bool
    reason: str = ""
    skipped: bool = False

    @classmethod
    def success(cls, reason: str = "") -> "StepResult":
        return cls(ok=True, reason=reason)

    @classmethod
    def satisfied(cls, reason: str = "already satisfied") -> "StepResult":
        return cls(ok=True, reason=reason, skipped=True)

    @classmethod
    def failure(cls, reason: str) -> "StepResult":
        # One line per reason: the log carries one timestamp per line.
        return cls(ok=False, reason=one_line(reason))


@dataclass(frozen=True)
class StepOutcome:
    step_id: str
    result: StepResult


@dataclass
class PipelineResult:
    outcomes: List[StepOutcome] = field(default_factory=list)

    @property
    def ran_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes if o.result.ok and not o.result.skipped]

    @property
    def skipped_steps(self) -> List[str]:
        return [o.step_id for o in self.outcomes if o.result.skipped]

    @property
    def failed(self) -> Optional[StepOutcome]:
        for o in self.outcomes:
            if not o.result.ok:
                return o
        return None

    @property
    def ok(self) -> bool:
        return self.failed is None

    def to_dict(self) -> dict:
        failed = self.failed
        return {
            "ok": self.ok,
            "ran_steps": self.ran_steps,
            "skipped_steps": self.skipped_steps,
            "failed_step": failed.step_id if failed else None,
            "error": failed.result.reason if failed else None,
            "steps": [
                {
                    "step_id": o.step_id,
                    "ok": o.result.ok,
                    "skipped": o.result.skipped,
                    "reason": o.result.reason,
                }
                for o in self.outcomes
            ],
        }


def _execute(step: Step, ctx: StepContext) -> StepResult:
    try:
        gate = getattr(step, "is_satisfied", None)
        if gate is not None and gate(ctx):
            return StepResult.satisfied()
        result = step.run(ctx)
    except Exception as e:
        logger.debug("Step %s raised", step.step_id, exc_info=True)
        return StepResult.failure(str(e) or e.__class__.__name__)
    if result is None:
        return StepResult.success()
    return result


def run_pipeline(
    *,
    ctx: StepContext,
    steps: Sequence[Step],
    notifier: Optional[FailureNotifier] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps strictly in order; the first failure halts the run."""

    notifier = notifier or NullNotifier()
    ids = [s.step_id for s in steps]
    for sid in (start_at, stop_after):
        if sid is not None and sid not in ids:
            raise ValueError(f"Unknown step id: {sid}")

    out = PipelineResult()
    started = start_at is None

    for step in steps:
        if not started:
            if step.step_id == start_at:
                started = True
            else:
                continue

        logger.info("Running step %s", step.step_id)
        result = _execute(step, ctx)
        out.outcomes.append(StepOutcome(step_id=step.step_id, result=result))

        if not result.ok:
            logger.error("Step %s failed: %s", step.step_id, result.reason)
            notifier.notify(step.step_id, result.reason)
            break

        if result.skipped:
            logger.info("Skipping step %s (%s)", step.step_id, result.reason)
        else:
            logger.info("Step %s succeeded", step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    return out
