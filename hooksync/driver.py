"""Drive a synchronization session to completion across conflicts.

Each conflict is handed to a decision source (an interactive prompt, a fixed
policy, or a scripted list of answers) and the pass is retried until the
staging directory has been drained without unresolved conflicts.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from .errors import ErrorCode, HooksyncError
from .models import Action, SyncReport
from .synchronizer import HookSynchronizer

logger = logging.getLogger(__name__)


class DecisionSource(Protocol):
    """Decides what to do with a hook that conflicts with an installed one."""

    def decide(self, hook: str) -> Action:
        """Return OVERWRITE, SKIP or INSPECT."""
        ...

    def decide_after_diff(self, hook: str, diff: str) -> Action:
        """Return OVERWRITE or SKIP after the diff has been shown."""
        ...


class PolicyDecisionSource:
    """Non-interactive source that always gives the same answer."""

    def __init__(self, action: Action = Action.SKIP):
        if action is Action.INSPECT:
            raise ValueError("A policy must either overwrite or skip")
        self.action = action

    def decide(self, hook: str) -> Action:
        return self.action

    def decide_after_diff(self, hook: str, diff: str) -> Action:
        return self.action


class ScriptedDecisionSource:
    """Replays pre-recorded answers in order, skipping once they run out."""

    def __init__(self, answers: Iterable[Action]):
        self._answers = list(answers)
        self.asked: list[str] = []
        self.diffs: dict[str, str] = {}

    def _next(self) -> Action:
        return self._answers.pop(0) if self._answers else Action.SKIP

    def decide(self, hook: str) -> Action:
        self.asked.append(hook)
        return self._next()

    def decide_after_diff(self, hook: str, diff: str) -> Action:
        self.diffs[hook] = diff
        return self._next()


def _apply(synchronizer: HookSynchronizer, hook: str, action: Action) -> None:
    if action is Action.OVERWRITE:
        result = synchronizer.synchronize_one(hook, force=True)
        logger.debug("Overwrite of %s: %s", hook, result.outcome.value)
    else:
        synchronizer.mark_skipped(hook)
        logger.debug("Skipping %s", hook)


def _resolve(
    synchronizer: HookSynchronizer,
    decisions: DecisionSource,
    hook: str,
    report: SyncReport,
) -> None:
    action = decisions.decide(hook)

    if action is Action.INSPECT:
        try:
            diff = synchronizer.compute_diff(hook)
        except HooksyncError as e:
            if e.code is not ErrorCode.FILE_UNREADABLE:
                raise
            logger.warning("Unable to show differences for %s: %s", hook, e.message)
            report.warnings.append(
                f"Unable to show differences for {hook}, skipping it: {e.message}"
            )
            action = Action.SKIP
        else:
            action = decisions.decide_after_diff(hook, diff)
            if action is not Action.OVERWRITE:
                action = Action.SKIP

    _apply(synchronizer, hook, action)


def resolve_conflicts(
    synchronizer: HookSynchronizer,
    decisions: DecisionSource,
) -> SyncReport:
    """Run synchronization passes until no conflict is left.

    Every resolution moves the conflicting hook into the copied, skipped or
    failed bucket, so the number of passes is bounded by the number of
    staged hooks.

    Args:
        synchronizer: Synchronizer owning this session's state.
        decisions: Source of overwrite/skip/inspect answers.

    Raises:
        HooksyncError: If the .git or staging directory is unusable. No retry
            is attempted.

    Returns:
        SyncReport with the final copied, skipped and failed hooks.
    """
    report = SyncReport()

    while True:
        result = synchronizer.synchronize_all()
        report.passes += 1

        hook = result.first_conflict
        if hook is None:
            break

        logger.info("Resolving conflict for %s (pass %d)", hook, report.passes)
        _resolve(synchronizer, decisions, hook, report)

    report.copied = synchronizer.copied_hooks()
    report.skipped = synchronizer.skipped_hooks()
    report.failed = synchronizer.failed_hooks()
    return report
