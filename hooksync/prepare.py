"""Prepare a project directory for hooksync by making sure it is a git repo."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .errors import HooksyncError

logger = logging.getLogger(__name__)


@dataclass
class PrepareResult:
    """Result of verifying the .git directory."""

    status: str  # "ok", "created", "declined", "failed"
    message: str = ""
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.status in ("ok", "created")


def init_repository(base_dir: Path, runner: Callable | None = None) -> str:
    """Run `git init` in base_dir and return its output.

    Raises:
        HooksyncError: GIT_INIT if git is missing or exits non-zero.
    """
    runner = runner or subprocess.run
    try:
        result = runner(
            ["git", "init"],
            cwd=base_dir,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (FileNotFoundError, subprocess.SubprocessError) as e:
        raise HooksyncError.git_init(str(e)) from e

    output = (result.stdout or "") + (result.stderr or "")
    if result.returncode != 0:
        raise HooksyncError.git_init(output.strip() or f"exit code {result.returncode}")
    return output


def verify_git_directory(
    base_dir: Path,
    confirm: Callable[[str], bool],
    runner: Callable | None = None,
) -> PrepareResult:
    """Verify that base_dir/.git exists, offering to create it if not.

    Args:
        base_dir: Project root.
        confirm: Asked whether to run `git init`; returns True to proceed.
        runner: subprocess.run compatible callable. Defaults to subprocess.run.
    """
    if (base_dir / ".git").is_dir():
        return PrepareResult("ok")

    question = f"A .git directory was not found at {base_dir}. Would you like to create one?"
    if not confirm(question):
        return PrepareResult("declined", "A .git directory is required to use hooksync.")

    try:
        output = init_repository(base_dir, runner=runner)
    except HooksyncError as e:
        logger.warning("git init failed in %s: %s", base_dir, e.message)
        return PrepareResult("failed", "Unable to create a .git directory", e.message)

    logger.info("Initialized git repository in %s", base_dir)
    return PrepareResult("created", "A .git directory has been created!", output)
