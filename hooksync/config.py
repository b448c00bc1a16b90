"""Project configuration: where hooks are staged and where they get installed."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

DEFAULT_HOOKS_DIR = ".githooks"
HOOKS_DIR_ENV = "HOOKSYNC_HOOKS_DIR"


def strip_trailing_separators(path: str) -> str:
    """Remove trailing path separators, keeping a bare root intact."""
    path = str(path)
    stripped = path.rstrip("/\\")
    if not stripped and path:
        return path[0]
    return stripped


def default_hooks_dir(base_dir: Path) -> str:
    """Staging directory from the environment, then base_dir/.env, else .githooks."""
    if os.environ.get(HOOKS_DIR_ENV):
        return os.environ[HOOKS_DIR_ENV]
    values = dotenv_values(base_dir / ".env")
    return values.get(HOOKS_DIR_ENV) or DEFAULT_HOOKS_DIR


@dataclass(frozen=True)
class ProjectConfig:
    """Immutable per-run layout of a project."""

    base_dir: Path
    hooks_dir: str = DEFAULT_HOOKS_DIR

    @classmethod
    def create(
        cls,
        base_dir: str | Path | None = None,
        hooks_dir: str | None = None,
    ) -> "ProjectConfig":
        """Build a config, normalising paths and filling in defaults.

        Args:
            base_dir: Repository root. Defaults to the current directory.
            hooks_dir: Staging directory relative to base_dir. Defaults to
                $HOOKSYNC_HOOKS_DIR, then base_dir/.env, then .githooks.
        """
        base = Path(strip_trailing_separators(str(base_dir or os.getcwd())))
        if not base.is_absolute():
            base = Path.cwd() / base

        hooks = strip_trailing_separators(hooks_dir or default_hooks_dir(base))
        return cls(base_dir=base, hooks_dir=hooks)

    @property
    def git_dir(self) -> Path:
        return self.base_dir / ".git"

    @property
    def hooks_source_dir(self) -> Path:
        return self.base_dir / self.hooks_dir

    @property
    def hooks_target_dir(self) -> Path:
        return self.git_dir / "hooks"
