from __future__ import annotations

import logging
from pathlib import Path

import pytest


@pytest.fixture
def make_project(tmp_path):
    """Build a project tree with optional .git/hooks and staging contents.

    Pass installed=None to leave out .git entirely, and source=None to leave
    out the staging directory.
    """

    def _make(
        source: dict[str, str] | None = None,
        installed: dict[str, str] | None = None,
        hooks_dir: str = ".githooks",
    ) -> Path:
        if installed is not None:
            target = tmp_path / ".git" / "hooks"
            target.mkdir(parents=True)
            for name, content in installed.items():
                (target / name).write_text(content)

        if source is not None:
            staging = tmp_path / hooks_dir
            staging.mkdir(parents=True)
            for name, content in source.items():
                (staging / name).write_text(content)

        return tmp_path

    return _make


@pytest.fixture(autouse=True)
def no_hooks_dir_override(monkeypatch):
    monkeypatch.delenv("HOOKSYNC_HOOKS_DIR", raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("hooksync")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
