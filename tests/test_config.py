"""Tests for hooksync.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from hooksync.config import (
    DEFAULT_HOOKS_DIR,
    HOOKS_DIR_ENV,
    ProjectConfig,
    strip_trailing_separators,
)


class TestStripTrailingSeparators:
    def test_strips(self):
        assert strip_trailing_separators("/srv/project/") == "/srv/project"
        assert strip_trailing_separators("path/to/dir//") == "path/to/dir"

    def test_untouched(self):
        assert strip_trailing_separators(".githooks") == ".githooks"

    def test_root(self):
        assert strip_trailing_separators("/") == "/"


class TestProjectConfig:
    def test_paths(self, tmp_path):
        config = ProjectConfig.create(tmp_path, "path/to/dir")

        assert config.base_dir == tmp_path
        assert config.hooks_source_dir == tmp_path / "path/to/dir"
        assert config.git_dir == tmp_path / ".git"
        assert config.hooks_target_dir == tmp_path / ".git" / "hooks"

    def test_default_hooks_dir(self, tmp_path):
        config = ProjectConfig.create(tmp_path)

        assert config.hooks_dir == DEFAULT_HOOKS_DIR
        assert config.hooks_source_dir == tmp_path / ".githooks"

    def test_trailing_slashes(self, tmp_path):
        config = ProjectConfig.create(f"{tmp_path}/", "hooks/")

        assert config.base_dir == tmp_path
        assert config.hooks_dir == "hooks"

    def test_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = ProjectConfig.create()

        assert config.base_dir == Path.cwd()

    def test_relative_base_dir(self, tmp_path, monkeypatch):
        (tmp_path / "project").mkdir()
        monkeypatch.chdir(tmp_path)

        config = ProjectConfig.create("project")

        assert config.base_dir.is_absolute()
        assert config.base_dir == Path.cwd() / "project"

    def test_environment_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv(HOOKS_DIR_ENV, "ci/hooks")

        config = ProjectConfig.create(tmp_path)

        assert config.hooks_dir == "ci/hooks"

    def test_dotenv_override(self, tmp_path):
        (tmp_path / ".env").write_text(f"{HOOKS_DIR_ENV}=tools/githooks\n")

        config = ProjectConfig.create(tmp_path)

        assert config.hooks_dir == "tools/githooks"

    def test_explicit_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv(HOOKS_DIR_ENV, "ci/hooks")
        (tmp_path / ".env").write_text(f"{HOOKS_DIR_ENV}=tools/githooks\n")

        config = ProjectConfig.create(tmp_path, "explicit")

        assert config.hooks_dir == "explicit"

    def test_frozen(self, tmp_path):
        config = ProjectConfig.create(tmp_path)

        with pytest.raises(AttributeError):
            config.hooks_dir = "other"
