"""Copy staged hooks into .git/hooks, detecting conflicts with installed ones."""

from __future__ import annotations

import difflib
import hashlib
import logging
import os
import shutil
from pathlib import Path

from .config import ProjectConfig
from .errors import HooksyncError
from .models import HookResult, HookState, Outcome, SyncResult

logger = logging.getLogger(__name__)

HASH_CHUNK_SIZE = 65536


def _hash_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def _make_executable(path: Path) -> None:
    """Add an execute bit wherever a read bit is set (always for the owner)."""
    mode = path.stat().st_mode
    path.chmod(mode | ((mode & 0o444) >> 2) | 0o100)


class HookSynchronizer:
    """Owns one synchronization session: copied, skipped and failed hooks.

    State lives on the instance only. Create a new synchronizer per run.
    """

    def __init__(self, config: ProjectConfig):
        self.config = config
        self._copied: list[str] = []
        self._skipped: set[str] = set()
        self._failed: dict[str, str] = {}

    def _check_directories(self) -> None:
        if not self.config.git_dir.is_dir():
            raise HooksyncError.no_git_directory(str(self.config.base_dir))

        source = self.config.hooks_source_dir
        if not source.is_dir():
            raise HooksyncError.no_hooks_directory(str(source), missing=True)
        if not os.access(source, os.R_OK | os.X_OK):
            raise HooksyncError.no_hooks_directory(str(source), missing=False)

    def _list_entries(self) -> list[str]:
        source = self.config.hooks_source_dir
        try:
            return os.listdir(source)
        except OSError as e:
            raise HooksyncError.no_hooks_directory(str(source), missing=False) from e

    def synchronize_all(self, stop_on_conflict: bool = False) -> SyncResult:
        """Synchronize every entry of the staging directory.

        Entries are visited in directory-listing order, which is not
        necessarily sorted.

        Args:
            stop_on_conflict: Stop the pass right after the first conflict
                instead of carrying on with the remaining entries.

        Raises:
            HooksyncError: NO_GIT_DIRECTORY or NO_HOOKS_DIRECTORY.

        Returns:
            A SyncResult with one HookResult per visited entry.
        """
        self._check_directories()

        entries = self._list_entries()
        logger.debug(
            "Synchronizing %d entries from %s", len(entries), self.config.hooks_source_dir
        )

        result = SyncResult()
        for name in entries:
            hook_result = self.synchronize_one(name)
            result.results.append(hook_result)
            if hook_result.conflict and stop_on_conflict:
                break

        return result

    def synchronize_one(self, name: str, force: bool = False) -> HookResult:
        """Copy a single staged hook into .git/hooks.

        Args:
            name: Hook file name. Only its base name is used.
            force: Overwrite an existing, different hook instead of
                reporting a conflict.

        Returns:
            A HookResult. Conflicts and copy failures are reported here,
            never raised.
        """
        hook = Path(name).name
        source = self.config.hooks_source_dir / hook
        dest = self.config.hooks_target_dir / hook

        if hook in self._skipped or hook in self._failed or not source.is_file():
            return HookResult(hook, Outcome.INELIGIBLE)

        if hook in self._copied and not force:
            return HookResult(hook, Outcome.INELIGIBLE)

        if dest.exists() and not force:
            try:
                identical = dest.is_file() and _hash_file(dest) == _hash_file(source)
            except OSError as e:
                return self._record_failure(hook, f"unable to compare with {dest}: {e}")

            if identical:
                logger.debug("%s is already up to date", hook)
                self._skipped.add(hook)
                return HookResult(hook, Outcome.SKIPPED)

            logger.info("A %s hook already exists with different content", hook)
            return HookResult(hook, Outcome.CONFLICT)

        try:
            dest.parent.mkdir(exist_ok=True)
            # Replace the link itself, never write through it.
            if dest.is_symlink():
                dest.unlink()
            shutil.copyfile(source, dest)
            shutil.copymode(source, dest)
            _make_executable(dest)
        except OSError as e:
            return self._record_failure(hook, f"unable to copy to {dest}: {e}")

        if hook not in self._copied:
            self._copied.append(hook)
        logger.info("Copied %s to %s", hook, dest)
        return HookResult(hook, Outcome.COPIED)

    def _record_failure(self, hook: str, detail: str) -> HookResult:
        logger.warning("Skipping %s hook, %s", hook, detail)
        self._failed[hook] = detail
        return HookResult(hook, Outcome.FAILED, detail=detail)

    def mark_skipped(self, name: str) -> None:
        self._skipped.add(Path(name).name)

    def compute_diff(self, name: str) -> str:
        """Unified diff between the installed hook (-) and the staged one (+).

        Raises:
            HooksyncError: FILE_UNREADABLE if either file cannot be read.
        """
        hook = Path(name).name
        target = self.config.hooks_target_dir / hook
        source = self.config.hooks_source_dir / hook

        old = self._read_lines(target)
        new = self._read_lines(source)

        return "\n".join(
            difflib.unified_diff(
                old, new, fromfile=str(target), tofile=str(source), lineterm=""
            )
        )

    def _read_lines(self, path: Path) -> list[str]:
        try:
            return path.read_text(errors="replace").splitlines()
        except OSError as e:
            raise HooksyncError.file_unreadable(str(path), str(e)) from e

    def hook_states(self) -> list[HookState]:
        """Install state of every staged hook, without touching any file."""
        self._check_directories()

        states = []
        for name in self._list_entries():
            source = self.config.hooks_source_dir / name
            if not source.is_file():
                continue
            dest = self.config.hooks_target_dir / name
            try:
                if not dest.is_file():
                    state = "missing"
                elif _hash_file(dest) == _hash_file(source):
                    state = "installed"
                else:
                    state = "differs"
            except OSError:
                state = "unreadable"
            states.append(HookState(name=name, state=state))
        return states

    def copied_hooks(self) -> list[str]:
        return list(self._copied)

    def skipped_hooks(self) -> list[str]:
        return sorted(self._skipped)

    def failed_hooks(self) -> dict[str, str]:
        return dict(self._failed)
