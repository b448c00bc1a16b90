from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Outcome(Enum):
    COPIED = "copied"
    SKIPPED = "skipped"  # identical to the installed hook
    CONFLICT = "conflict"
    INELIGIBLE = "ineligible"
    FAILED = "failed"


class Action(Enum):
    """Answers a decision source can give for a conflicting hook."""

    OVERWRITE = "o"
    SKIP = "s"
    INSPECT = "d"


@dataclass
class HookResult:
    """Outcome of synchronizing a single staged hook."""

    name: str
    outcome: Outcome
    detail: str = ""

    @property
    def copied(self) -> bool:
        return self.outcome is Outcome.COPIED

    @property
    def conflict(self) -> bool:
        return self.outcome is Outcome.CONFLICT


@dataclass
class SyncResult:
    """All per-hook results of one pass over the staging directory."""

    results: list[HookResult] = field(default_factory=list)

    @property
    def processed(self) -> list[str]:
        return [r.name for r in self.results]

    @property
    def conflicts(self) -> list[str]:
        return [r.name for r in self.results if r.conflict]

    @property
    def has_conflicts(self) -> bool:
        return any(r.conflict for r in self.results)

    @property
    def first_conflict(self) -> str | None:
        for r in self.results:
            if r.conflict:
                return r.name
        return None


@dataclass
class SyncReport:
    """Final bookkeeping of a session, handed back to the caller."""

    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    passes: int = 0

    def to_dict(self) -> dict:
        return {
            "copied": self.copied,
            "skipped": self.skipped,
            "failed": self.failed,
            "warnings": self.warnings,
            "passes": self.passes,
        }


@dataclass
class HookState:
    """Install state of one staged hook: installed, differs or missing."""

    name: str
    state: str

    def to_dict(self) -> dict:
        return {"name": self.name, "state": self.state}
