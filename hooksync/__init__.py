"""Install git hooks from a project-local staging directory."""

from .config import ProjectConfig
from .driver import PolicyDecisionSource, ScriptedDecisionSource, resolve_conflicts
from .errors import ErrorCode, HooksyncError
from .models import Action, HookResult, Outcome, SyncReport, SyncResult
from .synchronizer import HookSynchronizer

__all__ = [
    "ProjectConfig",
    "HookSynchronizer",
    "resolve_conflicts",
    "PolicyDecisionSource",
    "ScriptedDecisionSource",
    "Action",
    "Outcome",
    "HookResult",
    "SyncResult",
    "SyncReport",
    "ErrorCode",
    "HooksyncError",
]
