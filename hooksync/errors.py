from enum import Enum


class ErrorCode(Enum):
    NO_GIT_DIRECTORY = "no_git_directory"
    NO_HOOKS_DIRECTORY = "no_hooks_directory"
    FILE_UNREADABLE = "file_unreadable"
    GIT_INIT = "git_init"

class HooksyncError(Exception):
    def __init__(self, code: ErrorCode, message: str):
        self.code = code
        self.message = message
        super().__init__(message)

    @classmethod
    def no_git_directory(cls, path: str) -> "HooksyncError":
        return cls(
            ErrorCode.NO_GIT_DIRECTORY,
            f"No .git directory was found within {path}.",
        )

    @classmethod
    def no_hooks_directory(cls, path: str, missing: bool = True) -> "HooksyncError":
        reason = "missing" if missing else "inaccessible"
        return cls(
            ErrorCode.NO_HOOKS_DIRECTORY,
            f"The git hooks directory at {path} is {reason}.",
        )

    @classmethod
    def file_unreadable(cls, path: str, detail: str) -> "HooksyncError":
        return cls(ErrorCode.FILE_UNREADABLE, f"Unable to read {path}: {detail}")

    @classmethod
    def git_init(cls, detail: str) -> "HooksyncError":
        return cls(ErrorCode.GIT_INIT, f"git init failed: {detail}")
