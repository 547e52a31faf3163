"""Error taxonomy shared by every dev-cli component."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devcli.git.exec import ExecResult


class DevCliError(RuntimeError):
    """Base class for failures surfaced to the user."""


class ConfigNotFound(DevCliError):
    """Raised when a config document is missing or unreadable."""

    def __init__(self, name: str):
        super().__init__(f"no config found: {name}")
        self.name = name


class MissingTokenError(DevCliError):
    """Raised when an API token cannot be located."""


class ResourceNotFound(DevCliError):
    """Raised when a name lookup against an API collection has no match."""

    def __init__(self, level: str, name: str):
        super().__init__(f"{level} not found: {name!r}")
        self.level = level
        self.name = name


class ShellCommandFailed(DevCliError):
    """Raised when a git subprocess exits non-zero."""

    def __init__(self, message: str, result: ExecResult | None = None):
        detail = ""
        if result is not None:
            detail = (result.stderr or result.stdout).strip()
        super().__init__(f"{message}\n{detail}" if detail else message)
        self.result = result


class BranchResolutionError(ShellCommandFailed):
    """Raised when the default branch cannot be determined."""


class StashError(ShellCommandFailed):
    """Raised when stashing the working tree fails."""


class BranchCreationError(ShellCommandFailed):
    """Raised when any step of branch creation fails."""


class CommitError(ShellCommandFailed):
    """Raised when creating a commit fails."""


class UndoError(ShellCommandFailed):
    """Raised when the last commit cannot be undone."""


class PushError(ShellCommandFailed):
    """Raised when pushing the current branch fails."""


class UpdateError(ShellCommandFailed):
    """Raised when merging the default branch into the current one fails."""


class ApiRequestFailed(DevCliError):
    """Raised on a non-2xx HTTP response or a request that never got one.

    ``status_code`` is 0 when no response arrived.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}" if status_code else f"request failed: {message}")
        self.status_code = status_code
        self.message = message


class PullRequestError(ApiRequestFailed):
    """Raised when GitHub refuses to open a pull request."""


class PullRequestUnsupportedDraft(PullRequestError):
    """Raised when the repository does not accept draft pull requests."""


class PromptAborted(DevCliError):
    """Raised when the user cancels an interactive prompt."""
