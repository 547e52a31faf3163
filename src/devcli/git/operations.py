"""Git branch, stash, commit and push operations."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from devcli.config.store import ConfigStore
from devcli.errors import (
    BranchCreationError,
    BranchResolutionError,
    CommitError,
    ConfigNotFound,
    PushError,
    ShellCommandFailed,
    StashError,
    UndoError,
    UpdateError,
)
from devcli.git.exec import ExecResult, run_git
from devcli.git.types import GitConfig

logger = logging.getLogger(__name__)

GIT_CONFIG_NAME = "git"
HEAD_BRANCH_PREFIX = "HEAD branch:"


def _git_or_raise(
    repo_root: Path,
    args: list[str],
    error_cls: type[ShellCommandFailed],
    message: str,
) -> ExecResult:
    result = run_git(args, repo_root=repo_root)
    if not result.ok:
        raise error_cls(message, result)
    return result


def load_git_config(store: ConfigStore) -> GitConfig:
    """Load the ``git`` config document."""
    data = store.get_config(GIT_CONFIG_NAME)
    try:
        return GitConfig.from_dict(data)
    except (KeyError, TypeError, AttributeError) as exc:
        raise ConfigNotFound(GIT_CONFIG_NAME) from exc


def parse_head_branch(remote_show_output: str) -> str | None:
    """Extract the HEAD branch from ``git remote show`` output."""
    for line in remote_show_output.splitlines():
        stripped = line.strip()
        if stripped.startswith(HEAD_BRANCH_PREFIX):
            branch = stripped[len(HEAD_BRANCH_PREFIX):].strip()
            if branch and branch != "(unknown)":
                return branch
    return None


def get_default_branch(repo_root: Path, store: ConfigStore) -> str:
    """Return the cached default branch, resolving it from origin once."""
    try:
        config = load_git_config(store)
    except ConfigNotFound as exc:
        raise BranchResolutionError("could not get default branch: git config not found") from exc

    if config.default_branch:
        return config.default_branch

    result = _git_or_raise(
        repo_root,
        ["remote", "show", "origin"],
        BranchResolutionError,
        "could not get default branch",
    )
    default_branch = parse_head_branch(result.stdout)
    if default_branch is None:
        raise BranchResolutionError("could not get default branch: origin reports no HEAD branch", result)

    store.write_config(GIT_CONFIG_NAME, dataclasses.replace(config, default_branch=default_branch).to_dict())
    logger.info("default branch resolved to %s", default_branch)
    return default_branch


def check_dirty_branch(repo_root: Path) -> bool:
    """Return True when the working tree has tracked or untracked changes."""
    result = _git_or_raise(
        repo_root,
        ["status", "--porcelain"],
        ShellCommandFailed,
        "could not check if branch is dirty",
    )
    return result.stdout != ""


def get_current_branch(repo_root: Path) -> str:
    """Return the checked-out branch name."""
    result = _git_or_raise(
        repo_root,
        ["branch", "--show-current"],
        ShellCommandFailed,
        "could not get current branch",
    )
    return result.stdout.strip()


def get_stash_name(repo_root: Path, *, now: Callable[[], datetime] | None = None) -> str:
    """Build a stash label from the current branch and a colon-free timestamp."""
    moment = now() if now is not None else datetime.now(UTC)
    stamp = moment.isoformat(timespec="milliseconds").replace("+00:00", "Z").replace(":", "-")
    return f"{get_current_branch(repo_root)}_{stamp}"


def stash_current(repo_root: Path, name: str | None = None) -> str:
    """Stash tracked and untracked changes and return the stash label."""
    stash_name = name or get_stash_name(repo_root)
    _git_or_raise(
        repo_root,
        ["stash", "push", "-u", "-m", stash_name],
        StashError,
        "could not stash current branch",
    )
    logger.info("stashed changes as %s", stash_name)
    return stash_name


def create_branch(repo_root: Path, store: ConfigStore, name: str) -> str | None:
    """Create ``name`` off a freshly pulled default branch.

    Local changes are stashed first. The stash is not restored if a later
    step fails.
    """
    if not name:
        return None

    default_branch = get_default_branch(repo_root, store)
    if check_dirty_branch(repo_root):
        stash_current(repo_root)

    steps = (
        ["checkout", default_branch],
        ["pull"],
        ["checkout", "-b", name],
    )
    for args in steps:
        _git_or_raise(repo_root, args, BranchCreationError, "could not create branch")
    logger.info("created branch %s from %s", name, default_branch)
    return name


def commit_empty(repo_root: Path, message: str) -> None:
    """Record an empty commit on the current branch."""
    _git_or_raise(
        repo_root,
        ["commit", "--allow-empty", "-m", message],
        CommitError,
        "could not create empty commit",
    )


def undo_commit(repo_root: Path) -> None:
    """Soft-reset the last commit, keeping its changes staged."""
    _git_or_raise(repo_root, ["reset", "--soft", "HEAD~1"], UndoError, "could not undo commit")


def push_branch(repo_root: Path) -> None:
    """Push the current branch and set its upstream."""
    _git_or_raise(repo_root, ["push", "-u", "origin", "HEAD"], PushError, "could not push branch")


def update_branch(repo_root: Path, store: ConfigStore) -> None:
    """Fetch the default branch from origin and merge it into the current one."""
    default_branch = get_default_branch(repo_root, store)
    if get_current_branch(repo_root) == default_branch:
        fetch_args = ["fetch", "origin", default_branch]
        merge_ref = f"origin/{default_branch}"
    else:
        fetch_args = ["fetch", "origin", f"{default_branch}:{default_branch}"]
        merge_ref = default_branch
    _git_or_raise(repo_root, fetch_args, UpdateError, "could not update branch")
    _git_or_raise(repo_root, ["merge", merge_ref], UpdateError, "could not update branch")
