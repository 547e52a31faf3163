"""Local git operations."""

from devcli.git.operations import (
    check_dirty_branch,
    commit_empty,
    create_branch,
    get_current_branch,
    get_default_branch,
    get_stash_name,
    load_git_config,
    push_branch,
    stash_current,
    undo_commit,
    update_branch,
)

__all__ = [
    "check_dirty_branch",
    "commit_empty",
    "create_branch",
    "get_current_branch",
    "get_default_branch",
    "get_stash_name",
    "load_git_config",
    "push_branch",
    "stash_current",
    "undo_commit",
    "update_branch",
]
