"""Branch and pull request names derived from task titles."""

from __future__ import annotations

import re

_BRANCH_NON_ALLOWED = re.compile(r"[^a-zA-Z0-9\-\[\] ]")
_WHITESPACE = re.compile(r"\s+")

BRANCH_PREFIXES = (
    ("[BUG] ", "fix/"),
    ("[FEATURE] ", "feature/"),
)
TITLE_PREFIXES = (
    ("[BUG]", "Fix:"),
    ("[FEATURE]", "Feature:"),
)


def gen_pr_name(task_name: str) -> str:
    """Turn ``[BUG]``/``[FEATURE]`` markers into conventional title prefixes."""
    name = task_name
    for marker, replacement in TITLE_PREFIXES:
        name = name.replace(marker, replacement, 1)
    return name


def gen_pr_title(task_id: str, task_name: str) -> str:
    return f"[{task_id}] {gen_pr_name(task_name)}"


def gen_branch_name(task_name: str) -> str:
    """Build a branch name such as ``fix/fix-login-page`` from a task name."""
    name = _BRANCH_NON_ALLOWED.sub("", task_name)
    for marker, prefix in BRANCH_PREFIXES:
        name = name.replace(marker, prefix, 1)
    return _WHITESPACE.sub("-", name.lower())
