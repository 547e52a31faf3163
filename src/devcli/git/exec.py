"""Subprocess runner for git commands."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for subprocess execution."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_command(argv: list[str], *, cwd: Path) -> ExecResult:
    """Run a command and capture its output without raising."""
    logger.debug("running %s in %s", " ".join(argv), cwd)
    completed = subprocess.run(argv, cwd=cwd, capture_output=True, text=True, check=False)
    return ExecResult(
        argv=tuple(argv),
        cwd=cwd.resolve(),
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


def run_git(args: list[str], *, repo_root: Path) -> ExecResult:
    """Run a git command rooted at the repository."""
    return run_command(["git", *args], cwd=repo_root)
