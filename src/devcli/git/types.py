"""Types for git configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GitConfig:
    """Repository coordinates plus the cached default branch."""

    github_repo_owner: str
    github_repo_name: str
    default_branch: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GitConfig:
        return cls(
            github_repo_owner=data["githubRepoOwner"],
            github_repo_name=data["githubRepoName"],
            default_branch=data.get("defaultBranch") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "githubRepoOwner": self.github_repo_owner,
            "githubRepoName": self.github_repo_name,
        }
        if self.default_branch:
            data["defaultBranch"] = self.default_branch
        return data
