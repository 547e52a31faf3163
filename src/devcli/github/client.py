"""GitHub pull request client."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import requests

from devcli.config.store import ConfigStore
from devcli.errors import (
    ApiRequestFailed,
    PullRequestError,
    PullRequestUnsupportedDraft,
)
from devcli.git.operations import get_default_branch, load_git_config

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com/repos"
CLICKUP_TASK_URL = "https://app.clickup.com/t"
DRAFT_UNSUPPORTED_MESSAGE = "Draft pull requests are not supported in this repository."
REQUEST_TIMEOUT = 30


def task_link(task_id: str) -> str:
    """Return the ClickUp web link for a task."""
    return f"{CLICKUP_TASK_URL}/{task_id}"


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or response.reason or "request failed"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text.strip() or "request failed"


class GitHubClient:
    """Opens pull requests against the repository named in the git config."""

    def __init__(
        self,
        token: str,
        store: ConfigStore,
        repo_root: Path,
        *,
        session: requests.Session | None = None,
    ):
        self.store = store
        self.repo_root = repo_root
        self._session = session or requests.Session()
        self._headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
        }

    def _request(self, method: str, owner: str, repo: str, path: str, body: dict[str, Any]) -> Any:
        url = f"{GITHUB_API_URL}/{owner}/{repo}{path}"
        logger.debug("GitHub %s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers,
                json=body,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise ApiRequestFailed(0, str(exc)) from exc
        if not response.ok:
            raise ApiRequestFailed(response.status_code, _error_message(response))
        try:
            return response.json()
        except ValueError as exc:
            raise ApiRequestFailed(response.status_code, "invalid JSON response") from exc

    def create_pull_request(
        self,
        task_id: str,
        title: str,
        branch: str,
        extra: dict[str, Any] | None = None,
    ) -> str | None:
        """Open a pull request for ``branch`` and return its URL."""
        config = load_git_config(self.store)
        body: dict[str, Any] = {
            "title": title,
            "head": branch,
            "base": get_default_branch(self.repo_root, self.store),
            "body": task_link(task_id),
        }
        if extra:
            body.update(extra)

        try:
            created = self._request("POST", config.github_repo_owner, config.github_repo_name, "/pulls", body)
        except ApiRequestFailed as exc:
            if exc.message == DRAFT_UNSUPPORTED_MESSAGE:
                raise PullRequestUnsupportedDraft(exc.status_code, exc.message) from exc
            raise PullRequestError(exc.status_code, exc.message) from exc

        url = created.get("html_url") if isinstance(created, dict) else None
        logger.info("opened pull request %s", url or title)
        return url

    def create_draft_pull_request(self, task_id: str, title: str, branch: str) -> str | None:
        """Open a draft pull request, falling back to a regular one when drafts are unsupported."""
        try:
            return self.create_pull_request(task_id, title, branch, {"draft": True})
        except PullRequestUnsupportedDraft:
            logger.info("draft pull requests unsupported, opening a regular pull request")
            return self.create_pull_request(task_id, title, branch)
