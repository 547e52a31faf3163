"""Tests for GitHub pull request creation and the draft fallback."""

from __future__ import annotations

from pathlib import Path

import pytest
import requests

from devcli.config.store import ConfigStore
from devcli.errors import ConfigNotFound, PullRequestError
from devcli.github.client import DRAFT_UNSUPPORTED_MESSAGE, GitHubClient

PULLS_URL = "https://api.github.com/repos/acme/app/pulls"


@pytest.fixture
def git_store(store: ConfigStore) -> ConfigStore:
    store.write_config("git", {"githubRepoOwner": "acme", "githubRepoName": "app", "defaultBranch": "develop"})
    return store


def test_create_pull_request_posts_expected_body(tmp_path: Path, git_store, fake_session, fake_response) -> None:
    session = fake_session({("POST", PULLS_URL): fake_response(201, {"html_url": "https://github.com/acme/app/pull/1"})})
    client = GitHubClient("ghp_token", git_store, tmp_path, session=session)

    url = client.create_pull_request("abc123", "[abc123] Fix: Crash", "fix/crash", {"draft": True})

    assert url == "https://github.com/acme/app/pull/1"
    call = session.calls[0]
    assert call["json"] == {
        "title": "[abc123] Fix: Crash",
        "head": "fix/crash",
        "base": "develop",
        "body": "https://app.clickup.com/t/abc123",
        "draft": True,
    }
    assert call["headers"]["Authorization"] == "Bearer ghp_token"
    assert call["headers"]["Accept"] == "application/vnd.github+json"


def test_create_pull_request_without_git_config(tmp_path: Path, store, fake_session) -> None:
    client = GitHubClient("ghp_token", store, tmp_path, session=fake_session())
    with pytest.raises(ConfigNotFound):
        client.create_pull_request("abc", "title", "branch")


def test_create_pull_request_surfaces_api_message(tmp_path: Path, git_store, fake_session, fake_response) -> None:
    session = fake_session({("POST", PULLS_URL): fake_response(422, {"message": "Validation Failed"})})
    client = GitHubClient("ghp_token", git_store, tmp_path, session=session)

    with pytest.raises(PullRequestError) as excinfo:
        client.create_pull_request("abc", "title", "branch")

    assert excinfo.value.message == "Validation Failed"
    assert excinfo.value.status_code == 422


def test_draft_unsupported_retries_once_without_draft(
    tmp_path: Path, git_store, fake_session, fake_response
) -> None:
    session = fake_session(
        {
            ("POST", PULLS_URL): [
                fake_response(422, {"message": DRAFT_UNSUPPORTED_MESSAGE}),
                fake_response(201, {"html_url": "https://github.com/acme/app/pull/2"}),
            ]
        }
    )
    client = GitHubClient("ghp_token", git_store, tmp_path, session=session)

    url = client.create_draft_pull_request("abc", "title", "branch")

    assert url == "https://github.com/acme/app/pull/2"
    assert len(session.calls) == 2
    assert session.calls[0]["json"]["draft"] is True
    assert "draft" not in session.calls[1]["json"]


def test_draft_other_failure_is_not_retried(tmp_path: Path, git_store, fake_session, fake_response) -> None:
    session = fake_session(
        {
            ("POST", PULLS_URL): [
                fake_response(422, {"message": "A pull request already exists for acme:branch."}),
                fake_response(201, {"html_url": "unused"}),
            ]
        }
    )
    client = GitHubClient("ghp_token", git_store, tmp_path, session=session)

    with pytest.raises(PullRequestError, match="already exists"):
        client.create_draft_pull_request("abc", "title", "branch")

    assert len(session.calls) == 1


def test_non_json_error_body_uses_text(tmp_path: Path, git_store, fake_session, fake_response) -> None:
    session = fake_session({("POST", PULLS_URL): fake_response(502, None, text="Bad gateway")})
    client = GitHubClient("ghp_token", git_store, tmp_path, session=session)

    with pytest.raises(PullRequestError, match="Bad gateway"):
        client.create_pull_request("abc", "title", "branch")


def test_connection_error_becomes_pull_request_error(tmp_path: Path, git_store, fake_session) -> None:
    session = fake_session({("POST", PULLS_URL): requests.ConnectionError("name resolution failed")})
    client = GitHubClient("ghp_token", git_store, tmp_path, session=session)

    with pytest.raises(PullRequestError, match="name resolution failed") as excinfo:
        client.create_draft_pull_request("abc", "title", "branch")

    assert excinfo.value.status_code == 0
    assert len(session.calls) == 1


def test_non_json_success_body_becomes_pull_request_error(
    tmp_path: Path, git_store, fake_session, fake_response
) -> None:
    session = fake_session({("POST", PULLS_URL): fake_response(201, None, text="<html>proxy</html>")})
    client = GitHubClient("ghp_token", git_store, tmp_path, session=session)

    with pytest.raises(PullRequestError, match="invalid JSON response"):
        client.create_pull_request("abc", "title", "branch")
