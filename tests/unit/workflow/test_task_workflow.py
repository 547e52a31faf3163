"""Tests for the interactive task workflow."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from devcli.clickup.types import Task
from devcli.errors import BranchCreationError, PushError
from devcli.workflow import tasks as workflow
from devcli.workflow.tasks import TaskAction, run_tasks_workflow


class ScriptedPrompt:
    """Answers prompts from a fixed script of callables or values."""

    def __init__(self, *answers: Any):
        self.answers = list(answers)
        self.messages: list[str] = []

    def __call__(self, message: str, choices) -> Any:
        self.messages.append(message)
        answer = self.answers.pop(0)
        if callable(answer):
            return answer([choice.value for choice in choices])
        return answer


class FakeClickup:
    def __init__(self, tasks: list[Task]):
        self.tasks = tasks
        self.moves: list[tuple[str, str]] = []

    def get_all_open_tasks(self) -> list[Task]:
        return self.tasks

    def move_task(self, task_id: str, status: str) -> None:
        self.moves.append((task_id, status))


class FakeGitHub:
    def __init__(self):
        self.drafts: list[tuple[str, str, str]] = []

    def create_draft_pull_request(self, task_id: str, title: str, branch: str) -> str:
        self.drafts.append((task_id, title, branch))
        return "https://github.com/acme/app/pull/3"


@pytest.fixture
def git_calls(monkeypatch) -> list[tuple]:
    calls: list[tuple] = []
    monkeypatch.setattr(workflow, "create_branch", lambda root, store, name: calls.append(("branch", name)) or name)
    monkeypatch.setattr(workflow, "commit_empty", lambda root, message: calls.append(("commit", message)))
    monkeypatch.setattr(workflow, "push_branch", lambda root: calls.append(("push",)))
    monkeypatch.setenv("DEV_CLI_SPINNER", "0")
    return calls


TASK = Task(id="86abc", name="[BUG] Crash on save!", description="Steps to reproduce")


def test_start_working_runs_full_chain(tmp_path: Path, store, git_calls) -> None:
    clickup = FakeClickup([Task(id="other", name="Other"), TASK])
    github = FakeGitHub()
    prompt = ScriptedPrompt(lambda tasks: tasks[1], TaskAction.START)

    url = run_tasks_workflow(clickup=clickup, github=github, repo_root=tmp_path, store=store, prompt=prompt)

    assert url == "https://github.com/acme/app/pull/3"
    assert clickup.moves == [("86abc", "In Progress")]
    assert git_calls == [("branch", "fix/crash-on-save"), ("commit", "create draft PR"), ("push",)]
    assert github.drafts == [("86abc", "[86abc] Fix: Crash on save!", "fix/crash-on-save")]


def test_view_description_loops_back_to_action_menu(tmp_path: Path, store, git_calls, capsys) -> None:
    clickup = FakeClickup([TASK])
    github = FakeGitHub()
    prompt = ScriptedPrompt(TASK, TaskAction.VIEW_DESCRIPTION, TaskAction.VIEW_DESCRIPTION, TaskAction.EXIT)

    assert run_tasks_workflow(clickup=clickup, github=github, repo_root=tmp_path, store=store, prompt=prompt) is None

    assert prompt.messages == ["Select a task", "What do you want to do?", "What do you want to do?", "What do you want to do?"]
    assert capsys.readouterr().out.count("Steps to reproduce") == 2
    assert clickup.moves == []
    assert git_calls == []


def test_exit_has_no_side_effects(tmp_path: Path, store, git_calls) -> None:
    clickup = FakeClickup([TASK])
    github = FakeGitHub()

    run_tasks_workflow(
        clickup=clickup, github=github, repo_root=tmp_path, store=store, prompt=ScriptedPrompt(TASK, TaskAction.EXIT)
    )

    assert clickup.moves == []
    assert github.drafts == []
    assert git_calls == []


def test_no_tasks_skips_prompts(tmp_path: Path, store, git_calls) -> None:
    prompt = ScriptedPrompt()
    assert run_tasks_workflow(
        clickup=FakeClickup([]), github=FakeGitHub(), repo_root=tmp_path, store=store, prompt=prompt
    ) is None
    assert prompt.messages == []


def test_failure_in_chain_aborts_before_pull_request(tmp_path: Path, store, git_calls, monkeypatch) -> None:
    def _failing_push(root: Path) -> None:
        raise PushError("could not push branch")

    monkeypatch.setattr(workflow, "push_branch", _failing_push)
    github = FakeGitHub()

    with pytest.raises(PushError):
        run_tasks_workflow(
            clickup=FakeClickup([TASK]),
            github=github,
            repo_root=tmp_path,
            store=store,
            prompt=ScriptedPrompt(TASK, TaskAction.START),
        )

    assert github.drafts == []


@pytest.mark.parametrize("name", ["修复登录", "[BUG] 修复登录"])
def test_task_name_without_branch_characters_is_refused(tmp_path: Path, store, git_calls, name: str) -> None:
    clickup = FakeClickup([Task(id="t1", name=name)])
    github = FakeGitHub()
    prompt = ScriptedPrompt(lambda tasks: tasks[0], TaskAction.START)

    with pytest.raises(BranchCreationError, match="t1"):
        run_tasks_workflow(clickup=clickup, github=github, repo_root=tmp_path, store=store, prompt=prompt)

    assert clickup.moves == []
    assert git_calls == []
    assert github.drafts == []
