"""Pick a ClickUp task and start working on it.

Starting a task moves it to "In Progress", branches off the default branch,
pushes an empty commit and opens a draft pull request linked to the task.
Any failure along that chain aborts the workflow; nothing is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

import questionary

from devcli.clickup.client import IN_PROGRESS_STATUS, ClickupClient
from devcli.clickup.types import Task
from devcli.config.store import ConfigStore
from devcli.errors import BranchCreationError
from devcli.git.operations import commit_empty, create_branch, push_branch
from devcli.github.client import GitHubClient
from devcli.ui import Spinner, console, select
from devcli.workflow.naming import gen_branch_name, gen_pr_title
from devcli.workflow.render import task_title

logger = logging.getLogger(__name__)

EMPTY_COMMIT_MESSAGE = "create draft PR"

Prompt = Callable[[str, Sequence[Any]], Any]


class TaskAction(str, Enum):
    """Actions offered once a task is selected."""

    START = "Start working on it"
    VIEW_DESCRIPTION = "View Description"
    EXIT = "Exit"


def choose_task(tasks: Sequence[Task], prompt: Prompt = select) -> Task:
    choices = [questionary.Choice(title=task_title(task), value=task) for task in tasks]
    return prompt("Select a task", choices)


def choose_task_action(prompt: Prompt = select) -> TaskAction:
    choices = [questionary.Choice(title=action.value, value=action) for action in TaskAction]
    return prompt("What do you want to do?", choices)


def start_working_on(
    task: Task,
    *,
    clickup: ClickupClient,
    github: GitHubClient,
    repo_root: Path,
    store: ConfigStore,
) -> str | None:
    """Run the start-task side effects and return the pull request URL."""
    pr_title = gen_pr_title(task.id, task.name)
    branch_name = gen_branch_name(task.name)
    if not branch_name or branch_name.endswith("/"):
        raise BranchCreationError(f"cannot derive a branch name from task {task.id} {task.name!r}")

    console.print(f'[cyan]moving task to "{IN_PROGRESS_STATUS}"[/cyan]')
    clickup.move_task(task.id, IN_PROGRESS_STATUS)

    console.print(f"[cyan]creating branch[/cyan] {branch_name}", highlight=False)
    create_branch(repo_root, store, branch_name)

    console.print("[cyan]creating empty commit[/cyan]")
    commit_empty(repo_root, EMPTY_COMMIT_MESSAGE)

    console.print("[cyan]pushing branch[/cyan]")
    push_branch(repo_root)

    console.print("[cyan]creating draft PR[/cyan]")
    return github.create_draft_pull_request(task.id, pr_title, branch_name)


def task_action_loop(
    task: Task,
    *,
    clickup: ClickupClient,
    github: GitHubClient,
    repo_root: Path,
    store: ConfigStore,
    prompt: Prompt = select,
) -> str | None:
    """Prompt for actions on ``task`` until one ends the workflow."""
    while True:
        action = choose_task_action(prompt)
        if action is TaskAction.VIEW_DESCRIPTION:
            console.print(task.description or "(no description)", markup=False, highlight=False)
            continue
        if action is TaskAction.START:
            return start_working_on(task, clickup=clickup, github=github, repo_root=repo_root, store=store)
        return None


def run_tasks_workflow(
    *,
    clickup: ClickupClient,
    github: GitHubClient,
    repo_root: Path,
    store: ConfigStore,
    prompt: Prompt = select,
) -> str | None:
    """Fetch the user's open tasks, let them pick one and act on it."""
    tasks = Spinner("fetching tasks...").run(clickup.get_all_open_tasks)
    if not tasks:
        console.print("[yellow]No open tasks assigned to you.[/yellow]")
        return None
    logger.debug("fetched %d open tasks", len(tasks))

    task = choose_task(tasks, prompt)
    return task_action_loop(task, clickup=clickup, github=github, repo_root=repo_root, store=store, prompt=prompt)
