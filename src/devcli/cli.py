"""dev-cli - git helpers and ClickUp task workflow."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

import typer

from devcli import __version__
from devcli.clickup.client import ClickupClient
from devcli.config import ConfigStore, load_token
from devcli.errors import DevCliError, PromptAborted
from devcli.git.operations import create_branch, push_branch, undo_commit, update_branch
from devcli.github.client import GitHubClient
from devcli.ui import configure_logging, console
from devcli.workflow.tasks import run_tasks_workflow

_T = TypeVar("_T")

CLICKUP_TOKEN_ENV = "CLICKUP_API_TOKEN"
CLICKUP_TOKEN_CONFIG = "clickup_token"
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"
GITHUB_TOKEN_CONFIG = "github_token"
CLICKUP_TOKEN_FILE = "clickupToken_config.json"
GITHUB_TOKEN_FILE = Path("~/.github_token")

cli = typer.Typer(
    name="dev-cli",
    help="Tools for development",
    no_args_is_help=True,
)


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show dev-cli version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
) -> None:
    """Tools for development."""
    configure_logging(verbose)


def _run_or_exit(fn: Callable[[], _T]) -> _T:
    try:
        return fn()
    except PromptAborted as exc:
        console.print(f"[yellow]Aborted:[/yellow] {exc}")
        raise typer.Exit(1) from exc
    except DevCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}", highlight=False)
        raise typer.Exit(1) from exc


def _repo_root() -> Path:
    return Path.cwd()


@cli.command(name="branch")
def branch(
    branch_name: str = typer.Argument(
        ...,
        help="name of the branch to create, stashes all current changes that are not committed",
    ),
) -> None:
    """creates a new branch"""
    store = ConfigStore.from_env()
    created = _run_or_exit(lambda: create_branch(_repo_root(), store, branch_name))
    if created:
        console.print(f"[green]✓ Switched to new branch[/green] {created}", highlight=False)


@cli.command(name="undo_commit")
def undo_commit_command() -> None:
    """undo the last commit"""
    _run_or_exit(lambda: undo_commit(_repo_root()))
    console.print("[green]✓ Last commit undone[/green]")


@cli.command(name="push")
def push_command() -> None:
    """pushes the current branch"""
    _run_or_exit(lambda: push_branch(_repo_root()))
    console.print("[green]✓ Branch pushed[/green]")


@cli.command(name="update_branch")
def update_branch_command() -> None:
    """updates the current branch"""
    store = ConfigStore.from_env()
    _run_or_exit(lambda: update_branch(_repo_root(), store))
    console.print("[green]✓ Branch updated[/green]")


@cli.command(name="tasks")
def tasks_command() -> None:
    """connects to clickup tasks"""
    store = ConfigStore.from_env()
    repo_root = _repo_root()

    def _workflow() -> str | None:
        clickup = ClickupClient(
            load_token(
                store,
                env_var=CLICKUP_TOKEN_ENV,
                config_name=CLICKUP_TOKEN_CONFIG,
                raw_paths=[store.private_dir / CLICKUP_TOKEN_FILE],
            ),
            store,
        )
        github = GitHubClient(
            load_token(
                store,
                env_var=GITHUB_TOKEN_ENV,
                config_name=GITHUB_TOKEN_CONFIG,
                raw_paths=[GITHUB_TOKEN_FILE.expanduser()],
            ),
            store,
            repo_root,
        )
        return run_tasks_workflow(clickup=clickup, github=github, repo_root=repo_root, store=store)

    pr_url = _run_or_exit(_workflow)
    if pr_url:
        console.print(f"[green]✓ Draft PR opened:[/green] {pr_url}", highlight=False)


def main() -> None:
    cli()
