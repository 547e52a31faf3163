"""Console, logging, spinner and prompt primitives."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

import questionary
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from devcli.errors import PromptAborted

_T = TypeVar("_T")

console = Console()


def spinner_enabled() -> bool:
    return os.getenv("DEV_CLI_SPINNER", "1") == "1"


def configure_logging(verbose: bool = False) -> None:
    """Route log records through rich on the shared console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )
    # urllib3 connection records stay at WARNING
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@dataclass(frozen=True)
class Spinner:
    message: str

    def run(self, fn: Callable[[], _T]) -> _T:
        if not spinner_enabled():
            return fn()

        with Progress(
            SpinnerColumn(style="bright_magenta"),
            TextColumn("[bold bright_cyan]{task.description}[/bold bright_cyan]"),
            transient=True,
            console=console,
        ) as prog:
            task_id = prog.add_task(self.message, total=None)
            try:
                return fn()
            finally:
                prog.update(task_id, completed=1)


def select(message: str, choices: Sequence[questionary.Choice | str]) -> Any:
    """Ask the user to pick one choice and return its value."""
    answer = questionary.select(message, choices=list(choices)).ask()
    if answer is None:
        raise PromptAborted("prompt cancelled")
    return answer
