"""Task ordering and filtering helpers."""

from __future__ import annotations

from collections.abc import Iterable

from devcli.clickup.types import PriorityType, Task

PRIORITY_RANK: dict[PriorityType, int] = {
    PriorityType.URGENT: 0,
    PriorityType.HIGH: 1,
    PriorityType.NORMAL: 2,
    PriorityType.LOW: 3,
}


def priority_of(task: Task) -> PriorityType:
    """Return the task priority, treating a missing one as normal."""
    if task.priority is None:
        return PriorityType.NORMAL
    return task.priority.priority


def priority_rank(task: Task) -> int:
    return PRIORITY_RANK[priority_of(task)]


def order_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Sort tasks most urgent first, keeping input order within a priority."""
    return sorted(tasks, key=priority_rank)


def assigned_only(tasks: Iterable[Task]) -> list[Task]:
    """Drop tasks without assignees."""
    return [task for task in tasks if task.assignees]
