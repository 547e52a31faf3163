"""ClickUp client, task types and ordering."""

from devcli.clickup.client import ClickupClient
from devcli.clickup.tasks import order_tasks
from devcli.clickup.types import ClickupConfig, PriorityType, Resolved, Task

__all__ = ["ClickupClient", "ClickupConfig", "PriorityType", "Resolved", "Task", "order_tasks"]
