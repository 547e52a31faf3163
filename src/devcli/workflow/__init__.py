"""Interactive task workflow."""

from devcli.workflow.naming import gen_branch_name, gen_pr_name
from devcli.workflow.tasks import TaskAction, run_tasks_workflow

__all__ = ["TaskAction", "gen_branch_name", "gen_pr_name", "run_tasks_workflow"]
