"""dev-cli: ClickUp tasks to git branches and draft pull requests."""

__version__ = "1.0.0"
