"""Config documents and their on-disk store."""

from devcli.config.store import ConfigStore
from devcli.config.tokens import load_token

__all__ = ["ConfigStore", "load_token"]
