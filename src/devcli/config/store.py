"""JSON config store with project, private and home-directory roots.

Layout::

    <project_dir>/<name>_config.json           shared project config
    <project_dir>/.private/<name>_config.json  secrets and per-user ids
    <project_dir>/.private/<name>_cache.json   TTL-bounded cache envelopes
    <home_dir>/<name>_config.json              fallback for both config kinds

Every read hits disk. Any read failure (missing file, malformed JSON) is
reported as ``ConfigNotFound``.
"""

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from devcli.errors import ConfigNotFound

logger = logging.getLogger(__name__)

CONFIG_SUFFIX = "_config.json"
CACHE_SUFFIX = "_cache.json"
PRIVATE_DIRNAME = ".private"

DEFAULT_PROJECT_DIR = Path(".dev_cli")
DEFAULT_HOME_DIR = Path("~/.dev_cli")


class ConfigStore:
    """Reads and writes named JSON documents."""

    def __init__(
        self,
        project_dir: Path,
        home_dir: Path,
        *,
        clock: Callable[[], float] = time.time,
    ):
        self.project_dir = project_dir
        self.private_dir = project_dir / PRIVATE_DIRNAME
        self.home_dir = home_dir
        self._clock = clock

    @classmethod
    def from_env(cls) -> ConfigStore:
        """Build a store from ``DEV_CLI_DIR`` and ``DEV_CLI_HOME``."""
        project_dir = Path(os.getenv("DEV_CLI_DIR", str(DEFAULT_PROJECT_DIR)))
        home_dir = Path(os.getenv("DEV_CLI_HOME", str(DEFAULT_HOME_DIR))).expanduser()
        return cls(project_dir, home_dir)

    def _config_path(self, root: Path, name: str) -> Path:
        return root / f"{name}{CONFIG_SUFFIX}"

    def _cache_path(self, name: str) -> Path:
        return self.private_dir / f"{name}{CACHE_SUFFIX}"

    def _read(self, path: Path) -> Any:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.debug("config read failed for %s: %s", path, exc)
            raise ConfigNotFound(path.name) from exc
        if data is None:
            raise ConfigNotFound(path.name)
        logger.debug("config read from %s", path)
        return data

    def _write(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{json.dumps(data, indent=2, sort_keys=True)}\n", encoding="utf-8")
        logger.debug("config written to %s", path)

    def _read_with_fallback(self, root: Path, name: str) -> Any:
        try:
            return self._read(self._config_path(root, name))
        except ConfigNotFound:
            pass
        try:
            return self._read(self._config_path(self.home_dir, name))
        except ConfigNotFound as exc:
            raise ConfigNotFound(name) from exc

    def get_config(self, name: str) -> Any:
        """Read a project document, falling back to the home directory."""
        return self._read_with_fallback(self.project_dir, name)

    def get_private_config(self, name: str) -> Any:
        """Read a private document, falling back to the home directory."""
        return self._read_with_fallback(self.private_dir, name)

    def get_cached_config(self, name: str) -> Any:
        """Return cached data while it is younger than its TTL.

        Stale or malformed envelopes raise ``ConfigNotFound`` so callers treat
        them as a cache miss.
        """
        envelope = self._read(self._cache_path(name))
        try:
            last_updated_ms = float(envelope["lastUpdated"])
            ttl_seconds = float(envelope["ttl"])
            data = envelope["data"]
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigNotFound(name) from exc

        age_seconds = self._clock() - last_updated_ms / 1000.0
        if age_seconds >= ttl_seconds:
            logger.debug("cache %s is stale (age %.0fs, ttl %.0fs)", name, age_seconds, ttl_seconds)
            raise ConfigNotFound(name)
        logger.debug("cache hit for %s", name)
        return data

    def write_config(self, name: str, data: Any) -> None:
        """Overwrite a project document."""
        self._write(self._config_path(self.project_dir, name), data)

    def write_private_config(self, name: str, data: Any) -> None:
        """Overwrite a private document."""
        self._write(self._config_path(self.private_dir, name), data)

    def write_cached_config(self, name: str, data: Any, ttl_seconds: int) -> None:
        """Wrap data in a timestamped envelope and overwrite the cache file."""
        envelope = {
            "lastUpdated": int(self._clock() * 1000),
            "ttl": ttl_seconds,
            "data": data,
        }
        self._write(self._cache_path(name), envelope)
