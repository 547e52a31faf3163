"""ClickUp REST client and the team -> space -> folder -> list resolution chain.

Every resolver takes a ``ClickupConfig`` snapshot and returns ``Resolved``
carrying the id and the config as updated on the way. Ids already present in
the config are returned without a request. Newly discovered ids are written
to the ``clickup`` config document immediately.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import requests

from devcli.clickup.tasks import assigned_only, order_tasks
from devcli.clickup.types import (
    ClickupCache,
    ClickupConfig,
    PersonalClickupConfig,
    Resolved,
    Task,
)
from devcli.config.store import ConfigStore
from devcli.errors import ApiRequestFailed, ConfigNotFound, ResourceNotFound

logger = logging.getLogger(__name__)

CLICKUP_API_URL = "https://api.clickup.com/api/v2"
REQUEST_TIMEOUT = 30

CONFIG_NAME = "clickup"
PRIVATE_CONFIG_NAME = "clickup_private"
CACHE_NAME = "clickup"
CACHE_TTL_SECONDS = 24 * 60 * 60

OPEN_STATUSES = ("open", "to do")
IN_PROGRESS_STATUS = "In Progress"


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or response.reason or "request failed"
    if isinstance(payload, dict):
        for key in ("err", "message"):
            if payload.get(key):
                return str(payload[key])
    return response.text.strip() or "request failed"


def find_id_by_name(items: Iterable[dict[str, Any]], name: str, level: str) -> str:
    """Return the id of the first item whose ``name`` matches exactly."""
    for item in items:
        if item.get("name") == name:
            return str(item["id"])
    raise ResourceNotFound(level, name)


class ClickupClient:
    """Authenticated access to the ClickUp API for a single project."""

    def __init__(
        self,
        token: str,
        store: ConfigStore,
        *,
        session_factory: Callable[[], requests.Session] = requests.Session,
        max_workers: int = 4,
    ):
        self.store = store
        self.max_workers = max_workers
        self._session_factory = session_factory
        self._session = session_factory()
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": token,
        }

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: list[tuple[str, str]] | None = None,
        body: dict[str, Any] | None = None,
        session: requests.Session | None = None,
    ) -> requests.Response:
        logger.debug("ClickUp %s %s", method, path)
        try:
            return (session or self._session).request(
                method,
                f"{CLICKUP_API_URL}{path}",
                headers=self._headers,
                params=params,
                json=body,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise ApiRequestFailed(0, str(exc)) from exc

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: list[tuple[str, str]] | None = None,
        body: dict[str, Any] | None = None,
        session: requests.Session | None = None,
    ) -> Any:
        response = self._send(method, path, params=params, body=body, session=session)
        if not response.ok:
            raise ApiRequestFailed(response.status_code, _error_message(response))
        try:
            return response.json()
        except ValueError as exc:
            raise ApiRequestFailed(response.status_code, "invalid JSON response") from exc

    def load_config(self) -> ClickupConfig:
        data = self.store.get_config(CONFIG_NAME)
        try:
            return ClickupConfig.from_dict(data)
        except (KeyError, TypeError, AttributeError) as exc:
            raise ConfigNotFound(CONFIG_NAME) from exc

    def load_personal_config(self) -> PersonalClickupConfig | None:
        try:
            data = self.store.get_private_config(PRIVATE_CONFIG_NAME)
        except ConfigNotFound:
            return None
        if not isinstance(data, dict):
            return None
        return PersonalClickupConfig.from_dict(data)

    def _save_config(self, config: ClickupConfig) -> ClickupConfig:
        self.store.write_config(CONFIG_NAME, config.to_dict())
        return config

    def _load_sprint_cache(self) -> ClickupCache | None:
        try:
            return ClickupCache.from_dict(self.store.get_cached_config(CACHE_NAME))
        except ConfigNotFound:
            logger.debug("sprint list cache miss")
            return None
        except (KeyError, TypeError, ValueError):
            logger.debug("sprint list cache unreadable, recomputing")
            return None

    def get_user_id(self, personal_config: PersonalClickupConfig | None = None) -> str:
        """Return the authenticated user's id, caching it privately."""
        if personal_config is not None and personal_config.user_id:
            return personal_config.user_id

        payload = self._request("GET", "/user")
        user_id = str(payload["user"]["id"])
        updated = dataclasses.replace(personal_config or PersonalClickupConfig(), user_id=user_id)
        self.store.write_private_config(PRIVATE_CONFIG_NAME, updated.to_dict())
        logger.info("cached ClickUp user id %s", user_id)
        return user_id

    def _resolve_child(
        self,
        config: ClickupConfig,
        *,
        id_field: str,
        parent: Callable[[ClickupConfig], Resolved[str]],
        collection_path: str,
        collection_key: str,
        name: str,
        level: str,
    ) -> Resolved[str]:
        current = getattr(config, id_field)
        if current:
            return Resolved(current, config)

        parent_resolved = parent(config)
        payload = self._request("GET", collection_path.format(parent_id=parent_resolved.value))
        found = find_id_by_name(payload.get(collection_key) or [], name, level)
        updated = self._save_config(dataclasses.replace(parent_resolved.config, **{id_field: found}))
        logger.info("resolved %s %r to %s", level, name, found)
        return Resolved(found, updated)

    def get_team_id(self, config: ClickupConfig) -> Resolved[str]:
        if config.team_id:
            return Resolved(config.team_id, config)

        payload = self._request("GET", "/team")
        team_id = find_id_by_name(payload.get("teams") or [], config.team_name, "team")
        updated = self._save_config(dataclasses.replace(config, team_id=team_id))
        logger.info("resolved team %r to %s", config.team_name, team_id)
        return Resolved(team_id, updated)

    def get_space_id(self, config: ClickupConfig) -> Resolved[str]:
        return self._resolve_child(
            config,
            id_field="space_id",
            parent=self.get_team_id,
            collection_path="/team/{parent_id}/space",
            collection_key="spaces",
            name=config.space_name,
            level="space",
        )

    def get_current_sprint_folder_id(self, config: ClickupConfig) -> Resolved[str]:
        return self._resolve_child(
            config,
            id_field="sprint_folder_id",
            parent=self.get_space_id,
            collection_path="/space/{parent_id}/folder",
            collection_key="folders",
            name=config.sprint_folder_name,
            level="sprint folder",
        )

    def get_backlog_folder_id(self, config: ClickupConfig) -> Resolved[str]:
        return self._resolve_child(
            config,
            id_field="backlog_folder_id",
            parent=self.get_space_id,
            collection_path="/space/{parent_id}/folder",
            collection_key="folders",
            name=config.backlog_folder_name,
            level="backlog folder",
        )

    def get_current_sprint_list_id(self, config: ClickupConfig) -> Resolved[str]:
        """Return the newest list in the sprint folder, cached for a day.

        The API lists sprint lists oldest first, so the last one is current.
        """
        cache = self._load_sprint_cache()
        if cache is not None:
            return Resolved(cache.current_sprint_list_id, config)

        folder = self.get_current_sprint_folder_id(config)
        payload = self._request("GET", f"/folder/{folder.value}/list")
        lists = payload.get("lists") or []
        if not lists:
            raise ResourceNotFound("list", f"any list in folder {config.sprint_folder_name}")

        list_id = str(lists[-1]["id"])
        new_cache = ClickupCache(current_sprint_list_id=list_id, date=int(time.time() * 1000))
        self.store.write_cached_config(CACHE_NAME, new_cache.to_dict(), CACHE_TTL_SECONDS)
        logger.info("current sprint list is %s", list_id)
        return Resolved(list_id, folder.config)

    def get_backlog_lists_ids(self, config: ClickupConfig) -> Resolved[tuple[str, ...]]:
        if config.backlog_lists is not None:
            return Resolved(config.backlog_lists, config)

        folder = self.get_backlog_folder_id(config)
        payload = self._request("GET", f"/folder/{folder.value}/list")
        list_ids = tuple(str(item["id"]) for item in payload.get("lists") or [])
        updated = self._save_config(dataclasses.replace(folder.config, backlog_lists=list_ids))
        logger.info("resolved %d backlog lists", len(list_ids))
        return Resolved(list_ids, updated)

    def get_list_tasks(self, list_id: str, user_id: str, *, session: requests.Session | None = None) -> list[Task]:
        """Fetch open and to-do tasks of a list assigned to ``user_id``."""
        params = [("statuses[]", status) for status in OPEN_STATUSES]
        params.append(("assignees[]", str(user_id)))
        payload = self._request("GET", f"/list/{list_id}/task", params=params, session=session)
        return [Task.from_dict(item) for item in payload.get("tasks") or []]

    def get_open_tasks(self, config: ClickupConfig, user_id: str) -> Resolved[list[Task]]:
        """Open tasks from the current sprint list."""
        sprint_list = self.get_current_sprint_list_id(config)
        return Resolved(self.get_list_tasks(sprint_list.value, user_id), sprint_list.config)

    def get_backlog_tasks(self, config: ClickupConfig, user_id: str) -> Resolved[list[Task]]:
        """Assigned open tasks across every backlog list, fetched concurrently."""
        backlog = self.get_backlog_lists_ids(config)
        if not backlog.value:
            return Resolved([], backlog.config)

        def fetch(list_id: str) -> list[Task]:
            # requests.Session is not thread-safe; one per worker call
            session = self._session_factory()
            try:
                return self.get_list_tasks(list_id, user_id, session=session)
            finally:
                session.close()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            per_list = list(executor.map(fetch, backlog.value))

        tasks = [task for list_tasks in per_list for task in assigned_only(list_tasks)]
        return Resolved(tasks, backlog.config)

    def get_all_open_tasks(self) -> list[Task]:
        """Sprint and backlog tasks for the current user, most urgent first."""
        config = self.load_config()
        user_id = self.get_user_id(self.load_personal_config())
        sprint = self.get_open_tasks(config, user_id)
        backlog = self.get_backlog_tasks(sprint.config, user_id)
        return order_tasks([*sprint.value, *backlog.value])

    def move_task(self, task_id: str, status: str) -> None:
        """Set a task's status. Failures are logged, not raised."""
        try:
            response = self._send("PUT", f"/task/{task_id}", body={"status": status})
        except ApiRequestFailed as exc:
            logger.warning("moving task %s to %r failed: %s", task_id, status, exc)
            return
        if not response.ok:
            logger.warning("moving task %s to %r failed: HTTP %s", task_id, status, response.status_code)
