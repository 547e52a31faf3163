"""Types for ClickUp config documents and tasks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

_T = TypeVar("_T")


def _optional_id(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class ClickupConfig:
    """Per-project hierarchy names and their lazily resolved ids."""

    team_name: str
    space_name: str
    backlog_folder_name: str
    sprint_folder_name: str
    team_id: str | None = None
    space_id: str | None = None
    backlog_folder_id: str | None = None
    sprint_folder_id: str | None = None
    backlog_lists: tuple[str, ...] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClickupConfig:
        backlog_lists = data.get("backlogLists")
        return cls(
            team_name=data["teamName"],
            space_name=data["spaceName"],
            backlog_folder_name=data["backlogFolderName"],
            sprint_folder_name=data["sprintFolderName"],
            team_id=_optional_id(data.get("teamId")),
            space_id=_optional_id(data.get("spaceId")),
            backlog_folder_id=_optional_id(data.get("backlogFolderId")),
            sprint_folder_id=_optional_id(data.get("sprintFolderId")),
            backlog_lists=tuple(str(x) for x in backlog_lists) if backlog_lists is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "teamName": self.team_name,
            "spaceName": self.space_name,
            "backlogFolderName": self.backlog_folder_name,
            "sprintFolderName": self.sprint_folder_name,
        }
        optional = {
            "teamId": self.team_id,
            "spaceId": self.space_id,
            "backlogFolderId": self.backlog_folder_id,
            "sprintFolderId": self.sprint_folder_id,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        if self.backlog_lists is not None:
            data["backlogLists"] = list(self.backlog_lists)
        return data


@dataclass(frozen=True)
class PersonalClickupConfig:
    """Private per-user ClickUp settings."""

    user_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PersonalClickupConfig:
        return cls(user_id=_optional_id(data.get("userId")))

    def to_dict(self) -> dict[str, Any]:
        return {"userId": self.user_id}


@dataclass(frozen=True)
class ClickupCache:
    """Cached current sprint list, stored under a TTL envelope."""

    current_sprint_list_id: str
    date: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClickupCache:
        return cls(
            current_sprint_list_id=str(data["currentSprintListId"]),
            date=int(data["date"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"currentSprintListId": self.current_sprint_list_id, "date": self.date}


@dataclass(frozen=True)
class Resolved(Generic[_T]):
    """A resolved value plus the config as updated along the way."""

    value: _T
    config: ClickupConfig


class PriorityType(str, Enum):
    """ClickUp priority names, most urgent first."""

    URGENT = "urgent"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


@dataclass(frozen=True)
class Priority:
    priority: PriorityType
    color: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Priority | None:
        if not data:
            return None
        try:
            level = PriorityType(str(data.get("priority", "")).lower())
        except ValueError:
            level = PriorityType.LOW
        return cls(priority=level, color=data.get("color") or "")


@dataclass(frozen=True)
class Tag:
    name: str
    tag_fg: str = ""
    tag_bg: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tag:
        return cls(
            name=data.get("name", ""),
            tag_fg=data.get("tag_fg") or "",
            tag_bg=data.get("tag_bg") or "",
        )


@dataclass(frozen=True)
class Assignee:
    id: str
    username: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Assignee:
        return cls(id=str(data["id"]), username=data.get("username") or "")


@dataclass(frozen=True)
class Task:
    """A ClickUp task as returned by the list task endpoint."""

    id: str
    name: str
    description: str = ""
    status: str = ""
    priority: Priority | None = None
    tags: tuple[Tag, ...] = field(default_factory=tuple)
    assignees: tuple[Assignee, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        status = data.get("status")
        if isinstance(status, dict):
            status = status.get("status", "")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            description=data.get("description") or "",
            status=status or "",
            priority=Priority.from_dict(data.get("priority")),
            tags=tuple(Tag.from_dict(t) for t in data.get("tags") or []),
            assignees=tuple(Assignee.from_dict(a) for a in data.get("assignees") or []),
        )
