"""Styled priority and tag badges for task pickers."""

from __future__ import annotations

from devcli.clickup.tasks import priority_of
from devcli.clickup.types import PriorityType, Tag, Task

Fragment = tuple[str, str]

BRACKET_STYLE = "fg:ansiwhite"

PRIORITY_BADGES: dict[PriorityType, Fragment] = {
    PriorityType.URGENT: ("fg:ansired bold", "Urgent"),
    PriorityType.HIGH: ("fg:ansiyellow", "High"),
    PriorityType.NORMAL: ("fg:ansiblue", "Normal"),
    PriorityType.LOW: ("fg:ansibrightblack", "Low"),
}

TAG_BADGES: dict[str, Fragment] = {
    "bug": ("bg:ansired", "Bug"),
    "blocked": ("bg:ansired", "Blocked"),
    "web": ("bg:ansiblue", "Web"),
    "mobile": ("bg:ansiblue", "Mobile"),
    "backend": ("bg:ansiblue", "Backend"),
}
GENERIC_TAG_STYLE = "bg:ansibrightblack"


def priority_fragments(task: Task) -> list[Fragment]:
    return [
        (BRACKET_STYLE, "["),
        PRIORITY_BADGES[priority_of(task)],
        (BRACKET_STYLE, "]"),
    ]


def tag_fragment(tag: Tag) -> Fragment:
    return TAG_BADGES.get(tag.name, (GENERIC_TAG_STYLE, tag.name))


def tags_fragments(tags: tuple[Tag, ...]) -> list[Fragment]:
    if not tags:
        return []
    fragments: list[Fragment] = [(BRACKET_STYLE, "[")]
    for idx, tag in enumerate(tags):
        if idx:
            fragments.append(("", " "))
        fragments.append(tag_fragment(tag))
    fragments.append((BRACKET_STYLE, "]"))
    return fragments


def task_title(task: Task) -> list[Fragment]:
    """Task name followed by its priority and tag badges."""
    fragments: list[Fragment] = [("", f"{task.name} ")]
    fragments.extend(priority_fragments(task))
    tags = tags_fragments(task.tags)
    if tags:
        fragments.append(("", " "))
        fragments.extend(tags)
    return fragments


def plain_text(fragments: list[Fragment]) -> str:
    return "".join(text for _, text in fragments)
