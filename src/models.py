"""Data models for the terminal todo list.

Exposes the Task dataclass plus the priority vocabulary. Priority keys are
stored lowercase ("high", "medium", "low"); the report renders them in that
order. Timestamps are timezone-aware datetimes in memory and ISO-8601 text
on disk.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Tuple

PRIORITIES: Tuple[str, ...] = ("high", "medium", "low")
DEFAULT_PRIORITY = "medium"


def now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Accepts the trailing "Z" written by JavaScript's toISOString(); naive
    values are taken as local time.
    """
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def check_priority(priority: str) -> str:
    if priority not in PRIORITIES:
        raise ValueError(f'Invalid priority: {priority!r} (expected one of {", ".join(PRIORITIES)})')
    return priority


@dataclass
class Task:
    """A single todo item.

    Fields:
        id: Store-assigned integer id, never reused.
        title: Trimmed title text.
        description: Trimmed free text, may be empty.
        completed: Completion flag.
        created_at: Creation time; never changes.
        updated_at: Last mutation time; always >= created_at.
        priority: One of PRIORITIES.
    """
    id: int
    title: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    completed: bool = False
    priority: str = DEFAULT_PRIORITY

    def touch(self) -> None:
        """Refresh updated_at without ever moving it backwards."""
        self.updated_at = max(now(), self.updated_at)

    def __repr__(self) -> str:
        return f"Task(id={self.id}, title={self.title}, priority={self.priority}, completed={self.completed})"
