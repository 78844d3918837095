"""Persistence helpers (load/save) for the todo list.

File layout: {"tasks": [...], "nextId": N}. Older files keyed the task
collection as "todos"; they are read transparently and rewritten under
"tasks" on the next save.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from models import Task, DEFAULT_PRIORITY, check_priority, parse_timestamp

DEFAULT_FILE = Path('todos.json')

TASKS_KEY = 'tasks'
LEGACY_TASKS_KEY = 'todos'
NEXT_ID_KEY = 'nextId'

TaskEntry = Dict[str, Any]
StateDict = Dict[str, Any]


class StorageError(Exception):
    """Raised when the backing file cannot be read, parsed or written."""


class Storage:
    def __init__(self, path: Union[str, Path] = DEFAULT_FILE):
        self.path = Path(path)

    def load(self) -> Tuple[List[Task], int]:
        """Load tasks and the next id from disk.

        Missing file -> ([], 1). Anything unreadable or malformed raises
        StorageError.
        """
        if not self.path.exists():
            return [], 1
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageError(f'cannot read {self.path}: {exc}') from exc
        if not isinstance(data, dict):
            raise StorageError(f'{self.path} does not hold a JSON object')
        # migrate key 'todos' -> 'tasks'
        if LEGACY_TASKS_KEY in data and TASKS_KEY not in data:
            data[TASKS_KEY] = data.pop(LEGACY_TASKS_KEY)
        try:
            tasks = [task_from_dict(raw) for raw in data.get(TASKS_KEY, [])]
            next_id = data.get(NEXT_ID_KEY, 1)
            if isinstance(next_id, bool) or not isinstance(next_id, int):
                raise ValueError(f'invalid nextId: {next_id!r}')
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise StorageError(f'malformed task data in {self.path}: {exc}') from exc
        if len({t.id for t in tasks}) != len(tasks):
            raise StorageError(f'duplicate task ids in {self.path}')
        if tasks:
            next_id = max(next_id, max(t.id for t in tasks) + 1)
        return tasks, max(next_id, 1)

    def save(self, tasks: List[Task], next_id: int) -> None:
        """Overwrite the file with the full state (pretty-printed)."""
        state: StateDict = {
            TASKS_KEY: [task_to_dict(t) for t in tasks],
            NEXT_ID_KEY: next_id,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(state, f, indent=2, ensure_ascii=False)
        except OSError as exc:
            raise StorageError(f'cannot write {self.path}: {exc}') from exc


def task_to_dict(task: Task) -> TaskEntry:
    return {
        'id': task.id,
        'title': task.title,
        'description': task.description,
        'completed': task.completed,
        'createdAt': task.created_at.isoformat(),
        'updatedAt': task.updated_at.isoformat(),
        'priority': task.priority,
    }


def task_from_dict(raw: TaskEntry) -> Task:
    """Build a Task from its stored form; optional fields fall back to defaults."""
    tid = raw['id']
    if isinstance(tid, bool) or not isinstance(tid, int) or tid < 1:
        raise ValueError(f'invalid task id: {tid!r}')
    title = raw['title']
    if not isinstance(title, str):
        raise TypeError(f'task {tid} title is not a string')
    created_at = parse_timestamp(raw['createdAt'])
    updated_raw = raw.get('updatedAt')
    updated_at = parse_timestamp(updated_raw) if updated_raw else created_at
    return Task(
        id=tid,
        title=title,
        description=str(raw.get('description') or ''),
        completed=bool(raw.get('completed', False)),
        created_at=created_at,
        updated_at=max(updated_at, created_at),
        priority=check_priority(raw.get('priority') or DEFAULT_PRIORITY),
    )
