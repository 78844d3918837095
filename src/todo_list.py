"""Todo list logic: holds tasks, ID management, mutation, stats and rendering.

Every mutating operation rewrites the backing file before returning; read
operations never touch storage. Load and save failures are reported on the
injected logger and never crash the caller (unless strict=True, which lets
save failures propagate as StorageError).
"""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Union, Any

from models import Task, PRIORITIES, DEFAULT_PRIORITY, check_priority, now
from storage import Storage, StorageError, DEFAULT_FILE
from theme import color, HEADER_COLOR, PRIORITY_COLOR, ID_COLOR, DONE_COLOR, MUTED_COLOR, BOLD

DONE_GLYPH = "✓"
PENDING_GLYPH = "○"

Stats = Dict[str, Any]


class TodoList:
    def __init__(self, path: Union[str, Path] = DEFAULT_FILE,
                 logger: Optional[logging.Logger] = None, strict: bool = False):
        self.storage = Storage(path)
        self.logger: logging.Logger = logger or logging.getLogger(__name__)
        self.strict = strict
        self.last_save_ok: bool = True
        self._tasks: List[Task] = []
        self._next_id: int = 1
        self._load()

    # -------------------- loading / saving --------------------
    def _load(self) -> None:
        try:
            self._tasks, self._next_id = self.storage.load()
        except StorageError as exc:
            self.logger.warning("Could not load todo file, starting empty: %s", exc)
            self._tasks, self._next_id = [], 1

    def _save(self) -> None:
        try:
            self.storage.save(self._tasks, self._next_id)
        except StorageError as exc:
            self.last_save_ok = False
            if self.strict:
                raise
            self.logger.error("Could not save todo file, change kept in memory only: %s", exc)
        else:
            self.last_save_ok = True

    @property
    def path(self) -> Path:
        return self.storage.path

    @property
    def next_id(self) -> int:
        return self._next_id

    # -------------------- id management --------------------
    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    def _find(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    # -------------------- task operations --------------------
    def add(self, title: str, description: str = "", priority: str = DEFAULT_PRIORITY) -> Task:
        check_priority(priority)
        created = now()
        task = Task(
            id=self._allocate_id(),
            title=title.strip(),
            description=description.strip(),
            completed=False,
            created_at=created,
            updated_at=created,
            priority=priority,
        )
        self._tasks.append(task)
        self._save()
        return replace(task)

    def toggle(self, task_id: int) -> bool:
        task = self._find(task_id)
        if task is None:
            return False
        task.completed = not task.completed
        task.touch()
        self._save()
        return True

    def delete(self, task_id: int) -> bool:
        task = self._find(task_id)
        if task is None:
            return False
        self._tasks.remove(task)
        self._save()
        return True

    def update(self, task_id: int, title: Optional[str] = None,
               description: Optional[str] = None, priority: Optional[str] = None) -> bool:
        """Apply only the supplied fields; updated_at is refreshed either way."""
        if priority is not None:
            check_priority(priority)
        task = self._find(task_id)
        if task is None:
            return False
        if title is not None:
            task.title = title.strip()
        if description is not None:
            task.description = description.strip()
        if priority is not None:
            task.priority = priority
        task.touch()
        self._save()
        return True

    # -------------------- queries --------------------
    def get(self, task_id: int) -> Optional[Task]:
        task = self._find(task_id)
        return replace(task) if task is not None else None

    def all(self) -> List[Task]:
        return [replace(t) for t in self._tasks]

    def completed(self) -> List[Task]:
        return [replace(t) for t in self._tasks if t.completed]

    def pending(self) -> List[Task]:
        return [replace(t) for t in self._tasks if not t.completed]

    def by_priority(self, priority: str) -> List[Task]:
        check_priority(priority)
        return [replace(t) for t in self._tasks if t.priority == priority]

    def stats(self) -> Stats:
        done = sum(1 for t in self._tasks if t.completed)
        return {
            'total': len(self._tasks),
            'completed': done,
            'pending': len(self._tasks) - done,
            'by_priority': {p: sum(1 for t in self._tasks if t.priority == p) for p in PRIORITIES},
        }

    # -------------------- display --------------------
    def display(self, tasks: Optional[List[Task]] = None) -> None:
        print(self.render(tasks))

    def render(self, tasks: Optional[List[Task]] = None) -> str:
        """Report grouped by priority (high, medium, low) followed by totals.

        `tasks` narrows the listing (e.g. to pending tasks); the totals always
        describe the whole list.
        """
        if not self._tasks:
            return "No tasks yet."
        shown = self.all() if tasks is None else tasks
        lines: List[str] = [color("=== TODO LIST ===", HEADER_COLOR, BOLD)]
        if not shown:
            lines.append("")
            lines.append("No matching tasks.")
        for priority in PRIORITIES:
            group = [t for t in shown if t.priority == priority]
            if not group:
                continue
            lines.append('')
            lines.append(color(f"{priority.upper()} priority:", PRIORITY_COLOR[priority], BOLD))
            for task in group:
                lines.extend(self._task_lines(task))
        stats = self.stats()
        counts = stats['by_priority']
        lines.append('')
        lines.append(color("=== STATS ===", HEADER_COLOR, BOLD))
        lines.append(f"Total: {stats['total']} | Completed: {stats['completed']} | Pending: {stats['pending']}")
        lines.append(f"High: {counts['high']} | Medium: {counts['medium']} | Low: {counts['low']}")
        return '\n'.join(lines)

    @staticmethod
    def _task_lines(task: Task) -> List[str]:
        if task.completed:
            glyph = color(DONE_GLYPH, DONE_COLOR)
        else:
            glyph = color(PENDING_GLYPH, PRIORITY_COLOR[task.priority])
        title_text = task.title if task.title else '<untitled>'
        lines = [f"  {glyph} {color(f'[{task.id}]', ID_COLOR)} {title_text}"]
        if task.description:
            lines.append(f"      {task.description}")
        day = task.created_at.astimezone().date().isoformat()
        lines.append(color(f"      created {day}", MUTED_COLOR))
        return lines

    def __len__(self) -> int:
        return len(self._tasks)

    def __str__(self) -> str:
        stats = self.stats()
        return (f'Total: {stats["total"]} tasks, ' \
                f'Completed: {stats["completed"]} tasks, ' \
                f'Pending: {stats["pending"]} tasks')
