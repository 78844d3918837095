"""Command-line dispatch for the todo list.

One command per invocation (argv style). Every path returns exit status 0;
usage problems and unknown ids are reported as messages, not errors.
"""
from typing import Dict, List, Optional, Sequence

from models import PRIORITIES, DEFAULT_PRIORITY
from todo_list import TodoList

COMMANDS = ('add', 'list', 'toggle', 'delete', 'update', 'help')

LIST_FILTERS = ('done', 'pending') + PRIORITIES

UPDATE_FIELDS = ('title', 'description', 'priority')

DEMO_TASKS = (
    ("Finish the todo project", "Implement every command and check it end to end", "high"),
    ("Write the README", "Describe the project and the setup steps", "medium"),
    ("Ask for a code review", "Send the change to a teammate for review", "low"),
)


def _parse_id(raw: str) -> Optional[int]:
    raw = raw.strip().rstrip('.')
    if not raw.isdecimal():
        return None
    return int(raw)


class CLI:
    def __init__(self, todo_list: TodoList):
        self.todo_list: TodoList = todo_list

    def run(self, argv: Sequence[str]) -> int:
        """Dispatch a single command; always returns 0."""
        args = list(argv)
        if not args:
            self.demo()
        else:
            self._handle_command(args)
        return 0

    # -------------------- command dispatch --------------------
    def _handle_command(self, args: List[str]) -> None:
        cmd = args[0].lower()
        if cmd == 'add':
            self._cmd_add(args)
        elif cmd == 'list':
            self._cmd_list(args)
        elif cmd == 'toggle':
            self._cmd_toggle(args)
        elif cmd == 'delete':
            self._cmd_delete(args)
        elif cmd == 'update':
            self._cmd_update(args)
        elif cmd == 'help':
            self._help()
        else:
            print(f"Available commands: {', '.join(COMMANDS)}")

    # ---- individual command helpers ----
    def _cmd_add(self, args: List[str]) -> None:
        if len(args) < 2:
            print('Usage: todo add "<title>" ["description"] [high|medium|low]')
            return
        title = args[1]
        description = args[2] if len(args) > 2 else ""
        priority = args[3].lower() if len(args) > 3 else DEFAULT_PRIORITY
        if priority not in PRIORITIES:
            print(f"Invalid priority: {priority}. Use one of: {', '.join(PRIORITIES)}")
            return
        task = self.todo_list.add(title, description, priority)
        print(f"Added task [{task.id}] {task.title}")

    def _cmd_list(self, args: List[str]) -> None:
        if len(args) == 1:
            self.todo_list.display()
            return
        which = args[1].lower()
        if which not in LIST_FILTERS:
            print(f"Usage: todo list [{'|'.join(LIST_FILTERS)}]")
            return
        if which == 'done':
            tasks = self.todo_list.completed()
        elif which == 'pending':
            tasks = self.todo_list.pending()
        else:
            tasks = self.todo_list.by_priority(which)
        self.todo_list.display(tasks)

    def _cmd_toggle(self, args: List[str]) -> None:
        if len(args) < 2:
            print("Usage: todo toggle <id>")
            return
        tid = _parse_id(args[1])
        if tid is None:
            print("Invalid id.")
            return
        if self.todo_list.toggle(tid):
            print(f"Task [{tid}] toggled.")
        else:
            print(f"Task [{tid}] not found.")

    def _cmd_delete(self, args: List[str]) -> None:
        if len(args) < 2:
            print("Usage: todo delete <id>")
            return
        tid = _parse_id(args[1])
        if tid is None:
            print("Invalid id.")
            return
        if self.todo_list.delete(tid):
            print(f"Task [{tid}] deleted.")
        else:
            print(f"Task [{tid}] not found.")

    def _cmd_update(self, args: List[str]) -> None:
        usage = "Usage: todo update <id> title=... description=... priority=high|medium|low"
        if len(args) < 2:
            print(usage)
            return
        tid = _parse_id(args[1])
        if tid is None:
            print("Invalid id.")
            return
        fields: Dict[str, str] = {}
        for token in args[2:]:
            key, sep, value = token.partition('=')
            key = key.strip().lower()
            if not sep or key not in UPDATE_FIELDS:
                print(usage)
                return
            fields[key] = value
        if 'priority' in fields:
            fields['priority'] = fields['priority'].strip().lower()
            if fields['priority'] not in PRIORITIES:
                print(f"Invalid priority: {fields['priority']}. Use one of: {', '.join(PRIORITIES)}")
                return
        if self.todo_list.update(tid, **fields):
            print(f"Task [{tid}] updated.")
        else:
            print(f"Task [{tid}] not found.")

    # -------------------- help / demo --------------------
    def _help(self) -> None:
        print("Commands:")
        print('  add <title> [description] [priority]   Add a task (priority: high, medium, low)')
        print("  list [done|pending|high|medium|low]    Show tasks grouped by priority")
        print("  toggle <id>                            Flip a task between done and pending")
        print("  delete <id>                            Remove a task")
        print("  update <id> field=value...             Change title, description or priority")
        print("  help                                   Show this help")
        print("Run without arguments for a short demonstration.")

    def demo(self) -> None:
        """Add three sample tasks, show them, complete the second, show again."""
        print("=== TODO LIST DEMO ===\n")
        print("Adding sample tasks...")
        added = [self.todo_list.add(title, description, priority)
                 for title, description, priority in DEMO_TASKS]
        self.todo_list.display()
        second = added[1]
        print(f"\nMarking task [{second.id}] as done...")
        self.todo_list.toggle(second.id)
        self.todo_list.display()
