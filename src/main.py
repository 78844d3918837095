"""Main entry point for the terminal todo list.

Storage path comes from TODO_FILE (default: todos.json in the working
directory); log verbosity from TODO_LOG_LEVEL (default: WARNING).
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from cli import CLI
from storage import DEFAULT_FILE
from todo_list import TodoList

LOG_FORMAT = "%(levelname)s: %(message)s"


def resolve_path() -> Path:
    return Path(os.environ.get('TODO_FILE') or DEFAULT_FILE)


def configure_logging() -> None:
    level_name = (os.environ.get('TODO_LOG_LEVEL') or 'WARNING').upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    todo_list = TodoList(resolve_path())
    cli = CLI(todo_list)
    return cli.run(sys.argv[1:] if argv is None else argv)

if __name__ == "__main__":
    sys.exit(main())
