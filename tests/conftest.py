import re

import pytest

from todo_list import TodoList

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def plain(text: str) -> str:
    return ANSI_RE.sub('', text)


@pytest.fixture
def todo_path(tmp_path):
    return tmp_path / "todos.json"


@pytest.fixture
def todo_list(todo_path):
    return TodoList(todo_path)
