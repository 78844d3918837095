import json

import pytest

from cli import CLI
from conftest import plain
from main import main
from todo_list import TodoList


@pytest.fixture
def cli(todo_list):
    return CLI(todo_list)


def output(capsys) -> str:
    return plain(capsys.readouterr().out)


def test_add_command(cli, todo_list, capsys):
    assert cli.run(["add", "Buy milk", "semi-skimmed", "LOW"]) == 0
    assert "Added task [1] Buy milk" in output(capsys)
    (task,) = todo_list.all()
    assert (task.description, task.priority) == ("semi-skimmed", "low")


def test_add_defaults_to_medium(cli, todo_list, capsys):
    cli.run(["add", "Call mum"])
    assert todo_list.all()[0].priority == "medium"
    assert todo_list.all()[0].description == ""


def test_add_without_title_prints_usage(cli, todo_list, capsys):
    assert cli.run(["add"]) == 0
    assert "Usage: todo add" in output(capsys)
    assert todo_list.all() == []


def test_add_with_bad_priority(cli, todo_list, capsys):
    assert cli.run(["add", "Task", "", "urgent"]) == 0
    assert "Invalid priority: urgent" in output(capsys)
    assert todo_list.all() == []


def test_list_command(cli, todo_list, capsys):
    todo_list.add("Ship release", priority="high")
    todo_list.add("Tidy desk", priority="low")
    cli.run(["LIST"])
    out = output(capsys)
    assert "HIGH priority:" in out
    assert "[2] Tidy desk" in out
    assert "Total: 2 | Completed: 0 | Pending: 2" in out


def test_list_filters(cli, todo_list, capsys):
    todo_list.add("Ship release", priority="high")
    todo_list.add("Tidy desk", priority="low")
    todo_list.toggle(1)
    cli.run(["list", "pending"])
    out = output(capsys)
    assert "Tidy desk" in out
    assert "Ship release" not in out
    cli.run(["list", "high"])
    assert "Ship release" in output(capsys)
    cli.run(["list", "someday"])
    assert "Usage: todo list" in output(capsys)


def test_list_empty(cli, capsys):
    cli.run(["list"])
    assert output(capsys).strip() == "No tasks yet."


def test_toggle_command(cli, todo_list, capsys):
    todo_list.add("Stretch")
    cli.run(["toggle", "1"])
    assert "Task [1] toggled." in output(capsys)
    assert todo_list.get(1).completed is True
    cli.run(["toggle", "5"])
    assert "Task [5] not found." in output(capsys)
    cli.run(["toggle", "abc"])
    assert "Invalid id." in output(capsys)
    cli.run(["toggle", "\u00b2"])
    assert "Invalid id." in output(capsys)
    cli.run(["delete", "\u00b2"])
    assert "Invalid id." in output(capsys)
    cli.run(["update", "\u00b2", "title=x"])
    assert "Invalid id." in output(capsys)
    cli.run(["toggle"])
    assert "Usage: todo toggle <id>" in output(capsys)


def test_delete_command(cli, todo_list, capsys):
    todo_list.add("Old task")
    cli.run(["delete", "1"])
    assert "Task [1] deleted." in output(capsys)
    assert todo_list.all() == []
    cli.run(["delete", "1"])
    assert "Task [1] not found." in output(capsys)


def test_update_command(cli, todo_list, capsys):
    todo_list.add("Draft", "first pass")
    cli.run(["update", "1", "title=Final draft", "priority=High"])
    assert "Task [1] updated." in output(capsys)
    task = todo_list.get(1)
    assert (task.title, task.description, task.priority) == ("Final draft", "first pass", "high")
    cli.run(["update", "1", "colour=red"])
    assert "Usage: todo update" in output(capsys)
    cli.run(["update", "1", "priority=soon"])
    assert "Invalid priority: soon" in output(capsys)
    cli.run(["update", "3", "title=x"])
    assert "Task [3] not found." in output(capsys)


def test_unknown_command(cli, capsys):
    assert cli.run(["frobnicate"]) == 0
    assert "Available commands: add, list, toggle, delete, update, help" in output(capsys)


def test_help(cli, capsys):
    cli.run(["help"])
    assert "Commands:" in output(capsys)


def test_demo_without_arguments(cli, todo_list, capsys):
    assert cli.run([]) == 0
    out = output(capsys)
    assert "=== TODO LIST DEMO ===" in out
    assert "Marking task [2] as done" in out
    assert [t.priority for t in todo_list.all()] == ["high", "medium", "low"]
    assert [t.completed for t in todo_list.all()] == [False, True, False]


def test_main_uses_todo_file_env(tmp_path, monkeypatch, capsys):
    path = tmp_path / "env-todos.json"
    monkeypatch.setenv("TODO_FILE", str(path))
    assert main(["add", "From env", "", "high"]) == 0
    assert "Added task [1] From env" in output(capsys)
    data = json.loads(path.read_text(encoding='utf-8'))
    assert data['tasks'][0]['title'] == "From env"
    assert [t.title for t in TodoList(path).all()] == ["From env"]


def test_list_done_with_no_completed_tasks(cli, todo_list, capsys):
    todo_list.add("Open item")
    cli.run(["list", "done"])
    out = output(capsys)
    assert "No matching tasks." in out
    assert "Total: 1 | Completed: 0 | Pending: 1" in out
