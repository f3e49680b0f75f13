"""Tests for command execution."""

from datetime import date, datetime

import pytest

from fakes import FakeStorage
from taskpal.commands import (
    AddCommand,
    DeleteCommand,
    DoneCommand,
    DueCommand,
    ExitCommand,
    FindCommand,
    ListCommand,
    PrioritisedCommand,
    TaggedCommand,
)
from taskpal.errors import CommandError, StorageError
from taskpal.task_list import TaskList
from taskpal.todo import Priority, Task, TaskType


@pytest.fixture
def task_list():
    return TaskList([
        Task.todo("read book", tags=["fun"]),
        Task.deadline("submit report", datetime(2020, 8, 26, 23, 59), priority=Priority.HIGH),
        Task.event("team dinner", datetime(2020, 8, 28, 19, 30), tags=["work", "fun"]),
    ])


class TestQueryCommands:
    """Test commands that only read the list."""

    def test_list(self, task_list, fake_storage):
        response = ListCommand().execute(task_list, fake_storage)

        assert response.message == (
            "Here are the tasks in your list:\n"
            "1.[T][✗] read book #fun\n"
            "2.[D][✗] submit report !HIGH (by: 26 Aug 2020, 11:59 PM)\n"
            "3.[E][✗] team dinner #work #fun (at: 28 Aug 2020, 7:30 PM)"
        )
        assert fake_storage.saves == []

    def test_list_empty(self, fake_storage):
        with pytest.raises(CommandError) as exc_info:
            ListCommand().execute(TaskList(), fake_storage)

        assert exc_info.value.message == "There are no tasks in your list."

    def test_due_keeps_list_numbers(self, task_list, fake_storage):
        response = DueCommand(date(2020, 8, 28)).execute(task_list, fake_storage)

        assert response.message == (
            "Here are the tasks due on 28 Aug 2020:\n"
            "3.[E][✗] team dinner #work #fun (at: 28 Aug 2020, 7:30 PM)"
        )

    def test_due_none(self, task_list, fake_storage):
        with pytest.raises(CommandError, match="no tasks due on 1 Jan 2021"):
            DueCommand(date(2021, 1, 1)).execute(task_list, fake_storage)

    def test_find(self, task_list, fake_storage):
        response = FindCommand("report").execute(task_list, fake_storage)

        assert response.message.splitlines()[1].startswith("2.[D]")

    def test_find_is_case_sensitive(self, task_list, fake_storage):
        with pytest.raises(CommandError, match='no tasks matching "Report"'):
            FindCommand("Report").execute(task_list, fake_storage)

    def test_prioritised(self, task_list, fake_storage):
        response = PrioritisedCommand(Priority.NONE).execute(task_list, fake_storage)
        lines = response.message.splitlines()

        assert lines[0] == "Here are the tasks with NONE priority:"
        assert [line.split(".")[0] for line in lines[1:]] == ["1", "3"]

    def test_prioritised_none_found(self, task_list, fake_storage):
        with pytest.raises(CommandError, match="no tasks with LOW priority"):
            PrioritisedCommand(Priority.LOW).execute(task_list, fake_storage)

    def test_tagged(self, task_list, fake_storage):
        response = TaggedCommand(["work", "missing"]).execute(task_list, fake_storage)

        assert response.message.splitlines() == [
            "Here are the tasks tagged with #work #missing:",
            "3.[E][✗] team dinner #work #fun (at: 28 Aug 2020, 7:30 PM)",
        ]

    def test_tagged_none_found(self, task_list, fake_storage):
        with pytest.raises(CommandError, match="no tasks tagged with #home"):
            TaggedCommand(["home"]).execute(task_list, fake_storage)

    def test_exit(self, task_list, fake_storage):
        response = ExitCommand().execute(task_list, fake_storage)

        assert response.is_exit
        assert fake_storage.saves == []


class TestMutatingCommands:
    """Test commands that change and persist the list."""

    def test_add_todo(self, fake_storage):
        task_list = TaskList()
        response = AddCommand(TaskType.TODO, "read book", None, Priority.HIGH, ["fun"]).execute(
            task_list, fake_storage
        )

        assert response.message == (
            "Got it. I've added this task:\n"
            "  [T][✗] read book #fun !HIGH\n"
            "Now you have 1 task in the list."
        )
        assert fake_storage.saves == [["[T][✗] read book #fun !HIGH"]]

    def test_add_persists_whole_list(self, task_list, fake_storage):
        response = AddCommand(TaskType.EVENT, "party", datetime(2020, 9, 1, 20, 0)).execute(
            task_list, fake_storage
        )

        assert response.message.endswith("Now you have 4 tasks in the list.")
        assert len(fake_storage.saves) == 1
        assert len(fake_storage.saves[0]) == 4
        assert task_list.tasks[-1] == Task.event("party", datetime(2020, 9, 1, 20, 0))

    def test_add_invalid_task_changes_nothing(self, task_list, fake_storage):
        with pytest.raises(CommandError):
            AddCommand(TaskType.DEADLINE, "no date").execute(task_list, fake_storage)

        assert len(task_list) == 3
        assert fake_storage.saves == []

    def test_done(self, task_list, fake_storage):
        response = DoneCommand(1).execute(task_list, fake_storage)

        assert response.message == "Nice! I've marked this task as done:\n  [T][✓] read book #fun"
        assert fake_storage.saves[0][0] == "[T][✓] read book #fun"

    @pytest.mark.parametrize("command", [DoneCommand(0), DoneCommand(4), DeleteCommand(0), DeleteCommand(4)])
    def test_out_of_range_changes_nothing(self, task_list, fake_storage, command):
        before = [str(task) for task in task_list]

        with pytest.raises(CommandError, match="not found"):
            command.execute(task_list, fake_storage)

        assert [str(task) for task in task_list] == before
        assert fake_storage.saves == []

    def test_delete_middle(self, task_list, fake_storage):
        first, _, third = task_list.tasks

        response = DeleteCommand(2).execute(task_list, fake_storage)

        assert list(task_list) == [first, third]
        assert response.message == (
            "Noted. I've removed this task:\n"
            "  [D][✗] submit report !HIGH (by: 26 Aug 2020, 11:59 PM)\n"
            "Now you have 2 tasks in the list."
        )
        assert fake_storage.saves == [[str(first), str(third)]]

    def test_delete_pluralization(self, fake_storage):
        task_list = TaskList([Task.todo("a"), Task.todo("b")])

        assert DeleteCommand(1).execute(task_list, fake_storage).message.endswith("1 task in the list.")
        assert DeleteCommand(1).execute(task_list, fake_storage).message.endswith("0 tasks in the list.")

    def test_save_failure_keeps_in_memory_change(self, task_list):
        storage = FakeStorage(fail_on_save=True)

        with pytest.raises(StorageError):
            DoneCommand(2).execute(task_list, storage)

        assert task_list.tasks[1].done
