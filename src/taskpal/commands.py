"""Executable commands for Taskpal.

Every command runs against the session's :class:`~taskpal.task_list.TaskList`
and a storage object exposing ``save(tasks)``. Mutating commands persist the
whole list before returning.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from .errors import CommandError
from .task_list import TaskList
from .todo import Priority, Task, TaskType
from .utils.datetime import format_date


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Response:
    """Text returned to the presentation layer after a command succeeds."""
    message: str
    is_exit: bool = False

    def __str__(self) -> str:
        return self.message


def _pluralize_tasks(count: int) -> str:
    return f"{count} task" if count == 1 else f"{count} tasks"


def _render_numbered(header: str, numbered: Sequence[Tuple[int, Task]]) -> str:
    lines = [header]
    lines.extend(f"{number}.{task}" for number, task in numbered)
    return "\n".join(lines)


class Command(ABC):
    """A parsed, executable user instruction."""

    @abstractmethod
    def execute(self, task_list: TaskList, storage) -> Response:
        """Run the command.

        Raises:
            CommandError: If the command cannot be carried out
            StorageError: If the task list could not be saved
        """


@dataclass(frozen=True)
class ExitCommand(Command):
    def execute(self, task_list: TaskList, storage) -> Response:
        return Response("Bye. Hope to see you again soon!", is_exit=True)


@dataclass(frozen=True)
class ListCommand(Command):
    def execute(self, task_list: TaskList, storage) -> Response:
        if not task_list:
            raise CommandError("There are no tasks in your list.")
        return Response(_render_numbered("Here are the tasks in your list:", task_list.numbered()))


class FilterCommand(Command):
    """Base for commands that show a subset of the list.

    Matches are numbered by their position in the full list.
    """

    header = "Here are the matching tasks in your list:"

    @abstractmethod
    def select(self, task_list: TaskList) -> List[Task]:
        """Return the matching tasks."""

    @abstractmethod
    def empty_message(self) -> str:
        """Message for the error raised when nothing matches."""

    def execute(self, task_list: TaskList, storage) -> Response:
        matches = self.select(task_list)
        if not matches:
            raise CommandError(self.empty_message())

        wanted = {id(task) for task in matches}
        numbered = [(number, task) for number, task in task_list.numbered() if id(task) in wanted]
        return Response(_render_numbered(self.header, numbered))


@dataclass(frozen=True)
class DueCommand(FilterCommand):
    date: date

    @property
    def header(self) -> str:
        return f"Here are the tasks due on {format_date(self.date)}:"

    def select(self, task_list: TaskList) -> List[Task]:
        return task_list.filter_by_due_date(self.date)

    def empty_message(self) -> str:
        return f"There are no tasks due on {format_date(self.date)}."


@dataclass(frozen=True)
class FindCommand(FilterCommand):
    keyword: str

    def select(self, task_list: TaskList) -> List[Task]:
        return task_list.find_by_keyword(self.keyword)

    def empty_message(self) -> str:
        return f'There are no tasks matching "{self.keyword}".'


@dataclass(frozen=True)
class PrioritisedCommand(FilterCommand):
    priority: Priority

    @property
    def header(self) -> str:
        return f"Here are the tasks with {self.priority.value} priority:"

    def select(self, task_list: TaskList) -> List[Task]:
        return task_list.filter_by_priority(self.priority)

    def empty_message(self) -> str:
        return f"There are no tasks with {self.priority.value} priority."


@dataclass(frozen=True)
class TaggedCommand(FilterCommand):
    tags: List[str] = field(default_factory=list)

    @property
    def header(self) -> str:
        return f"Here are the tasks tagged with {self._tag_text()}:"

    def select(self, task_list: TaskList) -> List[Task]:
        return task_list.filter_by_tag(self.tags)

    def empty_message(self) -> str:
        if not self.tags:
            return "Please specify at least one tag."
        return f"There are no tasks tagged with {self._tag_text()}."

    def _tag_text(self) -> str:
        return " ".join("#" + tag for tag in self.tags)


@dataclass(frozen=True)
class DoneCommand(Command):
    index: int

    def execute(self, task_list: TaskList, storage) -> Response:
        task = task_list.mark_done(self.index)
        logger.info(f"Marked task {self.index} as done")
        storage.save(task_list.tasks)
        return Response(f"Nice! I've marked this task as done:\n  {task}")


@dataclass(frozen=True)
class DeleteCommand(Command):
    index: int

    def execute(self, task_list: TaskList, storage) -> Response:
        task = task_list.delete_task(self.index)
        logger.info(f"Deleted task {self.index}")
        storage.save(task_list.tasks)
        return Response(
            f"Noted. I've removed this task:\n  {task}\n"
            f"Now you have {_pluralize_tasks(len(task_list))} in the list."
        )


@dataclass(frozen=True)
class AddCommand(Command):
    type: TaskType
    description: str
    when: Optional[datetime] = None
    priority: Priority = Priority.NONE
    tags: List[str] = field(default_factory=list)

    def execute(self, task_list: TaskList, storage) -> Response:
        task = Task(
            type=self.type,
            description=self.description,
            when=self.when,
            priority=self.priority,
            tags=list(self.tags),
        )
        task_list.add_task(task)
        logger.info(f"Added {self.type.label}: {self.description}")
        storage.save(task_list.tasks)
        return Response(
            f"Got it. I've added this task:\n  {task}\n"
            f"Now you have {_pluralize_tasks(len(task_list))} in the list."
        )
