"""In-memory task list for a Taskpal session."""

from datetime import date
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import CommandError
from .todo import Priority, Task


class TaskList:
    """Ordered collection of tasks addressed by 1-based position.

    The list owns its tasks for the whole session. If commands ever run
    concurrently, every operation here needs to sit behind one lock.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Read-only view of the tasks in order."""
        return tuple(self._tasks)

    def numbered(self) -> List[Tuple[int, Task]]:
        return list(enumerate(self._tasks, start=1))

    def add_task(self, task: Task):
        self._tasks.append(task)

    def get_task(self, index: int) -> Task:
        """Return the task at a 1-based index.

        Raises:
            CommandError: If no task has that number
        """
        if not 1 <= index <= len(self._tasks):
            raise CommandError(f"Task {index} not found. You have {len(self._tasks)} task(s) in your list.")
        return self._tasks[index - 1]

    def mark_done(self, index: int) -> Task:
        task = self.get_task(index)
        task.mark_done()
        return task

    def delete_task(self, index: int) -> Task:
        """Remove and return the task at a 1-based index."""
        task = self.get_task(index)
        del self._tasks[index - 1]
        return task

    def find_by_keyword(self, keyword: str) -> List[Task]:
        return [task for task in self._tasks if task.matches(keyword)]

    def filter_by_due_date(self, on: date) -> List[Task]:
        return [task for task in self._tasks if task.is_due(on)]

    def filter_by_priority(self, priority: Priority) -> List[Task]:
        return [task for task in self._tasks if task.priority is priority]

    def filter_by_tag(self, tags: Iterable[str]) -> List[Task]:
        wanted = set(tags)
        return [task for task in self._tasks if task.has_any_tag(wanted)]
