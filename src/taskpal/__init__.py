"""Taskpal - a personal task assistant driven by short textual commands."""

__version__ = "0.1.0"

from .errors import TaskpalError, CommandError, StorageError
from .todo import Task, TaskType, Priority
from .task_list import TaskList
from .commands import Command, Response
from .parser import CommandParser, parse

__all__ = [
    "Task",
    "TaskType",
    "Priority",
    "TaskList",
    "Command",
    "Response",
    "CommandParser",
    "parse",
    "TaskpalError",
    "CommandError",
    "StorageError",
    "__version__",
]
