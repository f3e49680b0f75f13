"""Task data model for Taskpal."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional

from .errors import CommandError
from .utils.datetime import format_datetime


PRIORITY_ERROR = "Task priority not recognised. Please use one of NONE, LOW, MEDIUM or HIGH."

_TAG_FORBIDDEN_RE = re.compile(r"[\s,|]")


class Priority(Enum):
    """Task priority levels."""
    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def from_text(cls, text: str) -> "Priority":
        """Look up a priority by name, ignoring case."""
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise CommandError(PRIORITY_ERROR) from None


class TaskType(Enum):
    """Task variants. The value is the type code used in the task file."""
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def time_label(self) -> Optional[str]:
        """Label shown before the task time, or None for variants without one."""
        return {TaskType.DEADLINE: "by", TaskType.EVENT: "at"}.get(self)


@dataclass
class Task:
    """A unit of tracked work.

    ``when`` holds the deadline (``by``) of a Deadline or the time (``at``) of
    an Event and is always None for a Todo.
    """

    type: TaskType
    description: str
    when: Optional[datetime] = None

    # Metadata
    priority: Priority = Priority.NONE
    tags: List[str] = field(default_factory=list)

    # Status
    done: bool = False

    def __post_init__(self):
        """Validate the task."""
        if not self.description or not self.description.strip():
            raise CommandError(f"The description of a {self.type.label} cannot be empty.")

        if self.type is TaskType.TODO and self.when is not None:
            raise CommandError("A todo cannot have a date.")
        if self.type is not TaskType.TODO and self.when is None:
            raise CommandError(f"A date is required for a {self.type.label}.")

        self.tags = list(self.tags)
        for tag in self.tags:
            if not tag or _TAG_FORBIDDEN_RE.search(tag):
                raise CommandError(f"Invalid tag '{tag}'. Tags cannot be empty or contain commas, pipes or spaces.")

    @classmethod
    def todo(cls, description: str, **kwargs) -> "Task":
        return cls(TaskType.TODO, description, **kwargs)

    @classmethod
    def deadline(cls, description: str, by: datetime, **kwargs) -> "Task":
        return cls(TaskType.DEADLINE, description, by, **kwargs)

    @classmethod
    def event(cls, description: str, at: datetime, **kwargs) -> "Task":
        return cls(TaskType.EVENT, description, at, **kwargs)

    @property
    def by(self) -> Optional[datetime]:
        return self.when if self.type is TaskType.DEADLINE else None

    @property
    def at(self) -> Optional[datetime]:
        return self.when if self.type is TaskType.EVENT else None

    def mark_done(self):
        """Mark the task as done."""
        self.done = True

    def is_due(self, on: date) -> bool:
        """Check if the task falls on the given date. A todo is never due."""
        if self.when is None:
            return False
        return self.when.date() == on

    def matches(self, keyword: str) -> bool:
        """Case-sensitive substring match on the description."""
        return keyword in self.description

    def has_any_tag(self, tags: Iterable[str]) -> bool:
        """Check if the task carries at least one of the given tags."""
        return not set(self.tags).isdisjoint(tags)

    def __str__(self) -> str:
        status_icon = "✓" if self.done else "✗"
        parts = [f"[{self.type.value}][{status_icon}] {self.description}"]

        if self.tags:
            parts.append(" ".join("#" + tag for tag in self.tags))

        if self.priority is not Priority.NONE:
            parts.append(f"!{self.priority.value}")

        if self.when is not None:
            parts.append(f"({self.type.time_label}: {format_datetime(self.when)})")

        return " ".join(parts)
