"""Storage layer for Taskpal: a text file with YAML frontmatter.

The body holds one pipe-delimited record per task::

    T | 0 | read book | HIGH | fun,school
    D | 1 | submit report | NONE |  | 2020-08-26T23:59:00
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Sequence, Tuple

import frontmatter
import yaml

from .config import ConfigModel
from .errors import CommandError, StorageError
from .todo import Priority, Task, TaskType
from .utils.datetime import from_iso_string, now, to_iso_string


logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
SEPARATOR = " | "
TAG_SEPARATOR = ","


class TaskLineFormat:
    """Handles conversion between Task objects and task file records."""

    @staticmethod
    def to_line(task: Task) -> str:
        """Convert a task to a single record."""
        fields = [
            task.type.value,
            "1" if task.done else "0",
            task.description,
            task.priority.value,
            TAG_SEPARATOR.join(task.tags),
        ]
        if task.when is not None:
            fields.append(to_iso_string(task.when))
        return SEPARATOR.join(fields)

    @staticmethod
    def from_line(line: str) -> Task:
        """Parse a record back into a task.

        Type and done flag are split from the left and the fixed trailing
        fields from the right, so the description may itself contain pipes.

        Raises:
            ValueError: If the record is malformed
        """
        head = line.split(SEPARATOR, 2)
        if len(head) != 3:
            raise ValueError("expected at least type, done flag and description")
        type_code, done_flag, rest = head

        try:
            task_type = TaskType(type_code)
        except ValueError:
            raise ValueError(f"unknown task type {type_code!r}") from None

        if done_flag not in ("0", "1"):
            raise ValueError(f"done flag must be 0 or 1, got {done_flag!r}")

        # Trailing fields never contain a pipe. They are stripped because the
        # frontmatter loader trims whitespace at the end of the file.
        trailing = 2 if task_type is TaskType.TODO else 3
        fields = rest.rsplit("|", trailing)
        if len(fields) != trailing + 1 or not fields[0].endswith(" "):
            raise ValueError(f"expected {trailing + 4} fields for a {task_type.label}")

        description = fields[0][:-1]
        priority_name, tag_text = fields[1].strip(), fields[2].strip()
        when = from_iso_string(fields[3].strip()) if task_type is not TaskType.TODO else None
        if task_type is not TaskType.TODO and when is None:
            raise ValueError(f"missing date for a {task_type.label}")

        try:
            priority = Priority[priority_name]
        except KeyError:
            raise ValueError(f"unknown priority {priority_name!r}") from None

        tags = tag_text.split(TAG_SEPARATOR) if tag_text else []

        try:
            return Task(
                type=task_type,
                description=description,
                when=when,
                priority=priority,
                tags=tags,
                done=done_flag == "1",
            )
        except CommandError as e:
            raise ValueError(e.message) from None


class TaskFileFormat:
    """Handles conversion between a task sequence and the whole file."""

    @staticmethod
    def dumps(tasks: Sequence[Task]) -> str:
        content = "\n".join(TaskLineFormat.to_line(task) for task in tasks)
        post = frontmatter.Post(
            content,
            format_version=FORMAT_VERSION,
            saved_at=to_iso_string(now()),
            task_count=len(tasks),
        )
        return frontmatter.dumps(post) + "\n"

    @staticmethod
    def loads(text: str) -> List[Task]:
        """Parse a task file.

        Raises:
            StorageError: If the header or any record is malformed
        """
        try:
            post = frontmatter.loads(text)
        except (yaml.YAMLError, ValueError, TypeError) as e:
            raise StorageError(f"Task file header is invalid: {e}") from e

        version = post.metadata.get("format_version", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            raise StorageError(f"Unsupported task file version: {version}")

        tasks = []
        for line_number, line in enumerate(post.content.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                tasks.append(TaskLineFormat.from_line(line))
            except ValueError as e:
                raise StorageError(f"Task file record {line_number} is invalid: {e}") from e
        return tasks


class Storage:
    """File-based storage for the task list."""

    def __init__(self, config: ConfigModel):
        self.config = config
        self.path = config.get_data_path()

    def _ensure_directories(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> List[Task]:
        """Load all tasks. A missing file is an empty list.

        Raises:
            StorageError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            logger.info(f"No task file at {self.path}, starting with an empty list")
            return []

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error loading tasks from {self.path}: {e}")
            raise StorageError(f"Unable to read tasks from {self.path}: {e}") from e

        tasks = TaskFileFormat.loads(text)
        logger.debug(f"Loaded {len(tasks)} task(s) from {self.path}")
        return tasks

    def save(self, tasks: Sequence[Task]):
        """Replace the file with the given tasks.

        Raises:
            StorageError: If the file cannot be written
        """
        content = TaskFileFormat.dumps(tasks)

        try:
            self._ensure_directories()
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".tasks-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Error saving tasks to {self.path}: {e}")
            raise StorageError(f"Unable to save tasks to {self.path}: {e}") from e

        logger.debug(f"Saved {len(tasks)} task(s) to {self.path}")

    def backup(self) -> Tuple[bool, Path]:
        """Copy the task file into a timestamped backup directory.

        Returns:
            Whether a copy was made, and the backup file path
        """
        timestamp = now().strftime("%Y-%m-%d_%H-%M-%S")
        backup_path = self.config.get_backup_path(timestamp) / self.path.name

        if not self.path.exists():
            return False, backup_path

        try:
            backup_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(self.path, backup_path)
        except OSError as e:
            logger.error(f"Error backing up {self.path}: {e}")
            raise StorageError(f"Unable to back up tasks to {backup_path}: {e}") from e

        logger.info(f"Backed up tasks to {backup_path}")
        return True, backup_path
