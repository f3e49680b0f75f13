"""Error types for Taskpal."""


class TaskpalError(Exception):
    """Base error carrying a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class CommandError(TaskpalError):
    """Raised when a command cannot be parsed or executed."""


class StorageError(TaskpalError):
    """Raised when the task file cannot be read or written."""
