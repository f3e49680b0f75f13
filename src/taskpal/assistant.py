"""Session wiring and the read-parse-execute loop."""

import logging
from typing import Optional

from .commands import Response
from .config import ConfigModel
from .errors import TaskpalError
from .parser import CommandParser
from .storage import Storage
from .task_list import TaskList
from .ui import Ui, format_error


logger = logging.getLogger(__name__)


class Assistant:
    """One Taskpal session over a single task file."""

    def __init__(
        self,
        config: ConfigModel,
        storage: Optional[Storage] = None,
        parser: Optional[CommandParser] = None,
        ui: Optional[Ui] = None,
    ):
        self.config = config
        self.storage = storage or Storage(config)
        self.parser = parser or CommandParser()
        self.ui = ui or Ui(config)
        self.task_list: Optional[TaskList] = None

    def start(self) -> TaskList:
        """Load the task list.

        Raises:
            StorageError: If the task file cannot be loaded
        """
        if self.config.backup_on_start:
            self.storage.backup()
        self.task_list = TaskList(self.storage.load())
        logger.info(f"Session started with {len(self.task_list)} task(s)")
        return self.task_list

    def handle(self, line: str) -> Response:
        """Parse and execute one line.

        Raises:
            CommandError: If the line is invalid or the command fails
            StorageError: If a change could not be saved
        """
        if self.task_list is None:
            self.start()

        try:
            command = self.parser.parse(line)
        except TaskpalError as e:
            logger.debug(f"Could not parse {line!r}: {e}")
            raise

        return command.execute(self.task_list, self.storage)

    def get_response(self, line: str) -> str:
        """Text reply for one line, with errors rendered inline."""
        try:
            return self.handle(line).message
        except TaskpalError as e:
            return format_error(e)

    def run(self):
        """Interactive loop until ``bye`` or end of input."""
        if self.task_list is None:
            self.start()

        self.ui.show_welcome()
        while True:
            try:
                line = self.ui.read_command()
            except (EOFError, KeyboardInterrupt):
                logger.info("Input closed, ending session")
                break

            if not line.strip():
                continue

            try:
                response = self.handle(line)
            except TaskpalError as e:
                self.ui.show_error(e)
                continue

            self.ui.show_response(response)
            if response.is_exit:
                break
