"""Command line parser for Taskpal.

Turns one line of user input into an executable :class:`~taskpal.commands.Command`.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Callable, List, Optional

from fuzzywuzzy import process

from .commands import (
    AddCommand,
    Command,
    DeleteCommand,
    DoneCommand,
    DueCommand,
    ExitCommand,
    FindCommand,
    ListCommand,
    PrioritisedCommand,
    TaggedCommand,
)
from .errors import CommandError
from .todo import Priority, TaskType
from .utils.datetime import century_of, today as local_today


logger = logging.getLogger(__name__)

UNKNOWN_COMMAND = "I don't understand that command."

DATE_ERROR = (
    "Unable to parse date.\n \n"
    "Please input your date in one of the following formats:\n"
    "26/08\n26/08/20\n26/08/2020"
)

TIME_ERROR = (
    "Unable to parse time.\n \n"
    "Please input your time in one of the following formats:\n"
    "1:19\n1:19 AM"
)

# Minimum fuzzy score before an unknown keyword gets a suggestion
SUGGESTION_CUTOFF = 75

_INDEX_RE = re.compile(r"[0-9]+")


@dataclass
class Argument:
    """Description, priority and tags extracted from an add command."""
    description: str
    priority: Priority = Priority.NONE
    tags: List[str] = field(default_factory=list)


class DateTimeParser:
    """Parses the day-first dates and clock times users type."""

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self.today = today or local_today
        self.patterns = {
            'date': re.compile(r'^([0-9]{1,2})/([0-9]{1,2})(?:/([0-9]{4}|[0-9]{2}))?$'),
            'time_24h': re.compile(r'^([0-9]{1,2}):([0-9]{1,2})$'),
            'time_12h': re.compile(r'^([0-9]{1,2}):([0-9]{1,2}) ([AaPp][Mm])$'),
        }

    def parse_date(self, text: str) -> date:
        """Parse ``d/M``, ``d/M/yy`` or ``d/M/yyyy``.

        A missing year means the current year; a two-digit year is taken to be
        in the current century.
        """
        match = self.patterns['date'].match(text.strip())
        if not match:
            raise CommandError(DATE_ERROR)

        day, month, year_text = match.groups()
        current_year = self.today().year
        if year_text is None:
            year = current_year
        elif len(year_text) == 2:
            year = century_of(current_year) + int(year_text)
        else:
            year = int(year_text)

        try:
            return date(year, int(month), int(day))
        except ValueError:
            raise CommandError(DATE_ERROR) from None

    def parse_time(self, text: str) -> time:
        """Parse ``H:m`` or, when the text has a meridiem, ``h:m a``.

        Blank text means midnight.
        """
        if not text.strip():
            return time(0, 0)

        if " " in text:
            match = self.patterns['time_12h'].match(text)
            if not match:
                raise CommandError(TIME_ERROR)
            hour, minute, meridiem = int(match.group(1)), int(match.group(2)), match.group(3).upper()
            if not 1 <= hour <= 12:
                raise CommandError(TIME_ERROR)
            hour = hour % 12 + (12 if meridiem == "PM" else 0)
        else:
            match = self.patterns['time_24h'].match(text)
            if not match:
                raise CommandError(TIME_ERROR)
            hour, minute = int(match.group(1)), int(match.group(2))

        try:
            return time(hour, minute)
        except ValueError:
            raise CommandError(TIME_ERROR) from None

    def parse_datetime(self, text: str) -> datetime:
        """Parse a date token followed by optional time tokens."""
        tokens = text.split()
        date_text = tokens[0] if tokens else ""
        time_text = " ".join(tokens[1:])
        return datetime.combine(self.parse_date(date_text), self.parse_time(time_text))


class CommandParser:
    """Parses input lines into commands."""

    def __init__(self, date_parser: Optional[DateTimeParser] = None):
        self.date_parser = date_parser or DateTimeParser()
        self.handlers = {
            "bye": self._parse_bye,
            "list": self._parse_list,
            "due": self._parse_due,
            "find": self._parse_find,
            "prioritised": self._parse_prioritised,
            "tagged": self._parse_tagged,
            "done": self._parse_done,
            "delete": self._parse_delete,
            "todo": self._parse_todo,
            "deadline": self._parse_deadline,
            "event": self._parse_event,
        }

    def parse(self, line: str) -> Command:
        """Parse a full input line.

        Raises:
            CommandError: If the line is not a valid command
        """
        tokens = line.split()
        keyword = tokens[0] if tokens else ""
        args = " ".join(tokens[1:])

        handler = self.handlers.get(keyword)
        if handler is None:
            logger.debug(f"Unknown command keyword: {keyword!r}")
            raise CommandError(self._unknown_command_message(keyword))

        return handler(args)

    def parse_add_arguments(self, args: str) -> Argument:
        """Split add-command arguments into description, priority and tags.

        ``#word`` tokens are tags, a single ``!word`` token is the priority and
        everything else, in order, is the description.
        """
        tokens = args.split()
        tags = [token[1:] for token in tokens if token.startswith("#") and len(token) > 1]
        priorities = [token[1:] for token in tokens if token.startswith("!")]
        description = " ".join(token for token in tokens if not token.startswith(("#", "!")))

        if len(priorities) > 1:
            raise CommandError("Please specify only one task priority!")

        for tag in tags:
            if "," in tag or "|" in tag:
                raise CommandError("Tags cannot contain commas or pipes.")

        priority = Priority.from_text(priorities[0]) if priorities else Priority.NONE
        return Argument(description=description, priority=priority, tags=tags)

    def _unknown_command_message(self, keyword: str) -> str:
        if not keyword:
            return UNKNOWN_COMMAND

        best = process.extractOne(keyword, list(self.handlers), score_cutoff=SUGGESTION_CUTOFF)
        if best:
            return f"{UNKNOWN_COMMAND} Did you mean '{best[0]}'?"
        return UNKNOWN_COMMAND

    def _parse_bye(self, args: str) -> Command:
        if args.strip():
            raise CommandError(UNKNOWN_COMMAND)
        return ExitCommand()

    def _parse_list(self, args: str) -> Command:
        if args.strip():
            raise CommandError(UNKNOWN_COMMAND)
        return ListCommand()

    def _parse_due(self, args: str) -> Command:
        if not args.strip():
            raise CommandError("Date required for the due command.")
        return DueCommand(self.date_parser.parse_date(args))

    def _parse_find(self, args: str) -> Command:
        if not args.strip():
            raise CommandError("Keyword cannot be blank.")
        return FindCommand(args)

    def _parse_prioritised(self, args: str) -> Command:
        return PrioritisedCommand(Priority.from_text(args))

    def _parse_tagged(self, args: str) -> Command:
        return TaggedCommand(args.split())

    def _parse_done(self, args: str) -> Command:
        return DoneCommand(self._parse_index("done", args))

    def _parse_delete(self, args: str) -> Command:
        return DeleteCommand(self._parse_index("delete", args))

    def _parse_index(self, keyword: str, args: str) -> int:
        if not args.strip():
            raise CommandError(f"Task number required for the {keyword} command.")
        if not _INDEX_RE.fullmatch(args):
            raise CommandError(f"Only positive integers allowed for the {keyword} command.")
        return int(args)

    def _parse_todo(self, args: str) -> Command:
        argument = self.parse_add_arguments(args)
        self._require_description(TaskType.TODO, argument.description)
        return AddCommand(TaskType.TODO, argument.description, None, argument.priority, argument.tags)

    def _parse_deadline(self, args: str) -> Command:
        return self._parse_timed(TaskType.DEADLINE, args)

    def _parse_event(self, args: str) -> Command:
        return self._parse_timed(TaskType.EVENT, args)

    def _parse_timed(self, task_type: TaskType, args: str) -> Command:
        argument = self.parse_add_arguments(args)
        parts = argument.description.split(f" /{task_type.time_label} ")
        description = parts[0]
        self._require_description(task_type, description)

        when = self.date_parser.parse_datetime(" ".join(parts[1:]))
        return AddCommand(task_type, description, when, argument.priority, argument.tags)

    @staticmethod
    def _require_description(task_type: TaskType, description: str):
        if not description.strip():
            raise CommandError(f"The description of a {task_type.label} cannot be empty.")


_default_parser: Optional[CommandParser] = None


def parse(line: str) -> Command:
    """Parse a line with a shared default parser."""
    global _default_parser
    if _default_parser is None:
        _default_parser = CommandParser()
    return _default_parser.parse(line)
