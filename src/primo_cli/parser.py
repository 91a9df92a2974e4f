"""Command parser for the Primo assistant.

Turns one line of user text into a validated ``Command`` or raises a
``PrimoError`` subclass describing exactly what was wrong. The parser is
stateless: every call is independent of the previous ones.

Field syntax uses literal markers::

    todo <description> [/n <note>]
    deadline <description> /by YYYY-MM-DD [/n <note>]
    event <description> /from YYYY-MM-DD /to YYYY-MM-DD [/n <note>]

Markers are located by their first occurrence and are not escaped, so a
description or note that itself contains ``/by``, ``/from``, ``/to`` or
``/n`` is split at that point.
"""

import logging
import re
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Sequence

from fuzzywuzzy import fuzz, process

from .commands import (
    ByeCommand,
    Command,
    DeadlineCommand,
    DeleteCommand,
    EventCommand,
    FindCommand,
    ListCommand,
    MarkCommand,
    TodoCommand,
    UnmarkCommand,
)
from .errors import (
    EmptyDescriptionError,
    EmptyFieldError,
    InvalidDateFormatError,
    MissingArgumentError,
    MissingMarkerError,
    NonNumericIndexError,
    UnknownCommandError,
)
from .task import Task
from .utils.datetime import parse_iso_date

logger = logging.getLogger(__name__)

NOTE_MARKER = "/n"
BY_MARKER = "/by"
FROM_MARKER = "/from"
TO_MARKER = "/to"

INDEX_RE = re.compile(r"[+-]?[0-9]+")

NOTE_TIP = "TIP: Try adding /n <note> at the back of command!"


class CommandType(Enum):
    """Command words understood by the assistant."""
    BYE = "bye"
    LIST = "list"
    MARK = "mark"
    UNMARK = "unmark"
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"
    DELETE = "delete"
    FIND = "find"

    @classmethod
    def words(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def from_word(cls, word: str) -> "CommandType":
        """Look up a command word, raising ``UnknownCommandError`` with hints."""
        for member in cls:
            if member.value == word:
                return member

        suggestions = []
        if word:
            close_matches = process.extractBests(word, cls.words(), scorer=fuzz.ratio,
                                                 score_cutoff=60, limit=2)
            if close_matches:
                suggestions.append(f"Did you mean '{close_matches[0][0]}'?")
        suggestions.append(NOTE_TIP)

        raise UnknownCommandError(
            f"Invalid command! (Expected Commands: {', '.join(cls.words())})",
            suggestions=suggestions,
        )


USAGE = {
    CommandType.MARK: "mark <integer>",
    CommandType.UNMARK: "unmark <integer>",
    CommandType.DELETE: "delete <integer>",
    CommandType.FIND: "find <string>",
    CommandType.TODO: "todo <string> [/n <note>]",
    CommandType.DEADLINE: "deadline <string> /by YYYY-MM-DD [/n <note>]",
    CommandType.EVENT: "event <string> /from YYYY-MM-DD /to YYYY-MM-DD [/n <note>]",
}


def split_fields(text: str, keyword: str, markers: Sequence[str] = ()) -> Dict[str, Optional[str]]:
    """Slice a command line into its raw, trimmed segments.

    ``description`` runs from just after ``keyword`` up to the first
    marker present. Each marker in ``markers`` that occurs in ``text`` gets
    the text between it and the next marker present. An optional ``/n``
    note always closes the line. Markers that are absent map to ``None``.

    Args:
        text: The full command line
        keyword: The command word, e.g. ``"deadline"``
        markers: Required/expected field markers in their written order

    Returns:
        Mapping of ``"description"``, each marker and ``"note"`` to its segment
    """
    start = text.find(keyword)
    body_start = start + len(keyword) if start >= 0 else len(text)

    positions = {}
    for marker in list(markers) + [NOTE_MARKER]:
        index = text.find(marker)
        if index >= 0:
            positions[marker] = index

    # Boundaries are visited in the order they appear in the line
    boundaries = sorted(positions.items(), key=lambda item: item[1])

    def segment(begin: int) -> str:
        ends = [index for _, index in boundaries if index >= begin]
        end = min(ends) if ends else len(text)
        return text[begin:end].strip()

    fields: Dict[str, Optional[str]] = {"description": segment(body_start)}
    for marker in markers:
        if marker in positions:
            fields[marker] = segment(positions[marker] + len(marker))
        else:
            fields[marker] = None

    if NOTE_MARKER in positions:
        fields["note"] = text[positions[NOTE_MARKER] + len(NOTE_MARKER):].strip() or None
    else:
        fields["note"] = None
    return fields


def parse_date(raw: str, field_name: str, usage: str) -> date:
    """Parse a ``YYYY-MM-DD`` field, raising ``InvalidDateFormatError`` otherwise."""
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise InvalidDateFormatError(
            f"'{raw}' is not a valid date in the form of YYYY-MM-DD",
            field_name=field_name,
            value=raw,
            suggestions=[f"Expected: {usage}"],
        )


class CommandParser:
    """Parses raw input lines into ``Command`` objects."""

    def parse(self, line: str) -> Command:
        text = (line or "").strip()
        words = text.split()
        command_type = CommandType.from_word(words[0] if words else "")
        logger.debug(f"Parsing {command_type.value} command: {text!r}")

        if command_type == CommandType.BYE:
            return ByeCommand()
        if command_type == CommandType.LIST:
            return ListCommand()
        if command_type == CommandType.MARK:
            return MarkCommand(self._parse_index(words, command_type))
        if command_type == CommandType.UNMARK:
            return UnmarkCommand(self._parse_index(words, command_type))
        if command_type == CommandType.DELETE:
            return DeleteCommand(self._parse_index(words, command_type))
        if command_type == CommandType.FIND:
            return FindCommand(self._parse_keyword(words))
        if command_type == CommandType.TODO:
            return TodoCommand(self._parse_todo(text))
        if command_type == CommandType.DEADLINE:
            return DeadlineCommand(self._parse_deadline(text))
        if command_type == CommandType.EVENT:
            return EventCommand(self._parse_event(text))
        raise AssertionError(f"Unhandled command type: {command_type}")

    def _parse_index(self, words: List[str], command_type: CommandType) -> int:
        """Read the 1-based index argument and return it 0-based."""
        usage = USAGE[command_type]
        if len(words) < 2:
            raise MissingArgumentError(f"Invalid parameters! Expected {usage}")
        if not INDEX_RE.fullmatch(words[1]):
            raise NonNumericIndexError(f"'{words[1]}' is not a number! Expected {usage}")
        number = int(words[1])
        # Range is checked against the list when the command runs
        return number - 1

    def _parse_keyword(self, words: List[str]) -> str:
        if len(words) < 2:
            raise MissingArgumentError(f"Invalid parameters! Expected {USAGE[CommandType.FIND]}")
        return words[1]

    def _require_description(self, fields: Dict[str, Optional[str]], usage: str) -> str:
        description = fields["description"]
        if not description:
            raise EmptyDescriptionError(f"Description cannot be empty! Expected: {usage}")
        return description

    def _require_date(self, fields: Dict[str, Optional[str]], marker: str,
                      label: str, usage: str) -> date:
        raw = fields[marker]
        field_name = marker.lstrip("/")
        if not raw:
            raise EmptyFieldError(f"'{label}' date cannot be empty! Expected: {usage}",
                                  field_name=field_name)
        return parse_date(raw, field_name, usage)

    def _parse_todo(self, text: str) -> Task:
        usage = USAGE[CommandType.TODO]
        fields = split_fields(text, CommandType.TODO.value)
        description = self._require_description(fields, usage)
        return Task.todo(description, note=fields["note"])

    def _parse_deadline(self, text: str) -> Task:
        usage = USAGE[CommandType.DEADLINE]
        if BY_MARKER not in text:
            raise MissingMarkerError(f"Invalid parameters! Expected: {usage}")

        fields = split_fields(text, CommandType.DEADLINE.value, [BY_MARKER])
        description = self._require_description(fields, usage)
        due = self._require_date(fields, BY_MARKER, "By", usage)
        return Task.deadline(description, due, note=fields["note"])

    def _parse_event(self, text: str) -> Task:
        usage = USAGE[CommandType.EVENT]
        if FROM_MARKER not in text or TO_MARKER not in text:
            raise MissingMarkerError(f"Both /from and /to are required! Expected: {usage}")

        fields = split_fields(text, CommandType.EVENT.value, [FROM_MARKER, TO_MARKER])
        description = self._require_description(fields, usage)
        start = self._require_date(fields, FROM_MARKER, "From", usage)
        end = self._require_date(fields, TO_MARKER, "To", usage)
        return Task.event(description, start, end, note=fields["note"])


_parser = CommandParser()


def parse_command(line: str) -> Command:
    """Parse one line of input using a shared stateless parser."""
    return _parser.parse(line)
