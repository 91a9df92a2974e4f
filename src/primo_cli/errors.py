"""Exception hierarchy for the Primo assistant.

Every failure the parser or a command can produce is a ``PrimoError``
subclass. The interactive loop catches the base class, shows ``message``
(plus any suggestions) and keeps going.
"""

from typing import List, Optional


class PrimoError(Exception):
    """Base exception for all recoverable assistant errors."""

    kind = "error"

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)


class UnknownCommandError(PrimoError):
    """The first word of the input is not a known command."""

    kind = "unknown_command"


class MissingArgumentError(PrimoError):
    """A command that needs a parameter was given none."""

    kind = "missing_argument"


class NonNumericIndexError(PrimoError):
    """An index parameter is not an integer."""

    kind = "non_numeric_index"


class IndexOutOfRangeError(PrimoError):
    """An index does not address a task in the current list."""

    kind = "index_out_of_range"

    def __init__(self, message: str, index: int, size: int,
                 suggestions: Optional[List[str]] = None):
        self.index = index
        self.size = size
        super().__init__(message, suggestions)


class EmptyDescriptionError(PrimoError):
    """A task description is empty after trimming."""

    kind = "empty_description"


class MissingMarkerError(PrimoError):
    """A required ``/by``, ``/from`` or ``/to`` marker is absent."""

    kind = "missing_marker"


class EmptyFieldError(PrimoError):
    """A date field that follows a marker is empty."""

    kind = "empty_field"

    def __init__(self, message: str, field_name: str,
                 suggestions: Optional[List[str]] = None):
        self.field_name = field_name
        super().__init__(message, suggestions)


class InvalidDateFormatError(PrimoError):
    """A date field is not a valid ``YYYY-MM-DD`` calendar date."""

    kind = "invalid_date_format"

    def __init__(self, message: str, field_name: str, value: str,
                 suggestions: Optional[List[str]] = None):
        self.field_name = field_name
        self.value = value
        super().__init__(message, suggestions)


class StorageError(PrimoError):
    """The task file could not be written."""

    kind = "storage"
