"""Task data model for the Primo assistant."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

from .utils.datetime import format_date, parse_iso_date, today


class TaskKind(Enum):
    """Task variants, valued by the symbol shown in ``[T]``/``[D]``/``[E]``."""
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


@dataclass
class Task:
    """A todo, deadline or event.

    All kinds share ``description``, ``done`` and ``note``. The remaining
    date fields are the kind-specific payload: ``due`` for deadlines and
    ``start``/``end`` for events. Use the ``todo``/``deadline``/``event``
    constructors rather than filling the payload by hand.
    """

    description: str
    kind: TaskKind = TaskKind.TODO
    done: bool = False
    note: Optional[str] = None

    # Payload
    due: Optional[date] = None
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        """Normalise text fields and check the payload matches the kind."""
        self.description = (self.description or "").strip()
        if not self.description:
            raise ValueError("Task description cannot be empty")

        if self.note is not None:
            self.note = self.note.strip() or None

        if self.kind == TaskKind.TODO:
            if self.due or self.start or self.end:
                raise ValueError("Todo tasks do not carry dates")
        elif self.kind == TaskKind.DEADLINE:
            if self.due is None:
                raise ValueError("Deadline tasks need a due date")
            if self.start or self.end:
                raise ValueError("Deadline tasks only carry a due date")
        elif self.kind == TaskKind.EVENT:
            # no ordering between start and end is enforced
            if self.start is None or self.end is None:
                raise ValueError("Event tasks need a start and an end date")
            if self.due:
                raise ValueError("Event tasks do not carry a due date")

    @classmethod
    def todo(cls, description: str, note: Optional[str] = None) -> "Task":
        return cls(description=description, kind=TaskKind.TODO, note=note)

    @classmethod
    def deadline(cls, description: str, due: date, note: Optional[str] = None) -> "Task":
        return cls(description=description, kind=TaskKind.DEADLINE, due=due, note=note)

    @classmethod
    def event(cls, description: str, start: date, end: date,
              note: Optional[str] = None) -> "Task":
        return cls(description=description, kind=TaskKind.EVENT, start=start, end=end, note=note)

    def mark_done(self):
        """Mark the task as done. Repeated calls are harmless."""
        self.done = True

    def mark_undone(self):
        """Mark the task as not done. Repeated calls are harmless."""
        self.done = False

    @property
    def symbol(self) -> str:
        return self.kind.value

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def is_overdue(self, on: Optional[date] = None) -> bool:
        """Check whether a pending deadline has passed."""
        if self.kind != TaskKind.DEADLINE or self.done:
            return False
        return (on or today()) > self.due

    def details(self) -> str:
        """Render the kind-specific suffix, e.g. ``(by: 2024-12-01)``."""
        if self.kind == TaskKind.DEADLINE:
            return f"(by: {format_date(self.due)})"
        if self.kind == TaskKind.EVENT:
            return f"(from: {format_date(self.start)} to: {format_date(self.end)})"
        return ""

    def __str__(self) -> str:
        parts = [f"[{self.symbol}][{self.status_icon}] {self.description}"]
        details = self.details()
        if details:
            parts.append(details)
        if self.note:
            parts.append(f"(note: {self.note})")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to a plain dictionary."""
        return {
            "kind": self.kind.value,
            "description": self.description,
            "done": self.done,
            "note": self.note,
            "due": format_date(self.due) or None,
            "start": format_date(self.start) or None,
            "end": format_date(self.end) or None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create a task from a dictionary produced by ``to_dict``."""

        def parse_date(value: Optional[str]) -> Optional[date]:
            if not value:
                return None
            return parse_iso_date(value)

        return cls(
            description=data["description"],
            kind=TaskKind(data.get("kind", TaskKind.TODO.value)),
            done=bool(data.get("done", False)),
            note=data.get("note"),
            due=parse_date(data.get("due")),
            start=parse_date(data.get("start")),
            end=parse_date(data.get("end")),
        )
