"""Flat-file storage for the task list.

One task per line, in the same form the assistant prints it::

    [T][ ] read book
    [D][X] return book (by: 2024-12-01)
    [E][ ] project meeting (from: 2024-01-01 to: 2024-01-05) (note: room 3)

The one difference from the printed form is that ``\\`` and ``(`` in a
description are written as ``\\\\`` and ``\\(``, so a description such as
``reply (note: urgent)`` cannot be mistaken for a note suffix.

Lines written by older versions carry a list number (``1.[T][ ] ...``);
that prefix is accepted and dropped on load, as are unescaped descriptions.
"""

import logging
import os
import re
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config import ConfigModel
from .errors import StorageError
from .task import Task, TaskKind
from .utils.datetime import parse_iso_date


logger = logging.getLogger(__name__)


NUMBER_PREFIX_RE = re.compile(r"^\d+\.")

# Stored descriptions have "\" and "(" backslash-escaped, so the first
# unescaped "(" opens a suffix. The note comes last and is kept verbatim.
_DESCRIPTION = r"(?P<description>(?:[^\\(]|\\.)*?)"
_NOTE = r"(?: \(note: (?P<note>.*)\))?$"
LINE_BODY_RE = {
    TaskKind.TODO: re.compile(_DESCRIPTION + _NOTE),
    TaskKind.DEADLINE: re.compile(_DESCRIPTION + r" \(by: (?P<due>\S+)\)" + _NOTE),
    TaskKind.EVENT: re.compile(
        _DESCRIPTION + r" \(from: (?P<start>\S+) to: (?P<end>\S+)\)" + _NOTE),
}
ESCAPED_CHAR_RE = re.compile(r"\\(.)")

# Unescaped lines from older versions
NOTE_SUFFIX_RE = re.compile(r"\s*\(note: (.*)\)$")
BY_SUFFIX_RE = re.compile(r"\s*\(by: (\S+)\)$")
RANGE_SUFFIX_RE = re.compile(r"\s*\(from: (\S+) to: (\S+)\)$")

# "[T][X] " header: type at offset 1, status at offset 4, text from offset 7
TYPE_OFFSET = 1
STATUS_OFFSET = 4
TEXT_OFFSET = 7


class TaskFileFormat:
    """Handles conversion between Task objects and task file lines."""

    @staticmethod
    def escape(text: str) -> str:
        return text.replace("\\", "\\\\").replace("(", "\\(")

    @staticmethod
    def unescape(text: str) -> str:
        return ESCAPED_CHAR_RE.sub(r"\1", text)

    @staticmethod
    def to_line(task: Task) -> str:
        """Convert a task to its one-line stored form."""
        parts = [f"[{task.symbol}][{task.status_icon}] {TaskFileFormat.escape(task.description)}"]
        details = task.details()
        if details:
            parts.append(details)
        if task.note:
            parts.append(f"(note: {task.note})")
        return " ".join(parts)

    @staticmethod
    def _build(kind: TaskKind, description: str, note: Optional[str],
               due: Optional[str] = None, start: Optional[str] = None,
               end: Optional[str] = None) -> Task:
        if kind == TaskKind.DEADLINE:
            return Task.deadline(description, parse_iso_date(due), note=note)
        if kind == TaskKind.EVENT:
            return Task.event(description, parse_iso_date(start), parse_iso_date(end), note=note)
        return Task.todo(description, note=note)

    @staticmethod
    def _from_legacy_text(kind: TaskKind, rest: str) -> Optional[Task]:
        """Strip the note and then the date suffix from the end of ``rest``."""
        note = None
        m = NOTE_SUFFIX_RE.search(rest)
        if m:
            note = m.group(1)
            rest = rest[:m.start()]

        if kind == TaskKind.DEADLINE:
            m = BY_SUFFIX_RE.search(rest)
            if not m:
                return None
            return TaskFileFormat._build(kind, rest[:m.start()], note, due=m.group(1))
        if kind == TaskKind.EVENT:
            m = RANGE_SUFFIX_RE.search(rest)
            if not m:
                return None
            return TaskFileFormat._build(kind, rest[:m.start()], note,
                                         start=m.group(1), end=m.group(2))
        return TaskFileFormat._build(kind, rest, note)

    @staticmethod
    def from_line(line: str) -> Optional[Task]:
        """Parse a stored line back to a Task, or ``None`` if it is not one."""
        line = line.strip()
        if not line:
            return None

        line = NUMBER_PREFIX_RE.sub("", line, count=1)
        if len(line) <= TEXT_OFFSET or line[0] != "[" or line[2:4] != "][" or line[5:7] != "] ":
            return None

        try:
            kind = TaskKind(line[TYPE_OFFSET])
        except ValueError:
            return None
        status = line[STATUS_OFFSET]
        if status not in ("X", " "):
            return None

        rest = line[TEXT_OFFSET:]

        try:
            m = LINE_BODY_RE[kind].match(rest)
            if m:
                fields = m.groupdict()
                task = TaskFileFormat._build(
                    kind,
                    TaskFileFormat.unescape(fields.pop("description")),
                    fields.pop("note"),
                    **fields,
                )
            else:
                task = TaskFileFormat._from_legacy_text(kind, rest)
        except ValueError:
            # Bad date or empty description
            return None
        if task is None:
            return None

        if status == "X":
            task.mark_done()
        return task


class Storage:
    """File-based storage for the task list."""

    def __init__(self, config: ConfigModel):
        self.config = config

    @property
    def path(self) -> Path:
        return self.config.get_data_path()

    def _ensure_file(self) -> None:
        """Create the data directory and an empty task file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)

    def load(self) -> List[Task]:
        """Load tasks from the task file.

        A missing or unreadable file is treated as an empty list, and a
        fresh file is created in its place.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.info(f"Could not read {self.path} ({e}), starting with an empty list")
            try:
                self._ensure_file()
            except OSError as create_error:
                logger.warning(f"Could not create {self.path}: {create_error}")
            return []

        tasks = []
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            task = TaskFileFormat.from_line(line)
            if task is None:
                logger.warning(f"Skipping unreadable line {number} in {self.path}: {line!r}")
                continue
            tasks.append(task)

        logger.debug(f"Loaded {len(tasks)} tasks from {self.path}")
        return tasks

    def save(self, tasks: List[Task]) -> None:
        """Write all tasks, replacing the file atomically.

        Raises:
            StorageError: If the file cannot be written
        """
        content = "".join(TaskFileFormat.to_line(task) + "\n" for task in tasks)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".tasks-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Failed to save tasks to {self.path}: {e}")
            raise StorageError(f"Could not save tasks to {self.path}: {e}")

        logger.debug(f"Saved {len(tasks)} tasks to {self.path}")

    def backup(self, timestamp: Optional[str] = None) -> Optional[Path]:
        """Copy the task file into the backup directory.

        Returns:
            The backup path, or ``None`` when there is no task file yet
        """
        if not self.path.exists():
            return None

        timestamp = timestamp or datetime.now().strftime("%Y%m%d-%H%M%S")
        backup_path = self.config.get_backup_path(timestamp)
        try:
            backup_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(self.path, backup_path)
        except OSError as e:
            raise StorageError(f"Could not back up {self.path}: {e}")

        logger.info(f"Backed up {self.path} to {backup_path}")
        return backup_path


# Global storage instance
_storage_instance: Optional[Storage] = None


def get_storage() -> Storage:
    """Get the global storage instance.

    Returns:
        Storage instance initialized with current config
    """
    global _storage_instance

    if _storage_instance is None:
        from .config import get_config
        _storage_instance = Storage(get_config())

    return _storage_instance


def reset_storage() -> None:
    """Reset the global storage instance (useful for testing)."""
    global _storage_instance
    _storage_instance = None
