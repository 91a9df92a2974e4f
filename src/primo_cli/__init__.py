"""El Primo - a personal task-tracking command-line assistant."""

__version__ = "0.1.0"

from .task import Task, TaskKind
from .task_list import TaskList
from .commands import Command, CommandResult, Session
from .parser import CommandParser, parse_command
from .errors import PrimoError

__all__ = [
    "Task",
    "TaskKind",
    "TaskList",
    "Command",
    "CommandResult",
    "Session",
    "CommandParser",
    "parse_command",
    "PrimoError",
    "__version__",
]
