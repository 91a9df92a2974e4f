"""Typed commands produced by the parser and executed against a session."""

from dataclasses import dataclass, field
from typing import List, Optional

from .task import Task
from .task_list import TaskList


@dataclass
class Session:
    """Explicit application state threaded through command execution."""
    tasks: TaskList = field(default_factory=TaskList)
    running: bool = True


@dataclass
class CommandResult:
    """What a command wants shown to the user, and whether it changed the list."""
    message: str
    tasks: List[Task] = field(default_factory=list)
    numbered: bool = False
    footer: Optional[str] = None
    changed: bool = False

    def render(self) -> str:
        """Plain-text form of the result, as printed on a console without colour."""
        lines = [self.message]
        if self.numbered:
            lines.extend(f"{number}.{task}" for number, task in enumerate(self.tasks, start=1))
        else:
            lines.extend(str(task) for task in self.tasks)
        if self.footer:
            lines.append(self.footer)
        return "\n".join(lines)


def _count_phrase(count: int) -> str:
    noun = "task" if count == 1 else "tasks"
    return f"Now you have {count} {noun} in the list."


class Command:
    """Base class for a single, already validated user intent."""

    word = ""

    def execute(self, session: Session) -> CommandResult:
        raise NotImplementedError


@dataclass
class ByeCommand(Command):
    word = "bye"

    def execute(self, session: Session) -> CommandResult:
        session.running = False
        return CommandResult("Bye. Hope to see you again soon!")


@dataclass
class ListCommand(Command):
    word = "list"

    def execute(self, session: Session) -> CommandResult:
        if not len(session.tasks):
            return CommandResult("Your list is empty. Try adding a todo!")
        return CommandResult("Here are the tasks in your list:",
                             tasks=session.tasks.tasks, numbered=True)


@dataclass
class MarkCommand(Command):
    index: int
    word = "mark"

    def execute(self, session: Session) -> CommandResult:
        task = session.tasks.mark(self.index)
        return CommandResult("Nice! I've marked this task as done:", tasks=[task], changed=True)


@dataclass
class UnmarkCommand(Command):
    index: int
    word = "unmark"

    def execute(self, session: Session) -> CommandResult:
        task = session.tasks.unmark(self.index)
        return CommandResult("OK, I've marked this task as not done yet:",
                             tasks=[task], changed=True)


@dataclass
class AddCommand(Command):
    """Appends a pre-built task to the end of the list."""
    task: Task

    def execute(self, session: Session) -> CommandResult:
        session.tasks.add(self.task)
        return CommandResult("Got it. I've added this task:", tasks=[self.task],
                             footer=_count_phrase(len(session.tasks)), changed=True)


@dataclass
class TodoCommand(AddCommand):
    word = "todo"


@dataclass
class DeadlineCommand(AddCommand):
    word = "deadline"


@dataclass
class EventCommand(AddCommand):
    word = "event"


@dataclass
class DeleteCommand(Command):
    index: int
    word = "delete"

    def execute(self, session: Session) -> CommandResult:
        task = session.tasks.remove(self.index)
        return CommandResult("Noted. I've removed this task:", tasks=[task],
                             footer=_count_phrase(len(session.tasks)), changed=True)


@dataclass
class FindCommand(Command):
    keyword: str
    word = "find"

    def execute(self, session: Session) -> CommandResult:
        matches = session.tasks.find(self.keyword)
        if not matches:
            return CommandResult(f"No tasks in your list match '{self.keyword}'.")
        return CommandResult("Here are the matching tasks in your list:",
                             tasks=matches, numbered=True)
