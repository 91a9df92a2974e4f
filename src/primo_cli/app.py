"""The read-eval loop that ties parser, commands, storage and console together."""

import logging
from typing import Iterable, Iterator, Optional

from rich.console import Console
from rich.markup import escape

from .commands import CommandResult, ListCommand, Session
from .config import ConfigModel
from .errors import PrimoError
from .parser import CommandParser
from .storage import Storage
from .task_list import TaskList
from .theme import get_themed_console, show_error, show_result, show_startup_banner

logger = logging.getLogger(__name__)


class Assistant:
    """Runs one session: load tasks, execute commands, save after each change."""

    def __init__(self, storage: Storage, config: ConfigModel,
                 console: Optional[Console] = None, parser: Optional[CommandParser] = None):
        self.storage = storage
        self.config = config
        self.console = console or get_themed_console(no_color=config.no_color)
        self.parser = parser or CommandParser()
        self.session = Session(tasks=TaskList(storage.load()))

    @property
    def running(self) -> bool:
        return self.session.running

    def start(self, show_banner: Optional[bool] = None) -> None:
        """Greet the user and show the tasks carried over from last time."""
        if self.config.backup_on_start:
            try:
                self.storage.backup()
            except PrimoError as e:
                show_error(self.console, e, self.config.assistant_name)

        if self.config.show_banner if show_banner is None else show_banner:
            show_startup_banner(self.console, self.config.assistant_name)
        else:
            self.console.print(f"[assistant]{escape(self.config.assistant_name)}:[/assistant]")
            self.console.print(f"Hello! I'm {escape(self.config.assistant_name)}!! "
                               "What can I do for you?")

        if len(self.session.tasks):
            show_result(self.console, ListCommand().execute(self.session),
                        self.config.assistant_name)

    def execute(self, line: str) -> CommandResult:
        """Parse and run one line, persisting the list if it changed.

        Raises:
            PrimoError: For any invalid input or failed save
        """
        command = self.parser.parse(line)
        result = command.execute(self.session)
        logger.debug(f"Executed {command.word}, changed={result.changed}")
        if result.changed:
            self.storage.save(self.session.tasks.tasks)
        return result

    def handle(self, line: str) -> bool:
        """Run one line and print the outcome. Returns ``True`` on success."""
        try:
            result = self.execute(line)
        except PrimoError as e:
            logger.debug(f"{e.kind}: {e.message}")
            show_error(self.console, e, self.config.assistant_name)
            return False
        show_result(self.console, result, self.config.assistant_name)
        return True

    def run(self, lines: Optional[Iterable[str]] = None) -> None:
        """Drive the session until ``bye`` or the input runs out."""
        source = iter(lines) if lines is not None else self._prompt_lines()
        while self.running:
            try:
                line = next(source)
            except StopIteration:
                logger.debug("Input exhausted, ending session")
                break
            self.handle(line)

    def _prompt_lines(self) -> Iterator[str]:
        """Read lines interactively, ending cleanly on EOF or Ctrl-C."""
        prompt = f"\n[user]{escape(self.config.user_name)}:[/user]\n"
        while True:
            try:
                yield self.console.input(prompt)
            except (EOFError, KeyboardInterrupt):
                return
