"""Tests for the interactive assistant loop."""

import io

import pytest

from primo_cli.app import Assistant
from primo_cli.errors import IndexOutOfRangeError, UnknownCommandError
from primo_cli.theme import get_themed_console


def make_assistant(storage, config):
    console = get_themed_console(no_color=True, file=io.StringIO(), width=120)
    return Assistant(storage, config, console=console)


def output_of(assistant):
    return assistant.console.file.getvalue()


class TestAssistant:
    """Test the read-eval loop."""

    def test_start_with_empty_file(self, storage, config):
        assistant = make_assistant(storage, config)
        assistant.start()

        assert "Hello! I'm El Primo!!" in output_of(assistant)
        assert storage.path.exists()

    def test_start_lists_saved_tasks(self, storage, config):
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("[T][X] read book\n", encoding="utf-8")

        assistant = make_assistant(storage, config)
        assistant.start()

        assert "1.[T][X] read book" in output_of(assistant)

    def test_changes_are_persisted(self, storage, config):
        assistant = make_assistant(storage, config)

        assistant.execute("todo read book")
        assistant.execute("deadline return book /by 2024-12-01")
        assistant.execute("mark 1")

        assert storage.path.read_text().splitlines() == [
            "[T][X] read book",
            "[D][ ] return book (by: 2024-12-01)",
        ]

        assistant.execute("delete 1")
        assert storage.path.read_text().splitlines() == ["[D][ ] return book (by: 2024-12-01)"]

    def test_reads_do_not_write(self, storage, config):
        assistant = make_assistant(storage, config)
        assistant.execute("list")
        assistant.execute("find book")

        assert storage.path.read_text() == ""

    def test_execute_raises_for_bad_input(self, storage, config):
        assistant = make_assistant(storage, config)

        with pytest.raises(UnknownCommandError):
            assistant.execute("hello")
        with pytest.raises(IndexOutOfRangeError):
            assistant.execute("mark 1")

    def test_run_continues_after_errors(self, storage, config):
        assistant = make_assistant(storage, config)

        assistant.run([
            "todo read book",
            "mark abc",
            "",
            "sing a song",
            "mark 1",
            "bye",
            "todo never added",
        ])

        output = output_of(assistant)
        assert "is not a number" in output
        assert "Invalid command!" in output
        assert "Nice! I've marked this task as done:" in output
        assert "Bye. Hope to see you again soon!" in output
        assert not assistant.running
        assert [str(t) for t in assistant.session.tasks] == ["[T][X] read book"]

    def test_blank_line_reports_invalid_command(self, storage, config):
        assistant = make_assistant(storage, config)

        assistant.run(["", "   ", "bye"])

        output = output_of(assistant)
        assert output.count("Invalid command!") == 2
        assert "Bye. Hope to see you again soon!" in output

    def test_run_stops_when_input_ends(self, storage, config):
        assistant = make_assistant(storage, config)

        assistant.run(["todo one", "todo two"])

        assert assistant.running
        assert len(storage.load()) == 2

    def test_handle_reports_success(self, storage, config):
        assistant = make_assistant(storage, config)

        assert assistant.handle("todo read") is True
        assert assistant.handle("unmark 7") is False
        assert "Please select within the indexes" in output_of(assistant)

    def test_backup_on_start(self, storage, config):
        config.backup_on_start = True
        storage.save([])

        assistant = make_assistant(storage, config)
        assistant.start()

        assert list(config.get_backup_path().iterdir())
