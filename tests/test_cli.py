"""Tests for the click command-line interface."""

import pytest
from click.testing import CliRunner

from primo_cli.cli.main import main
from primo_cli.config import ConfigModel, save_config


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    save_config(ConfigModel(data_dir=str(tmp_path / "data"),
                            backup_dir=str(tmp_path / "backups"),
                            no_color=True, show_banner=False), path)
    return path


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, config_file, *args, **kwargs):
    return runner.invoke(main, ["--config", str(config_file), *args], **kwargs)


class TestCli:
    """Test the command-line entry points."""

    def test_run_commands(self, runner, config_file, tmp_path):
        result = invoke(runner, config_file, "run", "todo read book", "mark 1")

        assert result.exit_code == 0
        assert "Got it. I've added this task:" in result.output
        assert (tmp_path / "data" / "data.txt").read_text() == "[T][X] read book\n"

    def test_run_failure_sets_exit_code(self, runner, config_file):
        result = invoke(runner, config_file, "run", "todo ok", "mark 9")

        assert result.exit_code == 1
        assert "Please select within the indexes" in result.output

    def test_list(self, runner, config_file):
        invoke(runner, config_file, "run", "deadline report /by 2024-12-01")

        result = invoke(runner, config_file, "list")

        assert result.exit_code == 0
        assert "1.[D][ ] report (by: 2024-12-01)" in result.output

    def test_chat_reads_stdin(self, runner, config_file):
        result = invoke(runner, config_file, "--no-banner", "chat",
                        input="todo read book\nfind read\nbye\n")

        assert result.exit_code == 0
        assert "Here are the matching tasks in your list:" in result.output
        assert "Bye. Hope to see you again soon!" in result.output

    def test_default_command_is_chat(self, runner, config_file):
        result = invoke(runner, config_file, input="list\nbye\n")

        assert result.exit_code == 0
        assert "Bye. Hope to see you again soon!" in result.output

    def test_backup(self, runner, config_file, tmp_path):
        result = invoke(runner, config_file, "backup")
        assert "No task file to back up yet." in result.output

        invoke(runner, config_file, "run", "todo read")
        result = invoke(runner, config_file, "backup")

        assert result.exit_code == 0
        assert len(list((tmp_path / "backups").iterdir())) == 1

    def test_config_show_and_init(self, runner, config_file, tmp_path):
        result = invoke(runner, config_file, "config")
        assert "assistant_name: El Primo" in result.output

        target = tmp_path / "copy.yaml"
        result = invoke(runner, config_file, "config", "--init", str(target))

        assert result.exit_code == 0
        assert ConfigModel.from_yaml(target.read_text()).data_dir == str(tmp_path / "data")

    def test_storage_follows_config_file(self, runner, config_file, tmp_path):
        other = tmp_path / "other.yaml"
        save_config(ConfigModel(data_dir=str(tmp_path / "other"), no_color=True,
                                show_banner=False), other)

        invoke(runner, config_file, "run", "todo first")
        invoke(runner, other, "run", "todo second")

        assert (tmp_path / "data" / "data.txt").read_text() == "[T][ ] first\n"
        assert (tmp_path / "other" / "data.txt").read_text() == "[T][ ] second\n"
