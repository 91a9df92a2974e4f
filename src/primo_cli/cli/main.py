"""Click commands for the Primo assistant."""

import logging
import sys
from pathlib import Path

import click

from ..app import Assistant
from ..commands import ListCommand
from ..config import Config, ConfigModel, get_config, load_config, save_config
from ..errors import PrimoError
from ..storage import get_storage, reset_storage
from ..theme import get_themed_console, show_error, show_result

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(config: ConfigModel, verbose: bool = False) -> None:
    """Send log records to stderr so they never mix with assistant replies."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def get_console():
    """Get a themed console that reflects current configuration."""
    return get_themed_console(no_color=get_config().no_color)


def get_assistant() -> Assistant:
    config = get_config()
    return Assistant(get_storage(), config, console=get_console())


@click.group(invoke_without_command=True)
@click.option("--config", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--no-banner", is_flag=True, help="Skip the startup banner")
@click.pass_context
def main(ctx, config, verbose, no_banner):
    """El Primo - a personal task-tracking assistant.

    Run without a command to start chatting. Inside the chat:

    \b
      todo read book /n chapter 3
      deadline return book /by 2024-12-01
      event trip /from 2024-01-01 /to 2024-01-05
      list | mark 1 | unmark 1 | delete 1 | find book | bye
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['no_banner'] = no_banner

    try:
        if config:
            loaded = Config.reload(Path(config))
        else:
            loaded = load_config()
    except Exception as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    configure_logging(loaded, verbose)
    # Storage follows the configuration just loaded
    reset_storage()

    if ctx.invoked_subcommand is None:
        ctx.invoke(chat)


@main.command()
@click.pass_context
def chat(ctx):
    """Start an interactive session (reads commands until 'bye')."""
    no_banner = ctx.obj.get('no_banner', False) if ctx.obj else False
    assistant = get_assistant()
    assistant.start(show_banner=False if no_banner else None)
    if sys.stdin.isatty():
        assistant.run()
    else:
        assistant.run(line.rstrip("\n") for line in sys.stdin)


@main.command(name="run")
@click.argument("commands", nargs=-1, required=True)
def run_commands(commands):
    """Execute one or more commands without entering the chat.

    Example: primo run "todo read book" "mark 1" list
    """
    assistant = get_assistant()
    failures = 0
    for line in commands:
        if not assistant.running:
            break
        if not assistant.handle(line):
            failures += 1
    if failures:
        sys.exit(1)


@main.command(name="list")
def list_tasks():
    """Show the saved tasks."""
    assistant = get_assistant()
    show_result(assistant.console, ListCommand().execute(assistant.session),
                assistant.config.assistant_name)


@main.command()
def backup():
    """Copy the task file into the backup directory."""
    config = get_config()
    console = get_console()
    try:
        path = get_storage().backup()
    except PrimoError as e:
        show_error(console, e, config.assistant_name)
        sys.exit(1)
    if path is None:
        console.print("[warning]No task file to back up yet.[/warning]")
    else:
        console.print(f"[success]Backed up tasks to {path}[/success]")


@main.command(name="config")
@click.option("--init", "init_path", type=click.Path(dir_okay=False),
              help="Write the current settings to this file")
def show_config(init_path):
    """Print the effective configuration as YAML."""
    config = get_config()
    if init_path:
        path = save_config(config, Path(init_path))
        click.echo(f"Configuration saved to {path}")
        return
    click.echo(config.to_yaml(), nl=False)


if __name__ == "__main__":
    main()
