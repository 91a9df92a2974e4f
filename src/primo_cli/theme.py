"""Console theming for the Primo assistant."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from .commands import CommandResult
from .errors import PrimoError
from .task import Task, TaskKind


# City Lights palette
CITY_LIGHTS_COLORS = {
    'primary': '#68D5F3',
    'secondary': '#5CCFE6',
    'accent': '#B7C5D3',
    'success': '#8BD649',
    'warning': '#FFD93D',
    'error': '#F78C6C',
    'critical': '#FF5370',
    'text_primary': '#B7C5D3',
    'text_muted': '#4F5B66',
    'text_bright': '#FFFFFF',
}

PRIMO_THEME = Theme({
    'default': f"{CITY_LIGHTS_COLORS['text_primary']}",
    'muted': f"{CITY_LIGHTS_COLORS['text_muted']}",
    'assistant': f"{CITY_LIGHTS_COLORS['primary']} bold",
    'user': f"{CITY_LIGHTS_COLORS['accent']} bold",
    'success': f"{CITY_LIGHTS_COLORS['success']} bold",
    'warning': f"{CITY_LIGHTS_COLORS['warning']} bold",
    'error': f"{CITY_LIGHTS_COLORS['error']} bold",
    'hint': f"{CITY_LIGHTS_COLORS['secondary']}",
    'task_pending': f"{CITY_LIGHTS_COLORS['text_primary']}",
    'task_done': f"{CITY_LIGHTS_COLORS['success']}",
    'deadline': f"{CITY_LIGHTS_COLORS['primary']}",
    'deadline_overdue': f"{CITY_LIGHTS_COLORS['critical']}",
    'event': f"{CITY_LIGHTS_COLORS['secondary']}",
    'note': f"{CITY_LIGHTS_COLORS['text_muted']} italic",
})

BANNER = r"""
  ___ _   ___      _
 | __| | | _ \_ _ (_)_ __  ___
 | _|| | |  _/ '_|| | '  \/ _ \
 |___|_| |_| |_|  |_|_|_|_\___/
"""


def get_themed_console(no_color: bool = False, **kwargs) -> Console:
    """Get a console with the Primo theme applied."""
    return Console(theme=PRIMO_THEME, no_color=no_color, highlight=False, **kwargs)


def show_startup_banner(console: Console, assistant_name: str = "El Primo") -> None:
    """Display the startup banner and greeting."""
    title = Text(BANNER, style="assistant")
    greeting = Text(f"Hello! I'm {assistant_name}!!\nWhat can I do for you?", style="default")
    console.print(Panel.fit(Text.assemble(title, "\n", greeting), border_style="muted"))


def format_task_for_display(task: Task, number: Optional[int] = None) -> str:
    """Format a task as Rich markup, keeping the plain ``[T][X]`` layout."""
    status_style = "task_done" if task.done else "task_pending"
    prefix = f"[muted]{number}.[/muted]" if number is not None else ""
    parts = [f"{prefix}[{status_style}]{escape(f'[{task.symbol}][{task.status_icon}]')} "
             f"{escape(task.description)}[/{status_style}]"]

    details = task.details()
    if details:
        if task.kind == TaskKind.DEADLINE:
            style = "deadline_overdue" if task.is_overdue() else "deadline"
        else:
            style = "event"
        parts.append(f"[{style}]{escape(details)}[/{style}]")

    if task.note:
        parts.append(f"[note]{escape(f'(note: {task.note})')}[/note]")

    return " ".join(parts)


def show_result(console: Console, result: CommandResult, assistant_name: str = "El Primo") -> None:
    """Print a command result under the assistant's name."""
    console.print(f"\n[assistant]{escape(assistant_name)}:[/assistant]")
    if console.no_color:
        console.print(escape(result.render()))
        return
    console.print(escape(result.message), style="success" if result.changed else "default")
    for number, task in enumerate(result.tasks, start=1):
        console.print(format_task_for_display(task, number if result.numbered else None))
    if result.footer:
        console.print(escape(result.footer), style="muted")


def show_error(console: Console, error: PrimoError, assistant_name: str = "El Primo") -> None:
    """Print a recoverable error and its suggestions."""
    console.print(f"\n[assistant]{escape(assistant_name)}:[/assistant]")
    console.print(escape(error.message), style="error")
    for suggestion in error.suggestions:
        console.print(f"  💡 {escape(suggestion)}", style="hint")
