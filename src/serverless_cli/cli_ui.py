"""
Rich interactive UI components for the serverless CLI.

Provides cursor-navigable selection menus, validated text input and styled
status messages. ``prompt`` is the single entry point used by interactive
flows: it takes a declarative ``PromptSpec`` and returns the answer.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar

from rich import box
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

console = Console()

T = TypeVar("T")

Validator = Callable[[str], "bool | str"]


def is_tty() -> bool:
    """Check whether both stdin and stdout are terminals."""
    return sys.stdin.isatty() and sys.stdout.isatty()


@dataclass
class SelectOption(Generic[T]):
    """An option in a selection menu."""

    value: T
    label: str
    description: str = ""


@dataclass
class PromptSpec:
    """
    Declarative description of a single question.

    Attributes:
        type: "list" for single-select, "input" for free text
        name: Answer key
        message: Question shown to the user
        choices: Options for "list" prompts
        default: Default answer for "input" prompts
        validate: Returns True to accept, or a rejection message
        page_size: Visible rows for "list" prompts
    """

    type: Literal["list", "input"]
    name: str
    message: str
    choices: list[SelectOption[Any]] = field(default_factory=list)
    default: str | None = None
    validate: Validator | None = None
    page_size: int | None = None


# Style definitions
STYLES = {
    "title": Style(color="bright_cyan", bold=True),
    "selected": Style(color="bright_white", bgcolor="blue", bold=True),
    "unselected": Style(color="white"),
    "description": Style(color="bright_black"),
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
    "info": Style(color="cyan"),
    "muted": Style(color="bright_black"),
    "highlight": Style(color="bright_cyan"),
}


def print_header(title: str) -> None:
    """Print a styled header."""
    console.print()
    console.print(Text(title, style=STYLES["title"]))
    console.print()


def print_status(message: str) -> None:
    """Print a plain status line preceded by a blank line."""
    console.print()
    console.print(Text(message), soft_wrap=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print()
    console.print(Text(message, style=STYLES["success"]), soft_wrap=True)


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(Text(f"✗ {message}", style=STYLES["error"]), soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print()
    console.print(Text(message, style=STYLES["warning"]), soft_wrap=True)


def prompt(spec: PromptSpec) -> Any:
    """
    Ask a single question.

    Returns:
        The selected value ("list"; None if cancelled) or the entered text ("input")

    Raises:
        KeyboardInterrupt: If text input is interrupted
    """
    if spec.type == "list":
        return select_interactive(spec.choices, title=spec.message, page_size=spec.page_size)
    return text_input(spec.message, default=spec.default, validate=spec.validate)


def select_interactive(
    options: list[SelectOption[T]],
    title: str = "Select an option",
    page_size: int | None = None,
) -> T | None:
    """
    Interactive selection with keyboard navigation.

    Uses arrow keys for navigation and Enter to select.
    Falls back to numbered input if not in a TTY.

    Args:
        options: List of SelectOption items
        title: Title shown above the menu
        page_size: Maximum number of rows visible at once

    Returns:
        Selected value or None if cancelled
    """
    if not options:
        return None

    if not is_tty():
        return _select_simple(options, title)

    try:
        return _select_with_keyboard(options, title, page_size or len(options))
    except (ImportError, OSError):
        # termios unavailable (e.g. Windows) or terminal not controllable
        return _select_simple(options, title)


def visible_window(selected_idx: int, start: int, page_size: int, total: int) -> int:
    """
    Compute the first visible row so that ``selected_idx`` stays on screen.

    Examples:
        visible_window(0, 0, 5, 13)  # -> 0
        visible_window(7, 0, 5, 13)  # -> 3
        visible_window(2, 3, 5, 13)  # -> 2
    """
    if total <= page_size:
        return 0
    if selected_idx < start:
        return selected_idx
    if selected_idx >= start + page_size:
        return selected_idx - page_size + 1
    return start


def _select_with_keyboard(
    options: list[SelectOption[T]],
    title: str,
    page_size: int,
) -> T | None:
    """Keyboard-navigable selection menu."""
    import termios
    import tty

    selected_idx = 0
    start = 0

    def render_menu() -> None:
        """Render the visible page of the selection menu."""
        console.print("\033[2J\033[H", end="")
        print_header(title)

        for i in range(start, min(start + page_size, len(options))):
            opt = options[i]
            is_selected = i == selected_idx

            prefix = "› " if is_selected else "  "
            line = Text()
            line.append(prefix, style=STYLES["highlight"] if is_selected else STYLES["muted"])
            line.append(opt.label, style=STYLES["selected"] if is_selected else STYLES["unselected"])
            console.print(line)

            if is_selected and opt.description:
                console.print(Text(f"    {opt.description}", style=STYLES["description"]))

        console.print()
        console.print(Text("↑/↓ Navigate  Enter Select  q Cancel", style=STYLES["muted"]))

    def get_key() -> str:
        """Get a single keypress."""
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            ch = sys.stdin.read(1)
            # Handle escape sequences (arrow keys)
            if ch == "\x1b":
                ch += sys.stdin.read(2)
            return ch
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    try:
        while True:
            render_menu()
            key = get_key()

            if key == "\x1b[A":  # Up arrow
                selected_idx = (selected_idx - 1) % len(options)
            elif key == "\x1b[B":  # Down arrow
                selected_idx = (selected_idx + 1) % len(options)
            elif key in ("\r", "\n"):
                console.print("\033[2J\033[H", end="")
                return options[selected_idx].value
            elif key in ("q", "Q", "\x03"):  # q or Ctrl+C
                console.print("\033[2J\033[H", end="")
                return None
            start = visible_window(selected_idx, start, page_size, len(options))

    except KeyboardInterrupt:
        console.print("\033[2J\033[H", end="")
        return None


def _select_simple(options: list[SelectOption[T]], title: str) -> T | None:
    """Simple numbered selection (fallback for non-TTY)."""
    print_header(title)

    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("Num", style="cyan", width=4)
    table.add_column("Name", style="white")

    for i, opt in enumerate(options, 1):
        table.add_row(f"{i}.", opt.label)

    console.print(table)
    console.print()

    while True:
        try:
            choice = console.input(Text("Enter number or name: ", style=STYLES["info"])).strip()

            if not choice or choice.lower() in ("q", "quit", "cancel"):
                return None

            try:
                idx = int(choice) - 1
                if 0 <= idx < len(options):
                    return options[idx].value
            except ValueError:
                pass

            # Case-insensitive exact match, else a prefix matching exactly one label
            choice_lower = choice.lower()
            for opt in options:
                if opt.label.lower() == choice_lower:
                    return opt.value

            matches = [opt for opt in options if opt.label.lower().startswith(choice_lower)]
            if len(matches) == 1:
                return matches[0].value
            if matches:
                console.print(
                    Text(
                        f"'{choice}' matches {len(matches)} options. Enter more of the name.",
                        style=STYLES["error"],
                    )
                )
                continue

            console.print(
                Text(f"Invalid choice. Enter 1-{len(options)} or option name.", style=STYLES["error"])
            )

        except (KeyboardInterrupt, EOFError):
            console.print()
            return None


def text_input(
    message: str,
    default: str | None = None,
    validate: Validator | None = None,
) -> str:
    """
    Ask for free text, re-asking until the validator accepts the answer.

    An empty answer takes ``default`` when one is given.
    """
    suffix = f" ({default})" if default else ""
    question = Text(f"{message}{suffix} ", style=STYLES["info"])

    while True:
        try:
            answer = console.input(question)
        except EOFError:
            console.print()
            raise KeyboardInterrupt from None

        if not answer.strip() and default:
            answer = default

        if validate is None:
            return answer

        result = validate(answer)
        if result is True:
            return answer
        print_error(str(result) if result else "Invalid input")


def display_options_table(options: list[SelectOption[Any]], title: str = "") -> None:
    """Display options in a formatted table (non-interactive)."""
    if title:
        print_header(title)

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Template", style="white bold")
    table.add_column("Description", style="bright_black")

    for opt in options:
        table.add_row(str(opt.value), opt.label)

    console.print(table)
    console.print()
