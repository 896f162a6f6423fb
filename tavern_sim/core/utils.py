"""
Console helpers of the tavern front-end.

All narration goes through one rich console so menus, tables and battle
lines share the same width and markup rules.
"""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

_console = Console(markup=True, width=120)


def cprint(*args: Any, **kwargs: Any) -> None:
    """Prints through the shared console; accepts rich markup."""
    _console.print(*args, **kwargs)


def cerror(message: Any) -> None:
    """
    Prints an error line in red.

    The message is escaped, so names typed by the user (or square brackets
    in exception texts) are never read as markup.
    """
    _console.print(f"[red][ERROR] {escape(str(message))}[/]")


def crule(title: str = "", **kwargs: Any) -> None:
    """Prints a horizontal rule with an optional title."""
    _console.print(Rule(title, **kwargs))


def ccapture(content: Any) -> str:
    """
    Renders content to an ANSI string instead of printing it.

    Used to feed rich tables to prompt_toolkit prompts.

    Args:
        content (Any): A markup string or any rich renderable.

    Returns:
        str: The rendered output.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()
