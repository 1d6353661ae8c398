from __future__ import annotations

from typing import Callable, Optional

from rich.console import Console

from coursetable.controller import ViewController
from coursetable.filters import ALL_YEARS

console = Console()

HELP = (
    "\n[bold]Commands[/]\n"
    "  /<text>      search (code, description, year, sem)\n"
    "  /            clear search\n"
    "  y <label>    show one year level (e.g. 'y 2nd')\n"
    "  y all        show all year levels\n"
    "  r            reset search and year filter\n"
    "  ?            this help\n"
    "  q            quit\n"
)


def _prompt(msg: str) -> str:
    return console.input(msg)


def handle_command(controller: ViewController, line: str) -> bool:
    """
    Apply one prompt command to the controller.
    Returns False when the user wants to quit.
    """
    cmd = line.strip()

    if cmd in ("q", "quit", "exit"):
        return False

    if cmd == "?":
        console.print(HELP)
    elif cmd.startswith("/"):
        # keep inner whitespace of the search text
        controller.search(line.lstrip()[1:])
    elif cmd == "y" or cmd.startswith("y "):
        token = cmd[1:].strip() or ALL_YEARS
        options = controller.year_options()
        if token not in options:
            console.print(f"Unknown year level. Choose one of: {', '.join(options)}")
        else:
            controller.select_year(token)
    elif cmd in ("", "r"):
        controller.set_filters("", ALL_YEARS)
    else:
        console.print("Invalid command ('?' for help).")

    return True


def run_interactive(controller: ViewController, prompt_fn: Optional[Callable[[str], str]] = None) -> None:
    """
    Prompt loop: each command triggers a full re-render before the next prompt.
    """
    ask = prompt_fn if prompt_fn is not None else _prompt
    console.print(HELP)

    while True:
        state = controller.state
        console.print(f"[dim]search={state.search!r} | year={state.year}[/]")
        try:
            line = ask("> ")
        except EOFError:
            line = "q"

        if not handle_command(controller, line):
            console.print("Bye.")
            return
