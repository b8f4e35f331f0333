"""Interactive project bootstrap.

Runs when the CLI starts outside a project in an interactive terminal:
shows a welcome banner and offers to create a starter
``taskwright.toml`` via a questionary arrow-key prompt.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from taskwright.cli.console import console, emoji
from taskwright.exceptions import missing_dependency
from taskwright.infra.project import CONFIG_FILE_NAME, write_default_config
from taskwright.version import __version__

CREATE_CONFIG_CHOICE = f"Create an empty {CONFIG_FILE_NAME}"
QUIT_CHOICE = "Quit"


def _import_questionary() -> Any:
    """Import questionary lazily for the interactive prompt."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise missing_dependency("questionary") from exc
    return questionary


def _print_welcome_message() -> None:
    console.print(
        f"[bold cyan]{emoji('👷 ')}Welcome to taskwright v{__version__}{emoji(' 👷')}[/bold cyan]"
    )
    console.print()
    console.print(
        f"You are not inside a taskwright project (no {CONFIG_FILE_NAME} found).",
        markup=False,
    )
    console.print()


def create_project(cwd: Path) -> Path | None:
    """Ask the user what to do and create the project if they agree.

    Returns
    -------
    Path | None
        The created config file, or ``None`` if the user quit or
        cancelled the prompt.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C during the prompt.
    TaskwrightError
        ``MISSING_DEPENDENCY`` when questionary is not installed,
        ``PROJECT_CREATION_FAILURE`` when the file cannot be written.
    """
    questionary = _import_questionary()

    _print_welcome_message()

    action: str | None = questionary.select(
        "What do you want to do?",
        choices=[CREATE_CONFIG_CHOICE, QUIT_CHOICE],
        use_arrow_keys=True,
    ).ask()  # Returns None on Ctrl+C / Esc

    if action != CREATE_CONFIG_CHOICE:
        return None

    config_path = write_default_config(cwd)

    console.print()
    console.print(
        f"[bold green]{emoji('✨ ')}Project created{emoji(' ✨')}[/bold green]"
    )
    console.print(f"Config written to {config_path}", markup=False)
    console.print(
        f"Run 'taskwright help' inside {cwd} to see the available tasks.",
        markup=False,
    )
    return config_path
