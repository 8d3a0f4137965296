"""
Interactive menu.

The operator types the number of one option.  Anything that does not
resolve to exactly one option (blank input, several numbers, unknown
numbers) redisplays the menu without running an action.
"""

from __future__ import annotations

import enum
import re
from typing import Callable, Optional

import click
from loguru import logger

from .actions import check_transaction, deploy, get_value, set_value
from .actions.outcomes import Outcome
from .session import Session


class MenuChoice(enum.Enum):
    DEPLOY = "Deploy the contract"
    CHECK = "Check the transaction"
    SET = "Use the SET function"
    GET = "Use the GET function"
    EXIT = "Exit"


MENU_OPTIONS: list[MenuChoice] = list(MenuChoice)

_SEPARATORS = re.compile(r"[\s,]+")


def parse_selection(answer: str) -> list[MenuChoice]:
    """
    Turn the typed answer into the list of selected options.

    Numbers are 1-based, separated by commas or whitespace.  Duplicates
    count once.  An unknown token makes the whole answer invalid (empty).
    """
    selected: list[MenuChoice] = []
    for token in _SEPARATORS.split(answer.strip()):
        if not token:
            continue
        if not token.isdigit() or not 1 <= int(token) <= len(MENU_OPTIONS):
            return []
        choice = MENU_OPTIONS[int(token) - 1]
        if choice not in selected:
            selected.append(choice)
    return selected


def ask_choice() -> Optional[MenuChoice]:
    """Show the menu once. Returns None unless exactly one option was picked."""
    click.echo()
    click.secho("What do you want to do ? (check one)", bold=True)
    for index, option in enumerate(MENU_OPTIONS, start=1):
        click.echo(f"  {index}) {option.value}")

    answer = click.prompt("Your choice", default="", show_default=False)
    selected = parse_selection(answer)
    if len(selected) != 1:
        return None
    return selected[0]


def _prompt_address() -> str:
    return click.prompt("Please enter the contract address", default="", show_default=False)


def _prompt_tx_hash() -> str:
    return click.prompt("Please enter the transaction hash", default="", show_default=False)


def _dispatch(session: Session, choice: MenuChoice) -> Outcome:
    handlers: dict[MenuChoice, Callable[[], Outcome]] = {
        MenuChoice.DEPLOY: lambda: deploy(session),
        MenuChoice.CHECK: lambda: check_transaction(session, _prompt_tx_hash()),
        MenuChoice.SET: lambda: set_value(session, _prompt_address()),
        MenuChoice.GET: lambda: get_value(session, _prompt_address()),
    }
    return handlers[choice]()


def run_menu(session: Session) -> int:
    """
    Run the menu until the operator picks Exit (or closes stdin).

    Returns:
        Process exit code (always 0; action failures do not end the loop)
    """
    click.echo("Welcome on Contract CLI")

    while True:
        try:
            choice = ask_choice()
            if choice is None:
                click.secho("Please select only one option", fg="yellow")
                continue
            if choice is MenuChoice.EXIT:
                break

            click.echo("Processing ...")
            outcome = _dispatch(session, choice)
        except click.Abort:
            click.echo()
            break

        logger.info("{} -> {}", choice.name, type(outcome).__name__)
        outcome.report()
        click.echo("Done !")

    click.echo("Bye Bye")
    return 0
