"""
storagectl CLI

Interactive client for a SimpleStorage contract on an Ethereum-compatible
node.  Running ``storagectl`` with no command opens the menu:

  Deploy    - deploy SimpleStorage from the compiled bytecode file
  Check     - look up a transaction receipt
  SET       - call set(value) on a deployed instance
  GET       - read get() from a deployed instance

Other commands:
  whoami    - Show the address of the configured key
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
from loguru import logger

from . import __version__
from .config import Settings, load_settings, parse_int
from .errors import StorageCtlError
from .logs import setup_logging
from .menu import run_menu
from .session import Session
from .wallet.eth import get_address


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("S T O R A G E C T L", fg="bright_white", bold=True)
        + click.style(f"  v{__version__}", dim=True)
    )
    click.echo()


def _fatal(exc: StorageCtlError) -> None:
    logger.error("{}", exc)
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="storagectl")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Extra .env file to load (default: ~/.storagectl/.env)",
)
@click.option("--rpc-url", envvar="STORAGECTL_RPC_URL", default=None, help="Node JSON-RPC URL")
@click.option(
    "--bytecode",
    "bytecode_path",
    envvar="STORAGECTL_BYTECODE",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Compiled SimpleStorage bytecode (.bin)",
)
@click.option("--chain-id", default=None, help="Chain ID, decimal or 0x hex (default: STORAGECTL_CHAIN_ID, else ask the node)")
@click.option("--log-level", envvar="STORAGECTL_LOG_LEVEL", default=None, help="Log level (DEBUG, INFO, ...)")
@click.option("-v", "--verbose", is_flag=True, help="Shortcut for --log-level DEBUG")
@click.pass_context
def cli(
    ctx: click.Context,
    env_file: Optional[Path],
    rpc_url: Optional[str],
    bytecode_path: Optional[Path],
    chain_id: Optional[str],
    log_level: Optional[str],
    verbose: bool,
) -> None:
    """storagectl — SimpleStorage contract client."""
    try:
        settings = load_settings(env_file).with_overrides(
            rpc_url=rpc_url,
            bytecode_path=bytecode_path,
            chain_id=parse_int("--chain-id", chain_id),
            log_level="DEBUG" if verbose else (log_level.upper() if log_level else None),
        )
    except StorageCtlError as exc:
        setup_logging()
        _fatal(exc)
        return

    setup_logging(settings.log_level)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        _print_banner()
        ctx.exit(_run_interactive(settings))


def _run_interactive(settings: Settings) -> int:
    try:
        session = Session.open(settings)
    except StorageCtlError as exc:
        _fatal(exc)

    with session:
        return run_menu(session)


# ============ Identity ============


@cli.command()
@click.pass_obj
def whoami(settings: Settings) -> None:
    """Show the address of the configured key."""
    try:
        address = get_address(settings.private_key)
    except StorageCtlError as exc:
        click.echo(f"No usable key: {exc}")
        sys.exit(exc.exit_code)
    click.echo(f"Address: {address}")


# ============ Entry Points ============


def main() -> None:
    """storagectl CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass  # Fallback: old Python or non-tty
    cli()


if __name__ == "__main__":
    main()
