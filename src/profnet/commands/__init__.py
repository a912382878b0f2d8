"""Subcommand modules for profnet.

Provides register_commands() which uses deferred imports to keep
``profnet --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from profnet.commands.account import account
    from profnet.commands.connect import connect
    from profnet.commands.message import message

    cli.add_command(account)
    cli.add_command(connect)
    cli.add_command(message)
