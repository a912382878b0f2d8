"""Command group: account management (identity only)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from profnet.commands._base import NetGroup

if TYPE_CHECKING:
    from profnet.commands._context import AppContext


@click.group(
    cls=NetGroup,
    examples="""\
  profnet account create alice
  profnet --json account create bob""",
)
def account() -> None:
    """Manage accounts."""


@account.command(
    examples="""\
  profnet account create alice""",
)
@click.argument("account_id")
@click.pass_obj
def create(app: AppContext, account_id: str) -> None:
    """Register a new account ID."""
    app.emit(app.network.create_account(account_id))
