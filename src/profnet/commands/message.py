"""Command group: messages between connected accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from profnet.commands._base import NetGroup, acting_as

if TYPE_CHECKING:
    from profnet.commands._context import AppContext


@click.group(
    cls=NetGroup,
    examples="""\
  profnet message send --as alice bob "Hello"
  profnet message inbox --as bob
  profnet message delete --as bob 1""",
)
def message() -> None:
    """Send, read, and delete messages."""


@message.command(
    examples="""\
  profnet message send --as alice bob "Good to meet you"
  profnet -q message send --as alice bob "See you Monday" """,
)
@acting_as
@click.argument("receiver")
@click.argument("body")
@click.pass_obj
def send(app: AppContext, subject: str, receiver: str, body: str) -> None:
    """Send BODY to RECEIVER (must be a connection)."""
    app.emit(app.network.send_message(subject, receiver, body))


@message.command(
    examples="""\
  profnet message delete --as bob 1""",
)
@acting_as
@click.argument("message_id", type=int)
@click.pass_obj
def delete(app: AppContext, subject: str, message_id: int) -> None:
    """Delete MESSAGE_ID from your side of the conversation."""
    app.emit(app.network.delete_message(subject, message_id))


@message.command(
    examples="""\
  profnet message show --as bob 1""",
)
@acting_as
@click.argument("message_id", type=int)
@click.pass_obj
def show(app: AppContext, subject: str, message_id: int) -> None:
    """Show a single message."""
    app.emit(app.network.get_message(subject, message_id))


@message.command(
    examples="""\
  profnet message inbox --as bob
  profnet -v message inbox --as bob""",
)
@acting_as
@click.pass_obj
def inbox(app: AppContext, subject: str) -> None:
    """List received messages, oldest first."""
    app.emit(app.network.list_inbox(subject))


@message.command(
    examples="""\
  profnet message sent --as alice""",
)
@acting_as
@click.pass_obj
def sent(app: AppContext, subject: str) -> None:
    """List sent messages, oldest first."""
    app.emit(app.network.list_sent(subject))
