"""Command group: connection requests and friendships."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from profnet.commands._base import NetGroup, acting_as
from profnet.domain.connections import Decision

if TYPE_CHECKING:
    from profnet.commands._context import AppContext


@click.group(
    cls=NetGroup,
    examples="""\
  profnet connect request --as alice bob
  profnet connect incoming --as bob
  profnet connect respond --as bob alice accept
  profnet connect friends --as alice""",
)
def connect() -> None:
    """Send, answer, and inspect connection requests."""


@connect.command(
    examples="""\
  profnet connect check --as alice carol""",
)
@acting_as
@click.argument("target")
@click.pass_obj
def check(app: AppContext, subject: str, target: str) -> None:
    """Show whether a request to TARGET would be allowed."""
    app.emit(app.network.can_request(subject, target))


@connect.command(
    examples="""\
  profnet connect request --as alice bob
  PROFNET_AS=alice profnet connect request bob""",
)
@acting_as
@click.argument("target")
@click.pass_obj
def request(app: AppContext, subject: str, target: str) -> None:
    """Send a connection request to TARGET."""
    app.emit(app.network.request_connection(subject, target))


@connect.command(
    examples="""\
  profnet connect respond --as bob alice accept
  profnet connect respond --as bob mallory reject""",
)
@acting_as
@click.argument("requester")
@click.argument("decision", type=click.Choice([d.value for d in Decision]))
@click.pass_obj
def respond(app: AppContext, subject: str, requester: str, decision: str) -> None:
    """Accept or reject the pending request from REQUESTER."""
    app.emit(app.network.respond_to_request(subject, requester, Decision(decision)))


@connect.command(
    examples="""\
  profnet connect status --as alice bob""",
)
@acting_as
@click.argument("target")
@click.pass_obj
def status(app: AppContext, subject: str, target: str) -> None:
    """Show the status of your request to TARGET."""
    app.emit(app.network.request_status(subject, target))


@connect.command(
    examples="""\
  profnet connect friends --as alice
  profnet -q connect friends --as alice""",
)
@acting_as
@click.pass_obj
def friends(app: AppContext, subject: str) -> None:
    """List accepted connections."""
    app.emit(app.network.list_friends(subject))


@connect.command(
    examples="""\
  profnet connect count --as alice""",
)
@acting_as
@click.pass_obj
def count(app: AppContext, subject: str) -> None:
    """Count accepted requests you sent."""
    app.emit(app.network.friend_count(subject))


@connect.command(
    examples="""\
  profnet connect incoming --as bob""",
)
@acting_as
@click.pass_obj
def incoming(app: AppContext, subject: str) -> None:
    """List pending requests waiting for your answer."""
    app.emit(app.network.list_incoming(subject))


@connect.command(
    "is-friend",
    examples="""\
  profnet connect is-friend alice bob""",
)
@click.argument("a")
@click.argument("b")
@click.pass_obj
def is_friend(app: AppContext, a: str, b: str) -> None:
    """Show whether A and B are connected."""
    app.emit(app.network.is_friend(a, b))
