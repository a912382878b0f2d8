"""Shared pytest fixtures and test helpers for profnet tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from profnet.config.settings import NetSettings
from profnet.domain.connections import Decision
from profnet.infrastructure.database.engine import init_database
from profnet.infrastructure.store import Store
from profnet.services.network import NetworkService
from profnet.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` CLI runs enable telemetry process-wide; switch it off again."""
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and profnet logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    net = logging.getLogger("profnet")
    net_level = net.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    net.setLevel(net_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "profnet.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store(tmp_path: Path) -> Generator[Store]:
    """Store on a fresh database in a temp directory."""
    s = Store(NetSettings.from_cli(root=tmp_path))
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def service(store: Store) -> NetworkService:
    return NetworkService(store)


@pytest.fixture
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp directory so it creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")``.
    """
    monkeypatch.chdir(tmp_path)
    for var in ("PROFNET_CONFIG", "PROFNET_DB", "PROFNET_AS"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def create_accounts(service: NetworkService, *account_ids: str) -> None:
    """Create accounts via NetworkService, asserting success."""
    for account_id in account_ids:
        result = service.create_account(account_id)
        assert result.ok, result.error


def request(service: NetworkService, requester: str, target: str) -> None:
    """Send a connection request, asserting success."""
    result = service.request_connection(requester, target)
    assert result.ok, result.error


def befriend(service: NetworkService, a: str, b: str) -> None:
    """Request from *a* to *b* and accept it as *b*."""
    request(service, a, b)
    result = service.respond_to_request(b, a, Decision.ACCEPT)
    assert result.ok, result.error


def fill_quota(service: NetworkService, requester: str, *, prefix: str = "filler") -> list[str]:
    """Give *requester* five outgoing requests to fresh accounts."""
    targets = [f"{prefix}{i}" for i in range(5)]
    create_accounts(service, *targets)
    for target in targets:
        request(service, requester, target)
    return targets
