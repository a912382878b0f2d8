"""Tests for NetworkService — accounts and connection workflows."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from profnet.config.models import NetworkConfig
from profnet.config.settings import NetSettings
from profnet.domain.connections import Decision
from profnet.infrastructure.store import Store
from profnet.services.network import NetworkService
from tests.conftest import befriend, create_accounts, fill_quota, request


class TestCreateAccount:
    def test_create(self, service: NetworkService) -> None:
        result = service.create_account("alice")
        assert result.ok
        assert result.op == "create_account"
        assert result.data == {"id": "alice"}

    def test_duplicate(self, service: NetworkService) -> None:
        service.create_account("alice")
        result = service.create_account("alice")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ACCOUNT_EXISTS"

    @pytest.mark.parametrize("bad", ["", "with space", "x" * 51])
    def test_invalid(self, service: NetworkService, bad: str) -> None:
        result = service.create_account(bad)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_ACCOUNT"


class TestRequestConnection:
    def test_request(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        result = service.request_connection("a", "b")
        assert result.ok
        assert result.data == {
            "requester": "a",
            "target": "b",
            "status": "requested",
            "reason": "under_quota",
        }
        assert result.warnings == []

    def test_self_request(self, service: NetworkService) -> None:
        create_accounts(service, "a")
        result = service.request_connection("a", "a")
        assert result.error is not None
        assert result.error.code == "SELF_REQUEST"

    def test_unknown_target(self, service: NetworkService) -> None:
        create_accounts(service, "a")
        result = service.request_connection("a", "ghost")
        assert result.error is not None
        assert result.error.code == "UNKNOWN_ACCOUNT"
        assert result.error.detail["role"] == "target"

    def test_duplicate(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        result = service.request_connection("a", "b")
        assert result.error is not None
        assert result.error.code == "DUPLICATE_REQUEST"
        assert result.error.detail["status"] == "requested"

    def test_rejected_pair_cannot_retry(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        service.respond_to_request("b", "a", Decision.REJECT)
        result = service.request_connection("a", "b")
        assert result.error is not None
        assert result.error.code == "DUPLICATE_REQUEST"
        assert result.error.detail["status"] == "rejected"

    def test_reverse_request_is_allowed_with_warning(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        result = service.request_connection("b", "a")
        assert result.ok
        assert result.warnings == ["a has a pending request to you"]

    def test_sixth_request_needs_reach(self, service: NetworkService) -> None:
        create_accounts(service, "a", "c")
        fill_quota(service, "a")
        result = service.request_connection("a", "c")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_ELIGIBLE"
        assert result.error.detail["direct_count"] == 5

    def test_sixth_request_through_connection_of_connection(
        self, service: NetworkService
    ) -> None:
        create_accounts(service, "a", "c")
        fillers = fill_quota(service, "a")
        request(service, fillers[0], "c")
        result = service.request_connection("a", "c")
        assert result.ok
        assert result.data["reason"] == "reachable"

    def test_failed_request_leaves_no_edge(self, service: NetworkService) -> None:
        create_accounts(service, "a", "c")
        fill_quota(service, "a")
        service.request_connection("a", "c")
        status = service.request_status("a", "c")
        assert status.data["status"] is None


class TestAcceptedOnlyReach:
    @pytest.fixture
    def strict_service(self, tmp_path: Path) -> Generator[NetworkService]:
        settings = NetSettings.from_cli(
            root=tmp_path, network=NetworkConfig(reach_accepted_only=True)
        )
        store = Store(settings)
        yield NetworkService(store)
        store.close()

    def test_pending_edges_do_not_count(self, strict_service: NetworkService) -> None:
        create_accounts(strict_service, "a", "c")
        fillers = fill_quota(strict_service, "a")
        request(strict_service, fillers[0], "c")
        result = strict_service.request_connection("a", "c")
        assert result.error is not None
        assert result.error.code == "NOT_ELIGIBLE"

    def test_accepted_path(self, strict_service: NetworkService) -> None:
        create_accounts(strict_service, "a", "c")
        fillers = fill_quota(strict_service, "a")
        strict_service.respond_to_request(fillers[0], "a", Decision.ACCEPT)
        befriend(strict_service, fillers[0], "c")
        result = strict_service.request_connection("a", "c")
        assert result.ok
        assert result.data["reason"] == "reachable"


class TestCanRequest:
    def test_reports_without_writing(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        result = service.can_request("a", "b")
        assert result.ok
        assert result.data["eligible"] is True
        assert result.data["reason"] == "under_quota"
        assert service.request_status("a", "b").data["status"] is None

    def test_existing(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        result = service.can_request("a", "b")
        assert result.data["eligible"] is False
        assert result.data["existing_status"] == "requested"


class TestRespondToRequest:
    def test_accept(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        result = service.respond_to_request("b", "a", Decision.ACCEPT)
        assert result.ok
        assert result.data == {"requester": "a", "responder": "b", "status": "accepted"}
        assert service.is_friend("a", "b").data["is_friend"] is True

    def test_accepts_plain_string(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        result = service.respond_to_request("b", "a", "reject")
        assert result.data["status"] == "rejected"

    def test_unknown_decision(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        result = service.respond_to_request("b", "a", "maybe")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_DECISION"
        assert result.error.detail == {"decision": "maybe"}
        assert service.request_status("a", "b").data["status"] == "requested"

    def test_requester_cannot_answer_own_request(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        result = service.respond_to_request("a", "b", Decision.ACCEPT)
        assert result.error is not None
        assert result.error.code == "NO_SUCH_REQUEST"

    def test_second_answer_fails(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        service.respond_to_request("b", "a", Decision.ACCEPT)
        result = service.respond_to_request("b", "a", Decision.REJECT)
        assert result.error is not None
        assert result.error.code == "NOT_IN_REQUESTED_STATE"
        assert service.request_status("a", "b").data["status"] == "accepted"


class TestQueries:
    def test_request_status(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b")
        request(service, "a", "b")
        assert service.request_status("a", "b").data["status"] == "requested"
        assert service.request_status("b", "a").data["status"] is None

    def test_friend_listing(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b", "c", "d")
        befriend(service, "a", "b")
        befriend(service, "c", "a")
        request(service, "a", "d")

        friends = service.list_friends("a")
        assert friends.data == {"items": [{"id": "b"}, {"id": "c"}], "count": 2}
        assert service.friend_count("a").data == {"id": "a", "count": 1}
        assert service.is_friend("c", "a").data["is_friend"] is True
        assert service.is_friend("a", "d").data["is_friend"] is False

    def test_list_incoming(self, service: NetworkService) -> None:
        create_accounts(service, "a", "b", "c")
        request(service, "c", "a")
        request(service, "b", "a")
        result = service.list_incoming("a")
        assert result.data == {"items": [{"id": "b"}, {"id": "c"}], "count": 2}
