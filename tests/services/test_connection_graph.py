"""Tests for ConnectionGraph — eligibility and the request lifecycle."""

from __future__ import annotations

import pytest

from profnet.domain.connections import ConnectionStatus, Decision
from profnet.domain.errors import (
    DuplicateRequestError,
    NoSuchRequestError,
    NotInRequestedStateError,
    SelfRequestError,
    UnknownAccountError,
)
from profnet.infrastructure.store import Store, StoreTransaction
from profnet.services.graph import ConnectionGraph


def _accounts(txn: StoreTransaction, *ids: str) -> None:
    for account_id in ids:
        txn.insert_account(account_id, "t")


class TestEdgeQueries:
    def test_edge_status_absent(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b")
            assert ConnectionGraph(txn).edge_status("a", "b") is None

    def test_edge_is_directed(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b")
            graph = ConnectionGraph(txn)
            graph.create_request("a", "b")
            assert graph.edge_status("a", "b") is ConnectionStatus.REQUESTED
            assert graph.edge_status("b", "a") is None

    def test_direct_count_includes_every_status(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b", "c", "d")
            graph = ConnectionGraph(txn)
            for target in ("b", "c", "d"):
                graph.create_request("a", target)
            graph.respond("b", "a", Decision.ACCEPT)
            graph.respond("c", "a", Decision.REJECT)
            assert graph.direct_count("a") == 3
            assert graph.direct_count("b") == 0

    def test_friendship_is_symmetric(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b")
            graph = ConnectionGraph(txn)
            graph.create_request("a", "b")
            assert not graph.is_friend("a", "b")
            graph.respond("b", "a", Decision.ACCEPT)
            assert graph.is_friend("a", "b")
            assert graph.is_friend("b", "a")

    def test_friend_count_counts_accepted_outgoing(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b", "c")
            graph = ConnectionGraph(txn)
            graph.create_request("a", "b")
            graph.create_request("c", "a")
            graph.respond("b", "a", Decision.ACCEPT)
            graph.respond("a", "c", Decision.ACCEPT)
            assert graph.friend_count("a") == 1
            assert graph.list_friends("a") == ["b", "c"]

    def test_list_incoming(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b", "c", "d")
            graph = ConnectionGraph(txn)
            graph.create_request("c", "a")
            graph.create_request("b", "a")
            graph.create_request("d", "a")
            graph.respond("a", "d", Decision.REJECT)
            assert graph.list_incoming("a") == ["b", "c"]


class TestCanRequest:
    def test_self_request(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a")
            with pytest.raises(SelfRequestError):
                ConnectionGraph(txn).can_request("a", "a")

    @pytest.mark.parametrize(
        ("requester", "target", "role"), [("x", "a", "requester"), ("a", "x", "target")]
    )
    def test_unknown_account(self, store: Store, requester: str, target: str, role: str) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a")
            with pytest.raises(UnknownAccountError) as exc_info:
                ConnectionGraph(txn).can_request(requester, target)
        assert exc_info.value.detail == {"account": "x", "role": role}

    def test_under_quota(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b")
            e = ConnectionGraph(txn).can_request("a", "b")
        assert e.eligible
        assert e.reason == "under_quota"
        assert e.direct_count == 0

    def test_existing_edge(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b")
            graph = ConnectionGraph(txn)
            graph.create_request("a", "b")
            e = graph.can_request("a", "b")
        assert not e.eligible
        assert e.reason == "exists"
        assert e.existing_status is ConnectionStatus.REQUESTED

    def _fill(self, graph: ConnectionGraph, txn: StoreTransaction) -> None:
        fillers = [f"f{i}" for i in range(5)]
        _accounts(txn, "a", "c", *fillers)
        for filler in fillers:
            graph.create_request("a", filler)

    def test_quota_reached_unreachable(self, store: Store) -> None:
        with store.transaction() as txn:
            graph = ConnectionGraph(txn)
            self._fill(graph, txn)
            e = graph.can_request("a", "c")
        assert not e.eligible
        assert e.reason == "unreachable"
        assert e.direct_count == 5

    def test_quota_reached_reachable_via_pending_edges(self, store: Store) -> None:
        with store.transaction() as txn:
            graph = ConnectionGraph(txn)
            self._fill(graph, txn)
            graph.create_request("f2", "c")
            e = graph.can_request("a", "c")
        assert e.eligible
        assert e.reason == "reachable"

    def test_incoming_edges_do_not_extend_reach(self, store: Store) -> None:
        with store.transaction() as txn:
            graph = ConnectionGraph(txn)
            self._fill(graph, txn)
            graph.create_request("c", "f2")
            e = graph.can_request("a", "c")
        assert e.reason == "unreachable"

    def test_accepted_only_reach(self, store: Store) -> None:
        with store.transaction() as txn:
            graph = ConnectionGraph(txn, reach_accepted_only=True)
            self._fill(graph, txn)
            graph.create_request("f2", "c")
            assert graph.can_request("a", "c").reason == "unreachable"
            graph.respond("f2", "a", Decision.ACCEPT)
            graph.respond("c", "f2", Decision.ACCEPT)
            assert graph.can_request("a", "c").reason == "reachable"


class TestRespond:
    def test_accept(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b")
            graph = ConnectionGraph(txn)
            graph.create_request("a", "b")
            assert graph.respond("b", "a", Decision.ACCEPT) is ConnectionStatus.ACCEPTED
            assert graph.edge_status("a", "b") is ConnectionStatus.ACCEPTED

    def test_no_such_request(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b")
            graph = ConnectionGraph(txn)
            graph.create_request("a", "b")
            with pytest.raises(NoSuchRequestError):
                graph.respond("a", "b", Decision.ACCEPT)

    def test_answered_once(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b")
            graph = ConnectionGraph(txn)
            graph.create_request("a", "b")
            graph.respond("b", "a", Decision.REJECT)
            with pytest.raises(NotInRequestedStateError) as exc_info:
                graph.respond("b", "a", Decision.ACCEPT)
            assert graph.edge_status("a", "b") is ConnectionStatus.REJECTED
        assert exc_info.value.detail["status"] == "rejected"

    def test_duplicate_insert(self, store: Store) -> None:
        with store.transaction() as txn:
            _accounts(txn, "a", "b")
            graph = ConnectionGraph(txn)
            graph.create_request("a", "b")
            with pytest.raises(DuplicateRequestError):
                graph.create_request("a", "b")
