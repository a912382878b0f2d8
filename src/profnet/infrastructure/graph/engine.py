"""GraphEngine — NetworkX view of connection edges.

Built from the connection rows visible to a given ``Connection``, so a
graph loaded inside a store transaction reflects that transaction's state.
At networking-app scale (< 100K edges) a full load is cheap, and it only
happens for requesters whose direct quota is exhausted.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING, TypeAlias

import networkx as nx
from sqlalchemy import select

from profnet.infrastructure.database.schema import connections

if TYPE_CHECKING:
    from sqlalchemy import Connection

_Graph: TypeAlias = nx.DiGraph


class GraphEngine:
    """Directed graph of connection edges, requester → target."""

    def __init__(self, graph: _Graph) -> None:
        self._graph = graph

    @classmethod
    def load(cls, conn: Connection, *, statuses: Collection[str] | None = None) -> GraphEngine:
        """Build the graph from ``connections`` rows.

        Args:
            conn: Connection to read through (usually the active transaction).
            statuses: Only include edges whose status is in this set.
                ``None`` includes every edge.
        """
        stmt = select(connections.c.requester_id, connections.c.target_id, connections.c.status)
        if statuses is not None:
            stmt = stmt.where(connections.c.status.in_(list(statuses)))

        g: _Graph = nx.DiGraph()
        for row in conn.execute(stmt):
            g.add_edge(row.requester_id, row.target_id, status=row.status)
        return cls(g)

    @property
    def graph(self) -> _Graph:
        return self._graph

    def successors(self, node: str) -> set[str]:
        """Targets of *node*'s outgoing edges (empty for unknown nodes)."""
        if node not in self._graph:
            return set()
        return set(self._graph.successors(node))

    def frontier(self, source: str, depth: int) -> set[str]:
        """Nodes reached by expanding *source*'s successors exactly *depth* times.

        This is a walk frontier, not a shortest-path ring: a node one hop
        away also belongs to the depth-2 frontier if some two-hop walk ends
        on it.
        """
        current = {source}
        for _ in range(depth):
            nxt: set[str] = set()
            for node in current:
                nxt |= self.successors(node)
            current = nxt
            if not current:
                break
        return current
