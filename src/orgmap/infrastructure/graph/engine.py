"""GraphEngine: lazy-built NetworkX view of a snapshot's containment edges.

Built per snapshot, never cached across requests. Only edges whose label
is a containment label and whose endpoints both resolve to exactly one
node are added; everything else is inert for traversal. Edges point from
child to owner, keyed by their position in the snapshot so that
enumeration order can be recovered.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import networkx as nx

from orgmap.domain.types import OWNEDBY

if TYPE_CHECKING:
    from orgmap.domain.models import Edge, GraphSnapshot

type _Graph = nx.MultiDiGraph


class GraphEngine:
    """Containment graph over one immutable snapshot."""

    def __init__(
        self,
        snapshot: GraphSnapshot,
        *,
        containment_labels: Iterable[str] = (OWNEDBY,),
    ) -> None:
        self._snapshot = snapshot
        self._labels = frozenset(containment_labels)
        self._graph: _Graph | None = None

    @property
    def snapshot(self) -> GraphSnapshot:
        return self._snapshot

    @property
    def containment_labels(self) -> frozenset[str]:
        return self._labels

    @property
    def graph(self) -> _Graph:
        """Return the containment graph, building it on first access."""
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def is_containment(self, edge: Edge) -> bool:
        return edge.label in self._labels

    def child_edges(self, node_id: str) -> list[tuple[str, Edge]]:
        """``(child_id, edge)`` pairs for edges owned by *node_id*, in snapshot order."""
        g = self.graph
        if node_id not in g:
            return []
        found = sorted(g.in_edges(node_id, keys=True, data="edge"), key=lambda e: e[2])
        return [(child, edge) for child, _owner, _pos, edge in found]

    def owner_edges(self, node_id: str) -> list[tuple[str, Edge]]:
        """``(owner_id, edge)`` pairs for containment edges leaving *node_id*."""
        g = self.graph
        if node_id not in g:
            return []
        found = sorted(g.out_edges(node_id, keys=True, data="edge"), key=lambda e: e[2])
        return [(owner, edge) for _child, owner, _pos, edge in found]

    def _build(self) -> _Graph:
        snap = self._snapshot
        g: _Graph = nx.MultiDiGraph()
        for node in snap.nodes:
            if snap.node(node.id) is not None:
                g.add_node(node.id, kind=str(node.kind), name=node.name)

        for position, edge in enumerate(snap.edges):
            if not self.is_containment(edge):
                continue
            if edge.source not in g or edge.target is None or edge.target not in g:
                continue
            g.add_edge(edge.source, edge.target, key=position, edge=edge)
        return g
