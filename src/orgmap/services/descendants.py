"""DescendantService: the anchored subgraph behind the graph view.

Given an anchor name, collect the ancestor chain up to the root, the
anchor itself and its whole descendant subtree, plus every containment
edge among those nodes. The result is reported as-is: a subgraph that is
not a single rooted tree is flagged, never repaired.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from orgmap.domain.errors import AnchorNotFoundError, CycleDetectedError
from orgmap.domain.models import Edge, GraphSnapshot, Node
from orgmap.domain.types import OWNEDBY, ErrorCode
from orgmap.infrastructure.graph.engine import GraphEngine
from orgmap.services._helpers import walk
from orgmap.services.base import BaseService
from orgmap.services.result import ServiceResult
from orgmap.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Subgraph:
    """Flat node and edge lists around one anchor."""

    anchor: Node
    nodes: list[Node]
    edges: list[Edge]

    @property
    def proper_tree(self) -> bool:
        """One connected component with one root: ``len(nodes) - 1 == len(edges)``."""
        return len(self.nodes) - 1 == len(self.edges)

    def to_dict(self) -> dict[str, Any]:
        return {
            "anchor": self.anchor.to_record(),
            "node_count": len(self.nodes),
            "edge_count": len(self.edges),
            "proper_tree": self.proper_tree,
            "nodes": [n.to_record() for n in self.nodes],
            "edges": [e.to_record() for e in self.edges],
        }


def resolve(
    snapshot: GraphSnapshot,
    anchor_name: str,
    *,
    containment_labels: Iterable[str] = (OWNEDBY,),
    engine: GraphEngine | None = None,
) -> Subgraph:
    """Resolve the subgraph around the node named *anchor_name*.

    Raises:
        AnchorNotFoundError: If zero or several nodes carry the name.
        CycleDetectedError: If the containment edges loop above or below
            the anchor.
    """
    matches = snapshot.nodes_named(anchor_name)
    if len(matches) != 1:
        raise AnchorNotFoundError(anchor_name, len(matches))
    anchor = matches[0]

    if engine is None:
        engine = GraphEngine(snapshot, containment_labels=containment_labels)

    descendants = walk(anchor.id, engine.child_edges, set())
    ancestors = walk(anchor.id, engine.owner_edges, set())

    ordered: list[str] = [*reversed(ancestors), anchor.id, *descendants]
    member_ids: set[str] = set()
    members: list[Node] = []
    for node_id in ordered:
        node = snapshot.node(node_id)
        if node is None:
            # Anchor with a duplicated id: it is not part of the containment graph
            node = anchor
        if node_id not in member_ids:
            member_ids.add(node_id)
            members.append(node)

    links = [
        e
        for e in snapshot.edges
        if engine.is_containment(e)
        and e.source in member_ids
        and e.target in member_ids
        and snapshot.node(e.source) is not None
        and snapshot.node(e.target) is not None
    ]
    return Subgraph(anchor=anchor, nodes=members, edges=links)


class DescendantService(BaseService):
    """Anchored subgraphs for the graph view."""

    @traced
    def resolve(self, name: str | None) -> ServiceResult:
        """Resolve the subgraph around *name* without judging its shape."""
        return self._resolve("resolve", name)

    @traced
    def tree(self, name: str | None = None) -> ServiceResult:
        """Graph view payload: the full snapshot, or the subgraph around *name*.

        A named subgraph whose node and edge counts do not describe a
        single rooted tree fails with ``MALFORMED_SUBGRAPH``: parallel
        containment edges, or a node reached through two owners that share
        an ancestor.
        """
        op = "tree"
        if not name:
            snapshot = self._fetch_snapshot(op)
            if isinstance(snapshot, ServiceResult):
                return snapshot
            payload = snapshot.to_payload()
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "anchor": None,
                    "node_count": len(payload["nodes"]),
                    "edge_count": len(payload["edges"]),
                    **payload,
                },
            )

        result = self._resolve(op, name)
        if not result.ok or result.data["proper_tree"]:
            return result

        n, m = result.data["node_count"], result.data["edge_count"]
        return ServiceResult.failure(
            op,
            ErrorCode.MALFORMED_SUBGRAPH,
            f"Subgraph around '{name}' is not a single rooted tree "
            f"({n} nodes, {m} containment edges; expected {n - 1})",
            anchor=name,
            node_count=n,
            edge_count=m,
        )

    def _resolve(self, op: str, name: str | None) -> ServiceResult:
        if not name:
            return ServiceResult.failure(
                op, ErrorCode.UNPROCESSABLE, "An anchor name is required"
            )

        snapshot = self._fetch_snapshot(op)
        if isinstance(snapshot, ServiceResult):
            return snapshot

        with trace_span("resolve_subgraph") as span:
            try:
                subgraph = resolve(snapshot, name, engine=self._engine_for(snapshot))
            except AnchorNotFoundError as exc:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, str(exc), anchor=name, matches=exc.matches
                )
            except CycleDetectedError as exc:
                logger.warning("Containment cycle around %s: %s", name, exc.cycle)
                return ServiceResult.failure(
                    op, ErrorCode.CYCLE_DETECTED, str(exc), anchor=name, cycle=exc.cycle
                )
            if span:
                span.annotate("nodes", len(subgraph.nodes))
                span.annotate("edges", len(subgraph.edges))

        return ServiceResult(ok=True, op=op, data=subgraph.to_dict())
