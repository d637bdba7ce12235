"""HierarchyService: the full group/subgroup/project forest for the list view.

Each group becomes a root whose subgroups are expanded depth-first with an
explicit stack, so nesting depth is bounded by memory rather than by the
interpreter's recursion limit. Each project without a container becomes a
root of its own. The ids on the current expansion path are tracked, so a
containment loop between subgroups is reported as ``CYCLE_DETECTED``.

Projects never own anything in the list view. A project whose only owner
is itself is shown at top level with a warning; the graph view's resolver
follows that same edge and reports the loop as ``CYCLE_DETECTED``.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from orgmap.domain.errors import CycleDetectedError
from orgmap.domain.models import Edge, GraphSnapshot, Node, TreeNode
from orgmap.domain.types import OWNEDBY, ErrorCode, NodeKind
from orgmap.infrastructure.graph.engine import GraphEngine
from orgmap.services._helpers import (
    direct_children_of,
    is_container,
    is_leaf_item,
    is_subgroup,
    owners_of,
    walk,
)
from orgmap.services.base import BaseService
from orgmap.services.result import ServiceResult
from orgmap.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


@dataclass
class Forest:
    """Roots of the hierarchy view plus what was noticed while building it."""

    roots: list[TreeNode] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": len(self.roots),
            "roots": [r.to_dict() for r in self.roots],
            "stats": dict(self.stats),
        }


class _Builder:
    """Single-use forest assembly over one containment graph.

    A subgroup is expanded once. Any later placement of it (containment
    edges that do not form a forest) attaches a childless reference to it,
    so the forest stays linear in the size of the snapshot.
    """

    def __init__(self, engine: GraphEngine) -> None:
        self._engine = engine
        self._built: dict[str, TreeNode] = {}
        self._placements: Counter[str] = Counter()

    def expand(self, node: Node) -> TreeNode:
        """Attach the direct children of *node*, expanding subgroups depth-first.

        Raises:
            CycleDetectedError: If a subgroup is reached again while it is
                still being expanded.
        """
        if node.id in self._built:
            return self._built[node.id]

        path: list[str] = [node.id]
        frames: list[tuple[Node, Iterator[Node], list[Node | TreeNode]]] = [
            (node, iter(direct_children_of(self._engine, node.id)), [])
        ]
        while True:
            current, pending, children = frames[-1]
            child = next(pending, None)
            if child is None:
                built = TreeNode(node=current, children=tuple(children))
                self._built[current.id] = built
                frames.pop()
                path.pop()
                if not frames:
                    return built
                frames[-1][2].append(built)
            elif is_leaf_item(child):
                self._placements[child.id] += 1
                children.append(child)
            elif is_subgroup(child):
                if child.id in path:
                    raise CycleDetectedError([*path[path.index(child.id) :], child.id])
                self._placements[child.id] += 1
                if child.id in self._built:
                    children.append(TreeNode(node=child))
                else:
                    path.append(child.id)
                    frames.append((child, iter(direct_children_of(self._engine, child.id)), []))

    def build(self, *, promote_orphan_subgroups: bool) -> Forest:
        snap = self._engine.snapshot
        forest = Forest()

        for group in snap.of_kind(NodeKind.GROUP):
            forest.roots.append(self.expand(group))

        for leaf in snap.of_kind(NodeKind.LEAF_ITEM):
            owners = owners_of(self._engine, leaf.id)
            if any(is_container(o) for o in owners):
                continue
            if any(o.id == leaf.id for o in owners):
                forest.warnings.append(
                    f"Project '{leaf.name}' is owned by itself; shown at top level"
                )
            self._placements[leaf.id] += 1
            forest.roots.append(TreeNode(node=leaf))

        subgroups = snap.of_kind(NodeKind.SUBGROUP)
        for sg in subgroups:
            if sg.id in self._built:
                continue
            if any(is_container(o) for o in owners_of(self._engine, sg.id)):
                continue
            if promote_orphan_subgroups:
                forest.warnings.append(f"Subgroup '{sg.name}' has no owner; shown at top level")
                forest.roots.append(self.expand(sg))
            else:
                forest.warnings.append(f"Subgroup '{sg.name}' has no owner; omitted")

        for sg in subgroups:
            if sg.id not in self._built:
                # Owned, yet never reached from a root: look for a loop above it
                walk(sg.id, self._container_owner_edges, set())

        leaves = snap.of_kind(NodeKind.LEAF_ITEM)
        for node in (*subgroups, *leaves):
            count = self._placements[node.id]
            if count > 1:
                forest.warnings.append(
                    f"'{node.name}' appears under {count} containers; "
                    "containment edges do not form a forest"
                )

        forest.stats = {
            "groups": len(snap.of_kind(NodeKind.GROUP)),
            "subgroups": len(subgroups),
            "leaf_items": len(leaves),
            "placed_leaf_items": sum(1 for n in leaves if self._placements[n.id]),
        }
        return forest

    def _container_owner_edges(self, node_id: str) -> list[tuple[str, Edge]]:
        snap = self._engine.snapshot
        return [
            (owner, edge)
            for owner, edge in self._engine.owner_edges(node_id)
            if is_container(snap.node(owner))
        ]


def build_forest(
    snapshot: GraphSnapshot,
    *,
    containment_labels: Iterable[str] = (OWNEDBY,),
    promote_orphan_subgroups: bool = True,
    engine: GraphEngine | None = None,
) -> Forest:
    """Assemble the hierarchy forest for *snapshot*.

    Raises:
        CycleDetectedError: If subgroups own each other in a loop.
    """
    if engine is None:
        engine = GraphEngine(snapshot, containment_labels=containment_labels)
    return _Builder(engine).build(promote_orphan_subgroups=promote_orphan_subgroups)


class HierarchyService(BaseService):
    """Builds the list view of the whole dataset."""

    def __init__(self, *args: Any, promote_orphan_subgroups: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._promote = promote_orphan_subgroups

    @traced
    def build_forest(self) -> ServiceResult:
        """Group every node of the current snapshot into the hierarchy forest."""
        op = "hierarchy"
        snapshot = self._fetch_snapshot(op)
        if isinstance(snapshot, ServiceResult):
            return snapshot

        with trace_span("build_forest") as span:
            try:
                forest = build_forest(
                    snapshot,
                    engine=self._engine_for(snapshot),
                    promote_orphan_subgroups=self._promote,
                )
            except CycleDetectedError as exc:
                logger.warning("Containment cycle in %s: %s", self.dataset, exc.cycle)
                return ServiceResult.failure(
                    op, ErrorCode.CYCLE_DETECTED, str(exc), cycle=exc.cycle
                )
            if span:
                span.annotate("roots", len(forest.roots))

        return ServiceResult(ok=True, op=op, data=forest.to_dict(), warnings=forest.warnings)
