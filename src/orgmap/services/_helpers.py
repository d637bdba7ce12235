"""Shared node classification and containment helpers.

Every traversal in the resolver and the hierarchy builder goes through
these functions instead of filtering edges and checking kinds inline.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from orgmap.domain.errors import CycleDetectedError
from orgmap.domain.types import NodeKind

if TYPE_CHECKING:
    from orgmap.domain.models import Edge, Node
    from orgmap.infrastructure.graph.engine import GraphEngine

type Neighbours = Callable[[str], list[tuple[str, Edge]]]


def now_iso() -> str:
    """Current UTC time as standard ISO 8601."""
    return datetime.now(UTC).isoformat()


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def is_group(node: Node | None) -> bool:
    return node is not None and node.kind is NodeKind.GROUP


def is_subgroup(node: Node | None) -> bool:
    return node is not None and node.kind is NodeKind.SUBGROUP


def is_leaf_item(node: Node | None) -> bool:
    return node is not None and node.kind is NodeKind.LEAF_ITEM


def is_container(node: Node | None) -> bool:
    """Groups and subgroups can own other nodes; leaf-items cannot."""
    return is_group(node) or is_subgroup(node)


# ---------------------------------------------------------------------------
# Containment lookups
# ---------------------------------------------------------------------------


def direct_children_of(engine: GraphEngine, node_id: str) -> list[Node]:
    """Nodes directly owned by *node_id*, in edge order, each listed once."""
    return _resolve_unique(engine, engine.child_edges(node_id))


def owners_of(engine: GraphEngine, node_id: str) -> list[Node]:
    """Nodes that *node_id* is directly owned by, in edge order, each listed once."""
    return _resolve_unique(engine, engine.owner_edges(node_id))


def _resolve_unique(engine: GraphEngine, pairs: list[tuple[str, Edge]]) -> list[Node]:
    found: list[Node] = []
    seen: set[str] = set()
    for other_id, _edge in pairs:
        if other_id in seen:
            continue
        node = engine.snapshot.node(other_id)
        if node is not None:
            seen.add(other_id)
            found.append(node)
    return found


def walk(start: str, neighbours: Neighbours, visited: set[str]) -> list[str]:
    """Depth-first walk from *start*, returning newly visited ids in preorder.

    *visited* is shared with the caller and updated in place; nodes already
    in it are not entered again. Reaching a node that is still on the
    current path means the containment edges loop back on themselves. The
    walk keeps its own stack, so any depth of nesting is accepted.

    Raises:
        CycleDetectedError: With the offending path, ending where it started.
    """
    path: list[str] = [start]
    on_path: set[str] = {start}
    found: list[str] = []
    visited.add(start)
    stack: list[Iterator[tuple[str, Edge]]] = [iter(neighbours(start))]

    while stack:
        step = next(stack[-1], None)
        if step is None:
            stack.pop()
            on_path.discard(path.pop())
            continue
        nxt = step[0]
        if nxt in on_path:
            raise CycleDetectedError([*path[path.index(nxt) :], nxt])
        if nxt in visited:
            continue
        visited.add(nxt)
        found.append(nxt)
        path.append(nxt)
        on_path.add(nxt)
        stack.append(iter(neighbours(nxt)))

    return found
