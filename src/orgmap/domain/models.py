"""Graph snapshot models: nodes, edges, snapshots and presentation trees.

All models are frozen. A :class:`GraphSnapshot` is validated once when it
is loaded from the store (or from a scraped dump) and is then only read.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from orgmap.domain.types import NodeKind


class Node(BaseModel):
    """A group, subgroup or leaf-item (project).

    Accepts the scraper record shape ``{id, name, color, _data: {type, ...}}``
    as well as the flat shape produced by :meth:`to_record`.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str
    name: str
    kind: NodeKind
    category: str
    color: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _from_record(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        raw = data.pop("_data", None)
        if isinstance(raw, dict):
            data.setdefault("attributes", dict(raw))
            data.setdefault("category", raw.get("type", ""))
            if raw.get("name") is not None:
                data.setdefault("name", raw["name"])
        if "category" not in data and "type" in data:
            data["category"] = data.pop("type")
        if "kind" not in data and data.get("category"):
            data["kind"] = NodeKind.from_category(str(data["category"]))
        if "category" not in data and "kind" in data:
            data["category"] = str(data["kind"])
        return data

    def to_record(self) -> dict[str, Any]:
        """Serialize as a JSON-ready record."""
        return self.model_dump(mode="json")


class Edge(BaseModel):
    """A directed relation ``source -> target`` (wire names ``from``/``to``).

    ``target`` may be missing: such an edge is kept but never traversed.
    Unknown record keys (vis.js styling and the like) are preserved in
    ``attributes``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    source: str = Field(alias="from")
    target: str | None = Field(default=None, alias="to")
    label: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _from_record(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        # The scraper encodes the source node id as the edge id.
        edge_id = data.pop("id", None)
        if "from" not in data and "source" not in data and edge_id is not None:
            data["from"] = edge_id
        known = {"from", "source", "to", "target", "label", "attributes"}
        extra = {k: data.pop(k) for k in list(data) if k not in known}
        if extra:
            data["attributes"] = {**extra, **data.get("attributes", {})}
        return data

    def to_record(self) -> dict[str, Any]:
        """Serialize with the ``from``/``to`` wire names."""
        record: dict[str, Any] = {"from": self.source, "to": self.target, "label": self.label}
        if self.attributes:
            record["attributes"] = dict(self.attributes)
        return record


class GraphSnapshot(BaseModel):
    """Immutable set of nodes and edges for one dataset at one point in time."""

    model_config = ConfigDict(frozen=True)

    dataset: str = "default"
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    loaded_at: str | None = None

    _by_id: dict[str, Node] = PrivateAttr(default_factory=dict)
    _ambiguous_ids: frozenset[str] = PrivateAttr(default=frozenset())

    def model_post_init(self, __context: Any) -> None:
        by_id: dict[str, Node] = {}
        ambiguous: set[str] = set()
        for node in self.nodes:
            if node.id in by_id:
                ambiguous.add(node.id)
            by_id[node.id] = node
        for node_id in ambiguous:
            del by_id[node_id]
        self._by_id = by_id
        self._ambiguous_ids = frozenset(ambiguous)

    @classmethod
    def from_payload(cls, payload: Any, *, dataset: str = "default") -> GraphSnapshot:
        """Build a snapshot from a scraped dump.

        Accepts ``{"nodes": [...], "edges": [...]}``, the cache envelope
        ``{"Body": {...}}`` and the two-element list ``[nodes, edges]``.

        Raises:
            ValueError: If the payload has none of these shapes, or a
                record fails validation.
        """
        if isinstance(payload, dict) and isinstance(payload.get("Body"), dict):
            payload = payload["Body"]
        if isinstance(payload, list) and len(payload) == 2:
            payload = {"nodes": payload[0], "edges": payload[1]}
        if not isinstance(payload, dict) or "nodes" not in payload:
            msg = "Snapshot payload must provide 'nodes' and 'edges'"
            raise ValueError(msg)
        return cls.model_validate(
            {
                "dataset": dataset,
                "nodes": payload.get("nodes") or [],
                "edges": payload.get("edges") or [],
                "loaded_at": payload.get("loaded_at"),
            }
        )

    def node(self, node_id: str | None) -> Node | None:
        """Return the node with *node_id*, or None if absent or duplicated."""
        if node_id is None:
            return None
        return self._by_id.get(str(node_id))

    def nodes_named(self, name: str) -> list[Node]:
        """All nodes whose name matches *name* exactly."""
        return [n for n in self.nodes if n.name == name]

    def of_kind(self, kind: NodeKind) -> list[Node]:
        return [n for n in self.nodes if n.kind is kind]

    @property
    def ambiguous_ids(self) -> frozenset[str]:
        return self._ambiguous_ids

    def to_payload(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_record() for n in self.nodes],
            "edges": [e.to_record() for e in self.edges],
        }


class TreeNode(BaseModel):
    """Presentation tree node: a container and its ordered children.

    Children are leaf-item :class:`Node` objects or nested ``TreeNode``
    objects. An ownerless leaf-item at the top of the forest is wrapped in
    a ``TreeNode`` with no children.
    """

    model_config = ConfigDict(frozen=True)

    node: Node
    children: tuple[Node | TreeNode, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        root: dict[str, Any] = {"node": self.node.to_record(), "children": []}
        pending: list[tuple[TreeNode, dict[str, Any]]] = [(self, root)]
        while pending:
            tree, out = pending.pop()
            for child in tree.children:
                if isinstance(child, TreeNode):
                    entry: dict[str, Any] = {"node": child.node.to_record(), "children": []}
                    out["children"].append(entry)
                    pending.append((child, entry))
                else:
                    out["children"].append(child.to_record())
        return root

    def walk(self) -> list[Node]:
        """Every node in this tree, depth-first, the container first."""
        found: list[Node] = []
        pending: list[Node | TreeNode] = [self]
        while pending:
            item = pending.pop()
            if isinstance(item, TreeNode):
                found.append(item.node)
                pending.extend(reversed(item.children))
            else:
                found.append(item)
        return found


TreeNode.model_rebuild()
