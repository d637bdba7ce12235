"""Tests for snapshot models: record parsing, lookups and trees."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from orgmap.domain.models import Edge, GraphSnapshot, Node, TreeNode
from orgmap.domain.types import NodeKind
from tests.conftest import make_snapshot, node_record, owned, scenario_edges, scenario_nodes


class TestNode:
    def test_parses_scraper_record(self) -> None:
        node = Node.model_validate(node_record(7, "api", "code", url="https://x"))
        assert node.id == "7"
        assert node.kind is NodeKind.LEAF_ITEM
        assert node.category == "code"
        assert node.color == "#cccccc"
        assert node.attributes["url"] == "https://x"

    def test_name_falls_back_to_data(self) -> None:
        node = Node.model_validate({"id": "1", "_data": {"type": "group", "name": "core"}})
        assert node.name == "core"

    def test_flat_record_round_trips(self) -> None:
        node = Node.model_validate(node_record(1, "G", "group"))
        assert Node.model_validate(node.to_record()) == node

    def test_unknown_category_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Node.model_validate({"id": 1, "name": "x", "_data": {"type": "wiki"}})

    def test_frozen(self) -> None:
        node = Node.model_validate(node_record(1, "G", "group"))
        with pytest.raises(ValidationError):
            node.name = "other"  # type: ignore[misc]


class TestEdge:
    def test_wire_names(self) -> None:
        edge = Edge.model_validate({"from": 3, "to": 2, "label": "ownedby"})
        assert (edge.source, edge.target, edge.label) == ("3", "2", "ownedby")

    def test_id_used_as_source(self) -> None:
        edge = Edge.model_validate({"id": 5, "to": 1, "label": "ownedby"})
        assert edge.source == "5"

    def test_missing_target(self) -> None:
        edge = Edge.model_validate({"from": 4, "label": "ownedby"})
        assert edge.target is None
        assert edge.to_record()["to"] is None

    def test_extra_keys_kept_as_attributes(self) -> None:
        edge = Edge.model_validate({"from": 1, "to": 2, "label": "x", "arrows": "to"})
        assert edge.attributes == {"arrows": "to"}
        assert edge.to_record()["attributes"] == {"arrows": "to"}


class TestGraphSnapshot:
    def test_from_payload_shapes(self) -> None:
        nodes, edges = scenario_nodes(), scenario_edges()
        for payload in (
            {"nodes": nodes, "edges": edges},
            {"Body": {"nodes": nodes, "edges": edges}},
            [nodes, edges],
        ):
            snap = GraphSnapshot.from_payload(payload, dataset="d")
            assert snap.dataset == "d"
            assert len(snap.nodes) == 3
            assert len(snap.edges) == 2

    def test_from_payload_rejects_unknown_shape(self) -> None:
        with pytest.raises(ValueError, match="nodes"):
            GraphSnapshot.from_payload({"items": []})

    def test_lookups(self, scenario_snapshot: GraphSnapshot) -> None:
        assert scenario_snapshot.node("2").name == "S"
        assert scenario_snapshot.node("99") is None
        assert scenario_snapshot.node(None) is None
        assert [n.id for n in scenario_snapshot.nodes_named("P")] == ["3"]
        assert [n.id for n in scenario_snapshot.of_kind(NodeKind.GROUP)] == ["1"]

    def test_duplicate_ids_are_ambiguous(self) -> None:
        snap = make_snapshot(
            [node_record(1, "a", "group"), node_record(1, "b", "subgroup")],
            [owned(1, 1)],
        )
        assert snap.ambiguous_ids == frozenset({"1"})
        assert snap.node("1") is None
        assert len(snap.nodes) == 2

    def test_to_payload(self, scenario_snapshot: GraphSnapshot) -> None:
        payload = scenario_snapshot.to_payload()
        assert [n["id"] for n in payload["nodes"]] == ["1", "2", "3"]
        assert payload["edges"][0] == {"from": "2", "to": "1", "label": "ownedby"}


class TestTreeNode:
    def test_to_dict_and_walk(self, scenario_snapshot: GraphSnapshot) -> None:
        g, s, p = scenario_snapshot.nodes
        tree = TreeNode(node=g, children=(TreeNode(node=s, children=(p,)),))
        assert [n.name for n in tree.walk()] == ["G", "S", "P"]

        d = tree.to_dict()
        assert d["node"]["name"] == "G"
        assert d["children"][0]["node"]["name"] == "S"
        assert d["children"][0]["children"][0]["name"] == "P"
