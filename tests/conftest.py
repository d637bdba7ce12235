"""Shared pytest fixtures and test helpers for orgmap tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from orgmap.domain.models import GraphSnapshot
from orgmap.infrastructure.store import SnapshotStore
from orgmap.services.telemetry import disable_telemetry

# ---------------------------------------------------------------------------
# Record builders (scraper dump shape)
# ---------------------------------------------------------------------------


def node_record(node_id: int | str, name: str, category: str, **data: Any) -> dict[str, Any]:
    """A node as the scraper emits it: ``{id, name, color, _data: {type, ...}}``."""
    return {
        "id": node_id,
        "name": name,
        "color": "#cccccc",
        "_data": {"type": category, "name": name, **data},
    }


def owned(child: int | str, owner: int | str | None) -> dict[str, Any]:
    """A containment edge ``child ownedby owner`` (the scraper sets ``id`` to the child)."""
    return {"id": child, "from": child, "to": owner, "label": "ownedby"}


def make_snapshot(
    nodes: list[dict[str, Any]],
    edges: list[dict[str, Any]],
    *,
    dataset: str = "default",
) -> GraphSnapshot:
    return GraphSnapshot.from_payload({"nodes": nodes, "edges": edges}, dataset=dataset)


def scenario_nodes() -> list[dict[str, Any]]:
    """Group G (1) owns subgroup S (2), which owns project P (3)."""
    return [
        node_record(1, "G", "group"),
        node_record(2, "S", "subgroup"),
        node_record(
            3,
            "P",
            "code",
            description="Payment service",
            url="https://git.example.com/g/s/p",
            langs=[{"name": "Python", "percent": 87.5}, {"name": "Shell", "percent": 12.5}],
            add=[{"file": "README.md", "message": "missing README"}],
        ),
    ]


def scenario_edges() -> list[dict[str, Any]]:
    return [owned(2, 1), owned(3, 2)]


def chain_snapshot(depth: int) -> GraphSnapshot:
    """Group ``G`` over *depth* nested subgroups ``S1..Sn``, with project ``P`` at the bottom."""
    nodes = [node_record("g", "G", "group")]
    edges: list[dict[str, Any]] = []
    owner = "g"
    for i in range(1, depth + 1):
        nodes.append(node_record(f"s{i}", f"S{i}", "subgroup"))
        edges.append(owned(f"s{i}", owner))
        owner = f"s{i}"
    nodes.append(node_record("p", "P", "code"))
    edges.append(owned("p", owner))
    return make_snapshot(nodes, edges)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    """Undo the process-wide state a CLI run leaves behind."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    disable_telemetry()
    structlog.contextvars.clear_contextvars()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def store(tmp_path: Path) -> Iterator[SnapshotStore]:
    """An empty snapshot store in a temp directory."""
    s = SnapshotStore.open(tmp_path / "orgmap.db")
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def scenario_snapshot() -> GraphSnapshot:
    return make_snapshot(scenario_nodes(), scenario_edges())


@pytest.fixture
def loaded_store(store: SnapshotStore, scenario_snapshot: GraphSnapshot) -> SnapshotStore:
    """Store with the G/S/P scenario loaded as the default dataset."""
    store.replace_snapshot(scenario_snapshot, loaded_at="2026-01-01T00:00:00+00:00")
    return store


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change CWD to a temp workspace so the CLI uses an isolated store.

    Use via ``@pytest.mark.usefixtures("workspace")`` on command test
    classes; tests that need the path can request it directly.
    """
    monkeypatch.delenv("ORGMAP_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write_dump(directory: Path, nodes: list[dict[str, Any]], edges: list[dict[str, Any]]) -> Path:
    """Write a ``{"nodes", "edges"}`` dump file and return its path."""
    path = directory / "dump.json"
    path.write_text(json.dumps({"nodes": nodes, "edges": edges}), encoding="utf-8")
    return path


@pytest.fixture
def scenario_dump(tmp_path: Path) -> Path:
    return write_dump(tmp_path, scenario_nodes(), scenario_edges())
