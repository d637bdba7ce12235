"""SnapshotStore: the cache adapter that owns node and edge persistence.

Services never see SQL: they ask the store for a whole
:class:`GraphSnapshot` (or a single node by name or id) and work on that
immutable value. Each dataset is replaced wholesale when reloaded.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select

from orgmap.domain.models import Edge, GraphSnapshot, Node
from orgmap.infrastructure.database.engine import init_database
from orgmap.infrastructure.database.schema import datasets, edges, nodes

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy import Connection, Row
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class SnapshotUnavailableError(LookupError):
    """The requested dataset has not been populated yet."""

    def __init__(self, dataset: str) -> None:
        self.dataset = dataset
        super().__init__(f"Dataset '{dataset}' has not been loaded")


class SnapshotStore:
    """SQLite-backed store of graph snapshots keyed by dataset name."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def open(cls, db_path: Path) -> SnapshotStore:
        """Open (creating if needed) the store at *db_path*."""
        return cls(init_database(db_path))

    @property
    def engine(self) -> Engine:
        return self._engine

    def close(self) -> None:
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Query contract
    # ------------------------------------------------------------------

    def get_snapshot(self, dataset: str) -> GraphSnapshot:
        """Return the full snapshot for *dataset*.

        Raises:
            SnapshotUnavailableError: If the dataset was never loaded.
        """
        with self._engine.connect() as conn:
            meta = self._require_dataset(conn, dataset)
            node_rows = conn.execute(
                select(nodes).where(nodes.c.dataset == dataset).order_by(nodes.c.position)
            ).all()
            edge_rows = conn.execute(
                select(edges).where(edges.c.dataset == dataset).order_by(edges.c.position)
            ).all()

        snapshot = GraphSnapshot(
            dataset=dataset,
            nodes=tuple(_row_to_node(r) for r in node_rows),
            edges=tuple(_row_to_edge(r) for r in edge_rows),
            loaded_at=meta.loaded_at,
        )
        logger.debug(
            "Loaded snapshot %s: %d nodes, %d edges",
            dataset,
            len(snapshot.nodes),
            len(snapshot.edges),
        )
        return snapshot

    def find_node_by_name(self, dataset: str, name: str) -> Node | None:
        """Return the first node named *name*, or None."""
        with self._engine.connect() as conn:
            self._require_dataset(conn, dataset)
            row = conn.execute(
                select(nodes)
                .where(nodes.c.dataset == dataset, nodes.c.name == name)
                .order_by(nodes.c.position)
            ).first()
        return _row_to_node(row) if row is not None else None

    def find_node_by_id(self, dataset: str, node_id: str) -> Node | None:
        """Return the first node with id *node_id*, or None."""
        with self._engine.connect() as conn:
            self._require_dataset(conn, dataset)
            row = conn.execute(
                select(nodes)
                .where(nodes.c.dataset == dataset, nodes.c.id == str(node_id))
                .order_by(nodes.c.position)
            ).first()
        return _row_to_node(row) if row is not None else None

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def replace_snapshot(self, snapshot: GraphSnapshot, *, loaded_at: str) -> None:
        """Replace every node and edge of ``snapshot.dataset`` in one transaction."""
        key = snapshot.dataset
        with self._engine.begin() as conn:
            conn.execute(delete(edges).where(edges.c.dataset == key))
            conn.execute(delete(nodes).where(nodes.c.dataset == key))
            conn.execute(delete(datasets).where(datasets.c.key == key))

            conn.execute(
                insert(datasets).values(
                    key=key,
                    loaded_at=loaded_at,
                    node_count=len(snapshot.nodes),
                    edge_count=len(snapshot.edges),
                )
            )
            if snapshot.nodes:
                conn.execute(
                    insert(nodes),
                    [
                        {
                            "dataset": key,
                            "position": i,
                            "id": n.id,
                            "name": n.name,
                            "kind": str(n.kind),
                            "category": n.category,
                            "color": n.color,
                            "attributes": json.dumps(n.attributes),
                        }
                        for i, n in enumerate(snapshot.nodes)
                    ],
                )
            if snapshot.edges:
                conn.execute(
                    insert(edges),
                    [
                        {
                            "dataset": key,
                            "position": i,
                            "source_id": e.source,
                            "target_id": e.target,
                            "label": e.label,
                            "attributes": json.dumps(e.attributes) if e.attributes else None,
                        }
                        for i, e in enumerate(snapshot.edges)
                    ],
                )

    def datasets(self) -> list[dict[str, Any]]:
        """Summaries of every loaded dataset, ordered by key."""
        with self._engine.connect() as conn:
            rows = conn.execute(select(datasets).order_by(datasets.c.key)).mappings().all()
        return [dict(r) for r in rows]

    def has_dataset(self, dataset: str) -> bool:
        with self._engine.connect() as conn:
            count = conn.execute(
                select(func.count()).select_from(datasets).where(datasets.c.key == dataset)
            ).scalar_one()
        return bool(count)

    @staticmethod
    def _require_dataset(conn: Connection, dataset: str) -> Row[Any]:
        row = conn.execute(select(datasets).where(datasets.c.key == dataset)).first()
        if row is None:
            raise SnapshotUnavailableError(dataset)
        return row


def _row_to_node(row: Row[Any]) -> Node:
    return Node(
        id=row.id,
        name=row.name,
        kind=row.kind,
        category=row.category,
        color=row.color,
        attributes=json.loads(row.attributes) if row.attributes else {},
    )


def _row_to_edge(row: Row[Any]) -> Edge:
    return Edge(
        source=row.source_id,
        target=row.target_id,
        label=row.label,
        attributes=json.loads(row.attributes) if row.attributes else {},
    )
