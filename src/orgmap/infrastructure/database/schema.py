"""SQLAlchemy Core table definitions for the snapshot store.

One row in ``datasets`` per loaded snapshot. Node and edge rows carry a
``position`` column so that enumeration order survives the round trip
through SQLite; the hierarchy builder's child ordering depends on it.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
)

metadata = MetaData()

datasets = Table(
    "datasets",
    metadata,
    Column("key", Text, primary_key=True),
    Column("loaded_at", Text, nullable=False),
    Column("node_count", Integer, nullable=False, default=0, server_default="0"),
    Column("edge_count", Integer, nullable=False, default=0, server_default="0"),
)

nodes = Table(
    "nodes",
    metadata,
    Column("dataset", Text, ForeignKey("datasets.key", ondelete="CASCADE"), nullable=False),
    Column("position", Integer, nullable=False),
    Column("id", Text, nullable=False),
    Column("name", Text, nullable=False),
    Column("kind", Text, nullable=False),
    Column("category", Text, nullable=False),
    Column("color", Text),
    Column("attributes", Text),  # JSON object
    PrimaryKeyConstraint("dataset", "position"),
)

edges = Table(
    "edges",
    metadata,
    Column("dataset", Text, ForeignKey("datasets.key", ondelete="CASCADE"), nullable=False),
    Column("position", Integer, nullable=False),
    Column("source_id", Text, nullable=False),
    Column("target_id", Text),  # NULL for dangling edges
    Column("label", Text, nullable=False, default="", server_default=""),
    Column("attributes", Text),  # JSON object
    PrimaryKeyConstraint("dataset", "position"),
)

Index("ix_nodes_dataset_id", nodes.c.dataset, nodes.c.id)
Index("ix_nodes_dataset_name", nodes.c.dataset, nodes.c.name)
Index("ix_edges_dataset_target", edges.c.dataset, edges.c.target_id)
