"""SQLite database engine and schema via SQLAlchemy Core."""

from orgmap.infrastructure.database.engine import create_db_engine, init_database
from orgmap.infrastructure.database.schema import datasets, edges, metadata, nodes

__all__ = [
    "create_db_engine",
    "datasets",
    "edges",
    "init_database",
    "metadata",
    "nodes",
]
