"""Infrastructure layer: the SQLite snapshot store and the NetworkX graph view.

This layer depends on SQLAlchemy, NetworkX and the domain models it hands
back to callers. It must never import from any layer above it.
"""
