"""Node kinds, edge labels and error codes.

The kind of a node is decided once, when a snapshot is loaded. Every
traversal afterwards dispatches on :class:`NodeKind` instead of probing
record shapes.
"""

from __future__ import annotations

from enum import StrEnum


class NodeKind(StrEnum):
    """The three categories of the containment hierarchy."""

    GROUP = "group"
    SUBGROUP = "subgroup"
    LEAF_ITEM = "leaf-item"

    @classmethod
    def from_category(cls, category: str) -> NodeKind:
        """Map a scraper category (``group``, ``subgroup``, ``code``) to a kind.

        Raises:
            ValueError: If the category is not recognized.
        """
        key = category.strip().lower()
        try:
            return _CATEGORY_KINDS[key]
        except KeyError:
            msg = f"Unknown node category: {category!r}"
            raise ValueError(msg) from None


_CATEGORY_KINDS: dict[str, NodeKind] = {
    "group": NodeKind.GROUP,
    "subgroup": NodeKind.SUBGROUP,
    "code": NodeKind.LEAF_ITEM,
    "project": NodeKind.LEAF_ITEM,
    "leaf-item": NodeKind.LEAF_ITEM,
}

# Public catalog selectors -> kind
CATALOG_SELECTORS: dict[str, NodeKind] = {
    "groups": NodeKind.GROUP,
    "subgroups": NodeKind.SUBGROUP,
    "projects": NodeKind.LEAF_ITEM,
}

# Name shown to users for each kind (leaf-items are projects in the source data)
DISPLAY_NAMES: dict[NodeKind, str] = {
    NodeKind.GROUP: "group",
    NodeKind.SUBGROUP: "subgroup",
    NodeKind.LEAF_ITEM: "project",
}

OWNEDBY = "ownedby"


class ErrorCode(StrEnum):
    """Error codes carried by failed service results."""

    NOT_FOUND = "NOT_FOUND"
    UNPROCESSABLE = "UNPROCESSABLE"
    UNAVAILABLE = "UNAVAILABLE"
    MALFORMED_SUBGRAPH = "MALFORMED_SUBGRAPH"
    CYCLE_DETECTED = "CYCLE_DETECTED"
    INVALID_SNAPSHOT = "INVALID_SNAPSHOT"

    @property
    def status(self) -> int:
        """HTTP-style status for this error class."""
        return _STATUSES[self]


_STATUSES: dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.UNPROCESSABLE: 422,
    ErrorCode.UNAVAILABLE: 503,
    ErrorCode.MALFORMED_SUBGRAPH: 404,
    ErrorCode.CYCLE_DETECTED: 422,
    ErrorCode.INVALID_SNAPSHOT: 400,
}
