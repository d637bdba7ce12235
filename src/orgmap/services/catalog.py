"""CatalogService: id/name catalogs and single-node lookups."""

from __future__ import annotations

from typing import Any

from orgmap.domain.types import CATALOG_SELECTORS, DISPLAY_NAMES, ErrorCode, NodeKind
from orgmap.infrastructure.store import SnapshotUnavailableError
from orgmap.services.base import BaseService
from orgmap.services.result import ServiceResult
from orgmap.services.telemetry import traced


class CatalogService(BaseService):
    """Read-side lookups over the current snapshot."""

    @traced
    def catalog(self, selector: str | None = None) -> ServiceResult:
        """Map every node id to ``[name, kind]``, optionally for one selector.

        Args:
            selector: ``groups``, ``subgroups`` or ``projects``; None for all.
        """
        op = "catalog"
        kind: NodeKind | None = None
        if selector:
            kind = CATALOG_SELECTORS.get(selector.lower())
            if kind is None:
                return ServiceResult.failure(
                    op,
                    ErrorCode.NOT_FOUND,
                    f"Unknown catalog selector '{selector}'",
                    selector=selector,
                    choices=sorted(CATALOG_SELECTORS),
                )

        snapshot = self._fetch_snapshot(op)
        if isinstance(snapshot, ServiceResult):
            return snapshot

        entries: dict[str, list[str]] = {}
        for node in snapshot.nodes:
            if kind is None or node.kind is kind:
                entries[node.id] = [node.name, DISPLAY_NAMES[node.kind]]

        return ServiceResult(
            ok=True,
            op=op,
            data={"selector": selector, "count": len(entries), "entries": entries},
        )

    @traced
    def list_kind(self, kind: NodeKind) -> ServiceResult:
        """Full records for every node of one kind."""
        op = "list_kind"
        snapshot = self._fetch_snapshot(op)
        if isinstance(snapshot, ServiceResult):
            return snapshot

        items = [n.to_record() for n in snapshot.of_kind(kind)]
        return ServiceResult(
            ok=True,
            op=op,
            data={"kind": str(kind), "count": len(items), "items": items},
        )

    @traced
    def find_by_name(self, name: str | None, *, kind: NodeKind | None = None) -> ServiceResult:
        return self._find("find_by_name", "name", name, kind)

    @traced
    def find_by_id(self, node_id: str | None, *, kind: NodeKind | None = None) -> ServiceResult:
        return self._find("find_by_id", "id", node_id, kind)

    def _find(self, op: str, field: str, value: str | None, kind: NodeKind | None) -> ServiceResult:
        noun = DISPLAY_NAMES[kind] if kind else "node"
        if not value:
            return ServiceResult.failure(
                op, ErrorCode.UNPROCESSABLE, f"A {noun} {field} is required"
            )

        try:
            if field == "name":
                node = self._store.find_node_by_name(self.dataset, value)
            else:
                node = self._store.find_node_by_id(self.dataset, value)
        except SnapshotUnavailableError as exc:
            return ServiceResult.failure(
                op,
                ErrorCode.UNAVAILABLE,
                f"Dataset '{exc.dataset}' has not been loaded yet",
                dataset=exc.dataset,
            )

        if node is None or (kind is not None and node.kind is not kind):
            detail: dict[str, Any] = {field: value}
            if kind is not None:
                detail["kind"] = str(kind)
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"No {noun} with {field} '{value}'", **detail
            )

        return ServiceResult(ok=True, op=op, data=node.to_record())
