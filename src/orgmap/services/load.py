"""LoadService: populate the store from a scraped JSON dump."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from orgmap.domain.models import GraphSnapshot
from orgmap.domain.types import ErrorCode, NodeKind
from orgmap.services._helpers import now_iso
from orgmap.services.base import BaseService
from orgmap.services.result import ServiceResult
from orgmap.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class LoadService(BaseService):
    """Replaces a dataset's snapshot with the contents of a dump file."""

    @traced
    def load(self, path: Path) -> ServiceResult:
        """Validate *path* and store it as the current snapshot of the dataset.

        The previous snapshot of the dataset, if any, is replaced in a
        single transaction; a dump that fails validation leaves it intact.
        """
        op = "load"
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            return ServiceResult.failure(
                op, ErrorCode.INVALID_SNAPSHOT, f"Cannot read {path}: {exc}", path=str(path)
            )

        with trace_span("validate"):
            try:
                snapshot = GraphSnapshot.from_payload(payload, dataset=self.dataset)
            except (ValidationError, ValueError) as exc:
                return ServiceResult.failure(
                    op,
                    ErrorCode.INVALID_SNAPSHOT,
                    f"Invalid snapshot in {path}: {_first_line(exc)}",
                    path=str(path),
                )

        loaded_at = now_iso()
        with trace_span("store"):
            self._store.replace_snapshot(snapshot, loaded_at=loaded_at)
        logger.info(
            "Loaded %s into dataset %s (%d nodes, %d edges)",
            path,
            self.dataset,
            len(snapshot.nodes),
            len(snapshot.edges),
        )

        warnings: list[str] = []
        if snapshot.ambiguous_ids:
            dupes = ", ".join(sorted(snapshot.ambiguous_ids))
            warnings.append(f"Duplicate node ids (their edges are ignored): {dupes}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "dataset": self.dataset,
                "path": str(path),
                "loaded_at": loaded_at,
                "node_count": len(snapshot.nodes),
                "edge_count": len(snapshot.edges),
                "kinds": {str(k): len(snapshot.of_kind(k)) for k in NodeKind},
            },
            warnings=warnings,
        )

    @traced
    def datasets(self) -> ServiceResult:
        """List every dataset the store holds."""
        items = self._store.datasets()
        return ServiceResult(ok=True, op="datasets", data={"count": len(items), "items": items})


def _first_line(exc: Exception) -> str:
    if isinstance(exc, ValidationError) and exc.errors():
        err = exc.errors()[0]
        loc = ".".join(str(p) for p in err["loc"])
        return f"{loc}: {err['msg']}"
    return str(exc).splitlines()[0] if str(exc) else type(exc).__name__
