"""BaseService: shared foundation for orgmap services.

Every service receives the :class:`SnapshotStore` plus the dataset key it
operates on. Read services fetch one snapshot per call and never hold on
to it; nothing is shared between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from orgmap.domain.types import OWNEDBY, ErrorCode
from orgmap.infrastructure.graph.engine import GraphEngine
from orgmap.infrastructure.store import SnapshotUnavailableError
from orgmap.services.result import ServiceResult

if TYPE_CHECKING:
    from orgmap.domain.models import GraphSnapshot
    from orgmap.infrastructure.store import SnapshotStore

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CatalogService(BaseService):
            def catalog(self) -> ServiceResult:
                snapshot = self._fetch_snapshot("catalog")
                if isinstance(snapshot, ServiceResult):
                    return snapshot
                ...
    """

    def __init__(
        self,
        store: SnapshotStore,
        *,
        dataset: str = "default",
        containment_labels: Iterable[str] = (OWNEDBY,),
    ) -> None:
        self._store = store
        self._dataset = dataset
        self._labels = tuple(containment_labels)

    @property
    def dataset(self) -> str:
        return self._dataset

    def _fetch_snapshot(self, op: str) -> GraphSnapshot | ServiceResult:
        """Fetch the current snapshot, or a failed result if it is unavailable."""
        try:
            return self._store.get_snapshot(self._dataset)
        except SnapshotUnavailableError as exc:
            logger.debug("Snapshot unavailable for %s: %s", op, exc.dataset)
            return ServiceResult.failure(
                op,
                ErrorCode.UNAVAILABLE,
                f"Dataset '{exc.dataset}' has not been loaded yet",
                dataset=exc.dataset,
            )

    def _engine_for(self, snapshot: GraphSnapshot) -> GraphEngine:
        return GraphEngine(snapshot, containment_labels=self._labels)
