"""Tests for BaseService snapshot fetching."""

from __future__ import annotations

from orgmap.domain.models import GraphSnapshot
from orgmap.infrastructure.store import SnapshotStore
from orgmap.services.base import BaseService
from orgmap.services.result import ServiceResult


class TestFetchSnapshot:
    def test_returns_snapshot(self, loaded_store: SnapshotStore) -> None:
        snap = BaseService(loaded_store)._fetch_snapshot("op")
        assert isinstance(snap, GraphSnapshot)
        assert len(snap.nodes) == 3

    def test_unloaded_dataset_is_unavailable(self, loaded_store: SnapshotStore) -> None:
        svc = BaseService(loaded_store, dataset="staging")
        result = svc._fetch_snapshot("op")
        assert isinstance(result, ServiceResult)
        assert result.error is not None
        assert result.error.code == "UNAVAILABLE"
        assert result.error.detail == {"status": 503, "dataset": "staging"}

    def test_engine_uses_configured_labels(self, loaded_store: SnapshotStore) -> None:
        svc = BaseService(loaded_store, containment_labels=["memberOf"])
        snap = svc._fetch_snapshot("op")
        assert isinstance(snap, GraphSnapshot)
        assert svc._engine_for(snap).containment_labels == frozenset({"memberOf"})
