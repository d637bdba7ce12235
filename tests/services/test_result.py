"""Tests for ServiceResult and ServiceError."""

import pytest
from pydantic import ValidationError

from orgmap.domain.types import ErrorCode
from orgmap.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="tree", data={"node_count": 3})
        assert result.error is None
        assert result.warnings == []
        assert result.meta is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="tree")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_failure_carries_status(self) -> None:
        result = ServiceResult.failure("tree", ErrorCode.NOT_FOUND, "No node named 'x'", anchor="x")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {"status": 404, "anchor": "x"}
        assert result.error.status == 404

    def test_json_shape(self) -> None:
        result = ServiceResult.failure("load", ErrorCode.INVALID_SNAPSHOT, "bad")
        dumped = result.model_dump(mode="json")
        assert dumped["error"]["code"] == "INVALID_SNAPSHOT"
        assert dumped["error"]["detail"]["status"] == 400


class TestServiceError:
    def test_unknown_code_status(self) -> None:
        assert ServiceError(code="SOMETHING", message="x").status == 500
