"""Tests for output mode selection."""

import json

from orgmap.domain.types import ErrorCode
from orgmap.output.formatters import OutputSettings, format_result
from orgmap.services.result import ServiceResult


def _catalog() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="catalog",
        data={"selector": None, "count": 1, "entries": {"1": ["G", "group"]}},
    )


def test_json_mode() -> None:
    out = format_result(_catalog(), settings=OutputSettings(json_output=True))
    parsed = json.loads(out)
    assert parsed["ok"] is True
    assert parsed["data"]["entries"] == {"1": ["G", "group"]}


def test_json_wins_over_quiet() -> None:
    out = format_result(_catalog(), settings=OutputSettings(json_output=True, quiet=True))
    assert json.loads(out)["op"] == "catalog"


def test_quiet_mode() -> None:
    assert format_result(_catalog(), settings=OutputSettings(quiet=True)) == "1"


def test_rich_mode_default() -> None:
    out = format_result(_catalog())
    assert "G" in out
    assert "1 entries" in out


def test_failure_json_carries_status() -> None:
    result = ServiceResult.failure("tree", ErrorCode.UNAVAILABLE, "not loaded")
    parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
    assert parsed["error"]["code"] == "UNAVAILABLE"
    assert parsed["error"]["detail"]["status"] == 503
