"""Tests for the tree command (graph view)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from orgmap.cli import cli
from tests.conftest import node_record, owned, write_dump


@pytest.mark.usefixtures("workspace")
class TestTree:
    def test_whole_dataset(self, cli_runner: CliRunner, scenario_dump: Path) -> None:
        cli_runner.invoke(cli, ["load", str(scenario_dump)])
        result = cli_runner.invoke(cli, ["--json", "tree"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["anchor"] is None
        assert data["data"]["node_count"] == 3

    def test_named_anchor(self, cli_runner: CliRunner, scenario_dump: Path) -> None:
        cli_runner.invoke(cli, ["load", str(scenario_dump)])
        result = cli_runner.invoke(cli, ["--json", "tree", "S"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert [n["name"] for n in data["nodes"]] == ["G", "S", "P"]
        assert data["edge_count"] == 2

    def test_human_output(self, cli_runner: CliRunner, scenario_dump: Path) -> None:
        cli_runner.invoke(cli, ["load", str(scenario_dump)])
        result = cli_runner.invoke(cli, ["tree", "S"])
        assert result.exit_code == 0
        assert "anchor: S" in result.stdout
        assert "ownedby" in result.stdout

    def test_quiet_ids(self, cli_runner: CliRunner, scenario_dump: Path) -> None:
        cli_runner.invoke(cli, ["load", str(scenario_dump)])
        result = cli_runner.invoke(cli, ["-q", "tree", "P"])
        assert result.stdout.split() == ["1", "2", "3"]

    def test_not_found(self, cli_runner: CliRunner, scenario_dump: Path) -> None:
        cli_runner.invoke(cli, ["load", str(scenario_dump)])
        result = cli_runner.invoke(cli, ["--json", "tree", "nonexistent"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["ok"] is False
        assert data["error"]["code"] == "NOT_FOUND"
        assert data["error"]["detail"]["status"] == 404

    def test_malformed_subgraph(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        dump = write_dump(
            tmp_path,
            [node_record(1, "G", "group"), node_record(2, "P", "code")],
            [owned(2, 1), owned(2, 1)],
        )
        cli_runner.invoke(cli, ["load", str(dump)])
        result = cli_runner.invoke(cli, ["--json", "tree", "P"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "MALFORMED_SUBGRAPH"

    def test_unavailable_before_load(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "tree"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["error"]["code"] == "UNAVAILABLE"
        assert data["error"]["detail"]["status"] == 503

    def test_cycle(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        dump = write_dump(
            tmp_path,
            [node_record(1, "A", "subgroup"), node_record(2, "B", "subgroup")],
            [owned(1, 2), owned(2, 1)],
        )
        cli_runner.invoke(cli, ["load", str(dump)])
        result = cli_runner.invoke(cli, ["tree", "A"])
        assert result.exit_code == 1
        assert "CYCLE_DETECTED" in result.stderr

    def test_verbose_shows_telemetry(self, cli_runner: CliRunner, scenario_dump: Path) -> None:
        cli_runner.invoke(cli, ["load", str(scenario_dump)])
        result = cli_runner.invoke(cli, ["-v", "tree", "S"])
        assert result.exit_code == 0
        assert "DescendantService.tree" in result.stdout
        assert "resolve_subgraph" in result.stdout
