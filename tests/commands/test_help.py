"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from orgmap.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["--help"], ["tree", "list", "catalog", "node", "load", "datasets", "--dataset"]),
    (["tree", "--help"], ["NAME"]),
    (["list", "--help"], ["--examples"]),
    (["catalog", "--help"], ["SELECTOR"]),
    (["node", "--help"], ["name", "id", "all"]),
    (["node", "name", "--help"], ["NAME", "--kind"]),
    (["node", "id", "--help"], ["NODE_ID", "--kind"]),
    (["node", "all", "--help"], ["groups", "subgroups", "projects"]),
    (["load", "--help"], ["FILE"]),
    (["datasets", "--help"], []),
]


@pytest.mark.parametrize(
    "args,keywords",
    HELP_COMMANDS,
    ids=[" ".join(a) for a, _ in HELP_COMMANDS],
)
def test_help(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for keyword in keywords:
        assert keyword in result.output
