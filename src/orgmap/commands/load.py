"""Commands: populate the store from a dump file and list loaded datasets."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from orgmap.commands._base import OrgCommand
from orgmap.services.load import LoadService

if TYPE_CHECKING:
    from orgmap.commands._context import AppContext

_LOAD_EXAMPLES = """\
  orgmap load gitlab.json
  orgmap -d staging load staging-dump.json
  orgmap --json load gitlab.json"""


@click.command("load", cls=OrgCommand, examples=_LOAD_EXAMPLES)
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def load(app: AppContext, file: Path) -> None:
    """Replace the dataset's snapshot with the nodes and edges in FILE."""
    app.emit(LoadService(app.store, **app.service_kwargs).load(file))


@click.command(
    "datasets",
    cls=OrgCommand,
    examples="""\
  orgmap datasets
  orgmap --json datasets""",
)
@click.pass_obj
def datasets(app: AppContext) -> None:
    """List the datasets held by the store."""
    app.emit(LoadService(app.store, **app.service_kwargs).datasets())
