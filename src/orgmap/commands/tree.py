"""Command: graph view of the whole dataset or of one anchor's subtree."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orgmap.commands._base import OrgCommand
from orgmap.services.descendants import DescendantService

if TYPE_CHECKING:
    from orgmap.commands._context import AppContext

_TREE_EXAMPLES = """\
  orgmap tree
  orgmap tree platform
  orgmap --json tree "data science"
  orgmap -v tree platform"""


@click.command("tree", cls=OrgCommand, examples=_TREE_EXAMPLES)
@click.argument("name", required=False, default=None)
@click.pass_obj
def tree(app: AppContext, name: str | None) -> None:
    """Show the nodes and containment edges around NAME (or everything)."""
    app.emit(DescendantService(app.store, **app.service_kwargs).tree(name))
