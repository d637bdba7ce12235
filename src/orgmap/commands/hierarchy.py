"""Command: list view, the group/subgroup/project forest."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orgmap.commands._base import OrgCommand
from orgmap.services.hierarchy import HierarchyService

if TYPE_CHECKING:
    from orgmap.commands._context import AppContext

_LIST_EXAMPLES = """\
  orgmap list
  orgmap -v list
  orgmap --json list
  orgmap -d staging list"""


@click.command("list", cls=OrgCommand, examples=_LIST_EXAMPLES)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """Show every group with its subgroups and projects."""
    svc = HierarchyService(
        app.store,
        promote_orphan_subgroups=app.settings.hierarchy.promote_orphan_subgroups,
        **app.service_kwargs,
    )
    app.emit(svc.build_forest())
