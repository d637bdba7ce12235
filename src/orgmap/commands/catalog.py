"""Command: id -> [name, kind] catalog of the dataset."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orgmap.commands._base import OrgCommand
from orgmap.services.catalog import CatalogService

if TYPE_CHECKING:
    from orgmap.commands._context import AppContext

_CATALOG_EXAMPLES = """\
  orgmap catalog
  orgmap catalog groups
  orgmap --quiet catalog projects
  orgmap --json catalog subgroups"""


@click.command("catalog", cls=OrgCommand, examples=_CATALOG_EXAMPLES)
@click.argument("selector", required=False, default=None)
@click.pass_obj
def catalog(app: AppContext, selector: str | None) -> None:
    """Map node ids to names; SELECTOR is groups, subgroups or projects."""
    app.emit(CatalogService(app.store, **app.service_kwargs).catalog(selector))
