"""Command group: single-node lookups and per-kind listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orgmap.commands._base import OrgGroup
from orgmap.domain.types import CATALOG_SELECTORS, NodeKind
from orgmap.services.catalog import CatalogService

if TYPE_CHECKING:
    from orgmap.commands._context import AppContext

_NODE_EXAMPLES = """\
  orgmap node name platform
  orgmap node name api-gateway --kind project
  orgmap node id 42
  orgmap node all groups"""

_KIND_CHOICE = click.Choice(["group", "subgroup", "project"], case_sensitive=False)


def _kind(value: str | None) -> NodeKind | None:
    return NodeKind.from_category(value) if value else None


@click.group(cls=OrgGroup, examples=_NODE_EXAMPLES)
@click.pass_obj
def node(app: AppContext) -> None:
    """Look up groups, subgroups and projects."""


@node.command(
    "name",
    examples="""\
  orgmap node name platform
  orgmap --json node name api-gateway --kind project"""
)
@click.argument("name", required=False, default=None)
@click.option("--kind", type=_KIND_CHOICE, default=None, help="Require this kind of node.")
@click.pass_obj
def by_name(app: AppContext, name: str | None, kind: str | None) -> None:
    """Show the first node named NAME."""
    app.emit(CatalogService(app.store, **app.service_kwargs).find_by_name(name, kind=_kind(kind)))


@node.command(
    "id",
    examples="""\
  orgmap node id 42
  orgmap node id 7 --kind group"""
)
@click.argument("node_id", required=False, default=None)
@click.option("--kind", type=_KIND_CHOICE, default=None, help="Require this kind of node.")
@click.pass_obj
def by_id(app: AppContext, node_id: str | None, kind: str | None) -> None:
    """Show the node with id NODE_ID."""
    svc = CatalogService(app.store, **app.service_kwargs)
    app.emit(svc.find_by_id(node_id, kind=_kind(kind)))


@node.command(
    "all",
    examples="""\
  orgmap node all groups
  orgmap --json node all projects"""
)
@click.argument("selector", type=click.Choice(sorted(CATALOG_SELECTORS), case_sensitive=False))
@click.pass_obj
def all_of_kind(app: AppContext, selector: str) -> None:
    """List full records for every node of one kind."""
    kind = CATALOG_SELECTORS[selector.lower()]
    app.emit(CatalogService(app.store, **app.service_kwargs).list_kind(kind))
