"""Subcommand modules for orgmap.

Provides register_commands(), which imports command modules only when
the root group is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from orgmap.commands.node import node

    cli.add_command(node)

    # --- Standalone commands ---
    from orgmap.commands.catalog import catalog
    from orgmap.commands.hierarchy import list_cmd
    from orgmap.commands.load import datasets, load
    from orgmap.commands.tree import tree

    cli.add_command(tree)
    cli.add_command(list_cmd)
    cli.add_command(catalog)
    cli.add_command(load)
    cli.add_command(datasets)
