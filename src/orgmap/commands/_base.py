"""Click base classes with ``--examples`` support.

``OrgCommand`` and ``OrgGroup`` accept an ``examples`` block (one command
line per line, indentation ignored). Passing ``--examples`` prints it and
exits, so ``--help`` stays short.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag to a Click command or group."""

    params: list[click.Parameter]
    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = textwrap.dedent(examples).strip() if examples else None
        if not self.examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._show_examples,
                help="Show usage examples and exit.",
            )
        )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing or not self.examples:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in self.examples.splitlines():
            click.echo(f"  {line}")
        ctx.exit(0)


class OrgCommand(_ExamplesMixin, click.Command):
    """Click Command that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class OrgGroup(_ExamplesMixin, click.Group):
    """Click Group that supports an ``--examples`` flag.

    Subcommands default to :class:`OrgCommand`, so they take ``examples=``
    without an explicit ``cls=``.
    """

    command_class = OrgCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
