"""Rich Console factory and theme for orgmap output.

Consoles render into a StringIO buffer so renderers keep the
``format_result() -> str`` contract. Outside a terminal (tests, pipes)
Rich drops the color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ORG_THEME = Theme(
    {
        "org.ok": "bold green",
        "org.error": "bold red",
        "org.warning": "bold yellow",
        "org.op": "bold cyan",
        "org.key": "dim",
        "org.id": "bold blue",
        "org.name": "bold",
        "org.url": "dim underline",
        "org.kind.group": "magenta",
        "org.kind.subgroup": "cyan",
        "org.kind.leaf-item": "green",
    }
)

_KIND_STYLES: dict[str, str] = {
    "group": "org.kind.group",
    "subgroup": "org.kind.subgroup",
    "leaf-item": "org.kind.leaf-item",
    "project": "org.kind.leaf-item",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ORG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a node kind (or its display name)."""
    return _KIND_STYLES.get(kind, "")
