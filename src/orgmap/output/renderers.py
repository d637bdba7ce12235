"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from orgmap.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from orgmap.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: one id per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    ids = _quiet_ids(result.data)
    if ids:
        return "\n".join(ids)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _quiet_ids(data: dict[str, Any]) -> list[str]:
    """Pull the ids out of whichever collection the payload carries."""
    if isinstance(data.get("nodes"), list):
        return [str(n.get("id", "")) for n in data["nodes"]]
    if isinstance(data.get("roots"), list):
        return [str(r["node"].get("id", "")) for r in data["roots"]]
    if isinstance(data.get("entries"), dict):
        return [str(k) for k in data["entries"]]
    if isinstance(data.get("items"), list):
        return [str(i.get("id", i.get("key", ""))) for i in data["items"]]
    if "id" in data:
        return [str(data["id"])]
    return []


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="org.ok")
    op = Text(f"  {result.op}", style="org.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="org.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="org.id")
    elif key in ("name", "anchor"):
        v = Text(str(value), style="org.name")
    elif key == "url":
        v = Text(str(value), style="org.url")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _kind_text(kind: Any) -> Text:
    label = "project" if kind == "leaf-item" else str(kind)
    return Text(label, style=style_for_kind(str(kind)))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block; the telemetry span tree renders as a Rich tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry" and isinstance(value, dict):
            console.print(Padding(_span_tree(value), (0, 0, 0, 4)))
        else:
            console.print(Text(f"    {key}: {value}"))


def _span_label(span: dict[str, Any]) -> Text:
    duration = float(span.get("duration_ms", 0.0))
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"
    label = Text(f"{duration:>8.2f}ms", style=style)
    label.append(f"  {span.get('name', '?')}")
    annotations = span.get("annotations") or {}
    if annotations:
        pairs = ", ".join(f"{k}={v}" for k, v in annotations.items())
        label.append(f"  ({pairs})", style="dim")
    return label


def _span_tree(span: dict[str, Any], parent: Tree | None = None) -> Tree:
    """Build (or extend *parent* with) the tree for one span and its children."""
    branch = Tree(_span_label(span)) if parent is None else parent.add(_span_label(span))
    for child in span.get("children", []):
        _span_tree(child, branch)
    return branch


def _node_table(nodes: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table for a list of node records."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="org.id", no_wrap=True)
    table.add_column("Name", style="org.name")
    table.add_column("Kind")
    if verbose:
        table.add_column("Category", style="dim")
        table.add_column("Color", style="dim")

    for node in nodes:
        row: list[Any] = [
            str(node.get("id", "")),
            str(node.get("name", "")),
            _kind_text(node.get("kind", "")),
        ]
        if verbose:
            row.append(str(node.get("category", "")))
            row.append(str(node.get("color") or ""))
        table.add_row(*row)
    return table


def _edge_table(edges: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("From", style="org.id", no_wrap=True)
    table.add_column("To", style="org.id", no_wrap=True)
    table.add_column("Label")
    for edge in edges:
        table.add_row(
            str(edge.get("from", "")),
            str(edge.get("to") or "-"),
            str(edge.get("label", "")),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="org.error")
    op = Text(f"  {result.op}", style="org.op")
    code = Text(f"  [{err.code}]" if err else "", style="org.warning")
    console.print(label, op, code, Text(": "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Graph view ────────────────────────────────────────────────────────


def _render_subgraph(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render tree/resolve results as node and edge tables."""
    d = result.data
    _status_line(console, result)
    anchor = d.get("anchor")
    _field(console, "anchor", anchor["name"] if anchor else "(whole dataset)")
    _field(console, "nodes", d.get("node_count", len(d.get("nodes", []))))
    _field(console, "edges", d.get("edge_count", len(d.get("edges", []))))
    if "proper_tree" in d:
        _field(console, "proper_tree", d["proper_tree"])

    nodes = d.get("nodes", [])
    if nodes:
        console.print()
        console.print(_node_table(nodes, verbose=verbose))
    edges = d.get("edges", [])
    if edges and (verbose or anchor is not None):
        console.print()
        console.print(_edge_table(edges))
    if verbose:
        _render_meta(console, result)


# ── List view ─────────────────────────────────────────────────────────


def _render_hierarchy(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the hierarchy forest as one Rich tree per root."""
    d = result.data
    roots = d.get("roots", [])
    stats = d.get("stats", {})
    console.print(
        f"[bold]{d.get('count', len(roots))} roots[/bold]  "
        f"({stats.get('groups', 0)} groups, {stats.get('subgroups', 0)} subgroups, "
        f"{stats.get('placed_leaf_items', 0)}/{stats.get('leaf_items', 0)} projects placed)"
    )

    for root in roots:
        console.print()
        tree = Tree(_tree_label(root["node"], verbose=verbose))
        if not root.get("children") and root["node"].get("kind") == "leaf-item":
            _add_project_detail(tree, root["node"])
        _add_children(tree, root.get("children", []), verbose=verbose)
        console.print(tree)

    if verbose:
        _render_meta(console, result)


def _tree_label(node: dict[str, Any], *, verbose: bool = False) -> Text:
    label = Text(str(node.get("name", "?")), style=style_for_kind(str(node.get("kind", ""))))
    label.append("  ")
    label.append_text(_kind_text(node.get("kind", "")))
    if verbose:
        label.append(f"  {node.get('id', '')}", style="org.id")
    return label


def _add_children(branch: Tree, children: list[dict[str, Any]], *, verbose: bool) -> None:
    pending: list[tuple[Tree, list[dict[str, Any]]]] = [(branch, children)]
    while pending:
        parent, entries = pending.pop()
        for child in entries:
            if "node" in child:
                sub = parent.add(_tree_label(child["node"], verbose=verbose))
                pending.append((sub, child.get("children", [])))
            else:
                leaf = parent.add(_tree_label(child, verbose=verbose))
                _add_project_detail(leaf, child)


def _add_project_detail(branch: Tree, node: dict[str, Any]) -> None:
    """Attach the project card: description, url, languages and ingestion errors."""
    attrs = node.get("attributes") or {}
    branch.add(Text(str(attrs.get("description") or "No description"), style="dim"))
    branch.add(Text(str(attrs.get("url") or "No URL"), style="org.url"))

    langs = _as_list(attrs.get("langs"))
    if langs:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Language")
        table.add_column("Percent", justify="right")
        for lang in langs:
            if isinstance(lang, dict):
                table.add_row(str(lang.get("name", "")), f"{lang.get('percent', '')}%")
            else:
                table.add_row(str(lang), "")
        branch.add(table)
    else:
        branch.add(Text("No languages found", style="dim"))

    problems = _as_list(attrs.get("add"))
    if not problems:
        branch.add(Text("No missing files found", style="dim"))
    for problem in problems:
        if isinstance(problem, dict):
            branch.add(
                Text.assemble(
                    (str(problem.get("file", "")), "org.warning"),
                    ": ",
                    str(problem.get("message", "")),
                )
            )
        else:
            branch.add(Text(str(problem), style="org.warning"))


def _as_list(value: Any) -> list[Any]:
    """Attribute values are opaque: a scalar counts as a one-item list."""
    if value is None or value == "":
        return []
    return list(value) if isinstance(value, (list, tuple)) else [value]


# ── Catalog and lookups ───────────────────────────────────────────────


def _render_catalog(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    entries: dict[str, list[str]] = d.get("entries", {})
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="org.id", no_wrap=True)
    table.add_column("Name", style="org.name")
    table.add_column("Kind")
    for node_id, (name, kind) in entries.items():
        table.add_row(node_id, name, Text(kind, style=style_for_kind(kind)))
    console.print(table)
    selector = d.get("selector") or "all"
    console.print(f"\n{d.get('count', len(entries))} entries ({selector})")


def _render_node(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single node record as a panel."""
    d = result.data
    lines = [f"id: {d.get('id', '?')}", f"kind: {_kind_text(d.get('kind', '')).plain}"]
    if d.get("category"):
        lines.append(f"category: {d['category']}")
    if d.get("color"):
        lines.append(f"color: {d['color']}")

    attrs = d.get("attributes") or {}
    for key in ("description", "url"):
        if attrs.get(key):
            lines.append(f"{key}: {attrs[key]}")
    langs = _as_list(attrs.get("langs"))
    if langs:
        langs_text = ", ".join(
            f"{lang.get('name')} {lang.get('percent')}%" if isinstance(lang, dict) else str(lang)
            for lang in langs
        )
        lines.append(f"langs: {langs_text}")
    if verbose:
        for key, value in attrs.items():
            if key not in ("description", "url", "langs"):
                lines.append(f"{key}: {json.dumps(value, separators=(',', ':'))}")

    style = style_for_kind(str(d.get("kind", "")))
    title = str(d.get("name", "?"))
    console.print(
        Panel(Text("\n".join(lines)), title=title, border_style=style or "dim", expand=False)
    )


def _render_kind_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    console.print(_node_table(items, verbose=verbose))
    count = result.data.get("count", len(items))
    console.print(f"\n{count} {result.data.get('kind', 'node')} nodes")


# ── Store population ──────────────────────────────────────────────────


def _render_load(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("dataset", "path", "loaded_at", "node_count", "edge_count"):
        if key in d:
            _field(console, key, d[key])
    kinds = d.get("kinds") or {}
    if kinds:
        _field(console, "kinds", ", ".join(f"{k}={v}" for k, v in kinds.items()))
    if verbose:
        _render_meta(console, result)


def _render_datasets(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No datasets loaded.")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Dataset", style="org.id", no_wrap=True)
    table.add_column("Loaded", style="dim")
    table.add_column("Nodes", justify="right")
    table.add_column("Edges", justify="right")
    for item in items:
        table.add_row(
            str(item.get("key", "")),
            str(item.get("loaded_at", "")),
            str(item.get("node_count", "")),
            str(item.get("edge_count", "")),
        )
    console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Graph view
    "tree": _render_subgraph,
    "resolve": _render_subgraph,
    # List view
    "hierarchy": _render_hierarchy,
    # Catalog
    "catalog": _render_catalog,
    "find_by_name": _render_node,
    "find_by_id": _render_node,
    "list_kind": _render_kind_list,
    # Store
    "load": _render_load,
    "datasets": _render_datasets,
}
