"""Render a loaded document as a collapsible-looking rich tree."""
from __future__ import annotations

from typing import Any, List, Tuple

from rich.markup import escape
from rich.tree import Tree


def _scalar(value: Any) -> str:
    # bool before int: bool subclasses int
    if isinstance(value, bool):
        return f"[bold red]{'true' if value else 'false'}[/]"
    if value is None:
        return "[bold bright_black]null[/]"
    if isinstance(value, (int, float)):
        return f"[dark_orange]{value}[/]"
    if isinstance(value, str):
        return f'[green]"{escape(value)}"[/]'
    return f"[white]{escape(str(value))}[/]"


def _label(name: str | None, value: Any) -> str:
    prefix = f"[cyan]{escape(name)}[/]: " if name is not None else ""
    if isinstance(value, dict):
        body = "{}" if not value else f"{{{len(value)}}}"
    elif isinstance(value, list):
        body = "[]" if not value else f"\\[{len(value)}]"
    else:
        body = _scalar(value)
    return prefix + body


def build_tree(value: Any, label: str | None = None) -> Tree:
    """Build a ``rich.tree.Tree`` for a JSON-compatible value.

    Objects and arrays become branches labelled with their size; empty
    containers are shown inline as ``{}`` / ``[]``; scalars are coloured by
    type.
    """
    root = Tree(_label(label, value))
    pending: List[Tuple[Tree, Any]] = [(root, value)]
    while pending:
        branch, node = pending.pop()
        if isinstance(node, dict):
            items = [(str(k), v) for k, v in node.items()]
        elif isinstance(node, list):
            items = [(str(i), v) for i, v in enumerate(node)]
        else:
            continue
        for name, child in items:
            pending.append((branch.add(_label(name, child)), child))
    return root
