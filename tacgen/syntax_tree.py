"""Syntax tree nodes and an indented s-expression printer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Node:
    """A syntax tree node: an optional label and an ordered list of children."""

    name: Optional[str]
    children: list[Optional["Node"]] = field(default_factory=list)


def make_node(name: Optional[str], *args: Optional[Node]) -> Node:
    """Build a node labelled ``name`` whose children are ``args`` in order."""
    return Node(name, list(args))


def _render(node: Optional[Node], indent: int, out: list[str]) -> None:
    if node is None:
        return
    pad = " " * indent
    out.append(pad)
    if node.name is not None:
        out.append(f"({node.name}\n")
    for child in node.children:
        _render(child, indent + 2, out)
    if node.name is not None:
        out.append(f"{pad})\n")


def format_ast(node: Optional[Node], indent: int = 0) -> str:
    """Return the tree as indented s-expression text, one label per line."""
    out: list[str] = []
    _render(node, indent, out)
    return "".join(out)


def print_ast(node: Optional[Node], indent: int = 0) -> None:
    """Write the tree to standard output in the format of :func:`format_ast`."""
    print(format_ast(node, indent), end="")