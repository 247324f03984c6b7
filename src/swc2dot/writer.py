# src/swc2dot/writer.py
from __future__ import annotations

# General imports (stdlib)
from typing import Dict, List, Mapping, Optional

# Local imports
from .buffer import LINE_WIDTH, Indent, StringBuffer, get_indent
from .config import StyleConfig
from .graph import Graph, ShortTree, Vertex
from .swc import CompartmentKind


def vertex_to_dot(vertex: Vertex) -> str:
    """DOT declaration of a single vertex, e.g. '12; '."""
    return f"{vertex.id}; "


def style_tokens(options: Mapping[str, Optional[str]]) -> List[str]:
    """
    Split an option group into wrap-able `option: value; ` tokens.

    An option without a value is written as its bare name.
    """
    return [f"{name}; " if value is None else f"{name}: {value}; " for name, value in options.items()]


def style_header(kind: CompartmentKind) -> str:
    return f"/* Configuration for {kind.label} vertices. */"


def short_tree_to_dot(tree: ShortTree, indent: Indent = Indent.zero()) -> str:
    """
    DOT edge statement for a tree of height 1.

    Use:
        A leaf yields "", a single child `<id> -- <child>;` and several
        children `<id> -- {<c1>, <c2>};`. The statement starts on a new line
        at `indent.first` and is never wrapped, whatever its width.
    """
    if not tree.child_ids:
        return ""

    if len(tree.child_ids) == 1:
        children = str(tree.child_ids[0])
    else:
        children = "{" + ", ".join(str(c) for c in tree.child_ids) + "}"

    return f"\n{get_indent(indent.first)}{tree.root_id} -- {children};"


def _end_line(buf: StringBuffer) -> None:
    # Overlong text already moved the cursor to a fresh line
    if buf.cursor_position > buf.newline_cursor_position():
        buf.newline()


class VertexConfigBuffers:
    """One StringBuffer per CompartmentKind, kept in enumeration order."""

    def __init__(self, indent: Indent, line_width: int = LINE_WIDTH) -> None:
        self._buffers: Dict[CompartmentKind, StringBuffer] = {
            kind: StringBuffer(leading_newline=True, indent=indent, line_width=line_width)
            for kind in CompartmentKind
        }

    def buffer(self, kind: CompartmentKind) -> StringBuffer:
        return self._buffers[kind]

    def push_by_kind(self, kind: CompartmentKind, text: str) -> None:
        self._buffers[kind].push(text)

    def weak_push_by_kind(self, kind: CompartmentKind, text: str) -> None:
        self._buffers[kind].weak_push(text)

    def stage_style(self, kind: CompartmentKind, options: Mapping[str, Optional[str]]) -> None:
        """Write the header comment and style line for `kind` without making its buffer visible."""
        self.weak_push_by_kind(kind, style_header(kind))
        _end_line(self._buffers[kind])

        for token in style_tokens(options):
            self.weak_push_by_kind(kind, token)
        _end_line(self._buffers[kind])

    def to_dot(self, indent_level: int) -> str:
        """Wrap every visible buffer in braces; invisible buffers are dropped."""
        indent = get_indent(indent_level)
        blocks = []
        for buf in self._buffers.values():
            if not buf.visible:
                continue
            blocks.append(f"\n{indent}{{{buf.getvalue()}\n{indent}}}")
        return "".join(blocks)

    def __len__(self) -> int:
        return sum(len(buf) for buf in self._buffers.values())


def render_graph(
    graph: Graph,
    style: StyleConfig,
    indent: Indent = Indent.zero(),
    line_width: int = LINE_WIDTH,
) -> str:
    """
    Render a Graph in DOT format.

    Use:
        Vertices are grouped per compartment type into brace-delimited blocks
        that start with the type's style options. Types with no vertices are
        left out. Edges follow as one statement per vertex with children.

    Args:
        graph (Graph): Graph to render.
        style (StyleConfig): Vertex styles per compartment type.
        indent (Indent): Indent of the enclosing document; `main` is used.
        line_width (int): Soft wrap width in columns.

    Returns:
        str: The DOT document, from 'graph{' to the closing '}'.
    """
    parts = ["graph{"]

    # Node configuration
    buffers = VertexConfigBuffers(Indent.flat(indent.main + 2), line_width=line_width)
    for kind in CompartmentKind:
        buffers.stage_style(kind, style.get_style(kind))
    for vertex in graph.iter_vertices():
        buffers.push_by_kind(vertex.kind, vertex_to_dot(vertex))
    parts.append(buffers.to_dot(indent.main + 1))

    # Edges
    edge_indent = Indent.flat(indent.main + 1)
    for tree in graph.iter_short_trees():
        parts.append(short_tree_to_dot(tree, edge_indent))

    parts.append("\n}")
    return "".join(parts)
