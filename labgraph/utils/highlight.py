from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..core._records import EdgeRecord, Vertex


def _vertex_number(item: Any):
    return item.number if isinstance(item, Vertex) else item


def _unpack(items: tuple) -> list:
    # a lone list, set or generator supplies the items; a lone tuple is one edge pair
    if len(items) == 1:
        (only,) = items
        if isinstance(only, Iterable) and not isinstance(only, (tuple, str)):
            return list(only)
    return list(items)


def _edge_key(item: Any):
    if isinstance(item, EdgeRecord):
        return item.key
    if isinstance(item, (tuple, list)) and len(item) >= 2:
        return (item[0], item[1])
    return item


class HighlightedGraph:
    """Graph paired with highlighted vertices and edges for downstream rendering.

    Passive data carrier: nothing is validated against the graph, so absent
    references are kept as given and never raise.

    Usage::

        HighlightedGraph(G).with_highlighted_vertices(0, G.vertex(2)).with_highlighted_edges(None)

    """

    def __init__(self, graph):
        self.graph = graph
        self.highlighted_vertices: list = []
        self.highlighted_edges: list = []

    def with_highlighted_vertices(self, *vertices):
        """Replace the highlighted vertices.

        A single ``None`` leaves the current list untouched; no arguments, or an
        empty collection, clears it. Items may be vertex numbers or
        :class:`Vertex` records, given one by one or as a single list or set.
        """
        if len(vertices) == 1 and vertices[0] is None:
            return self
        self.highlighted_vertices = _unpack(vertices)
        return self

    def with_highlighted_edges(self, *edges):
        """Replace the highlighted edges (same ``None`` / empty rules as vertices).

        Items may be :class:`EdgeRecord` records or ``(from, to)`` pairs, given one
        by one or as a single list or set. A lone tuple is always one pair.
        """
        if len(edges) == 1 and edges[0] is None:
            return self
        self.highlighted_edges = _unpack(edges)
        return self

    def is_vertex_highlighted(self, number) -> bool:
        number = _vertex_number(number)
        return any(_vertex_number(v) == number for v in self.highlighted_vertices)

    def is_edge_highlighted(self, source, target) -> bool:
        return any(_edge_key(e) == (source, target) for e in self.highlighted_edges)

    def __repr__(self):
        return (
            f"HighlightedGraph({self.graph!r}, vertices={len(self.highlighted_vertices)}, "
            f"edges={len(self.highlighted_edges)})"
        )
