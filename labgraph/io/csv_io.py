"""Delimited adjacency-matrix I/O.

One row per line, fields separated by a single-character separator (``;`` by
default). Row ``y`` / field ``x`` holds the weight of edge ``y -> x``; a blank
or non-numeric field means "no edge". The matrix is N x N where N is the row
count, and vertex ``i`` is created for row ``i``.

Example for vertices {0, 1, 2} and edges (0->1, 5), (1->2, 3)::

    ;5;
    ;;3
    ;;

Public entry points:
- from_matrix_csv(path, separator=";") / to_matrix_csv(graph, path, separator=";")
- from_matrix_lines(lines, separator=";") / to_matrix_string(graph, separator=";")
- from_matrix_frame(df) / to_matrix_frame(graph)  (Polars, or any Narwhals eager frame)

Design notes:
- The format holds one weight per ordered pair, which matches the graph's edge
  uniqueness rule. Graphs loaded from JSON may break that rule or use numbers
  outside ``0..N-1``; exporting them is lossy and emits a ``UserWarning``.
- Rows may carry extra fields past N (e.g. a trailing separator); they are ignored.
  Rows with fewer than N fields are rejected.
"""

from __future__ import annotations

import math
import re
import warnings
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import narwhals as nw
import numpy as np
import polars as pl

from ..core._errors import ParseError
from ..core._records import EdgeRecord, Vertex, fits_int64

if TYPE_CHECKING:
    from ..core.graph import Graph

DEFAULT_SEPARATOR = ";"

# ---------------------------
# Helpers / parsing utilities
# ---------------------------

_INT_CELL = re.compile(r"^\s*[+-]?\d+\s*$")


def _check_separator(separator: str) -> None:
    if not isinstance(separator, str) or len(separator) != 1:
        raise ValueError(f"Separator must be a single character, got {separator!r}.")


def _parse_text_cell(cell: str) -> int | None:
    if cell is None or not _INT_CELL.match(cell):
        return None
    value = int(cell)
    # out-of-range digits are "no edge", like any other non-weight cell
    return value if fits_int64(value) else None


def _parse_value_cell(cell: Any) -> int | None:
    """Parse a dataframe cell: integers and integral floats are weights."""
    if cell is None or isinstance(cell, (bool, np.bool_)):
        return None
    if isinstance(cell, (int, np.integer)):
        value = int(cell)
    elif isinstance(cell, (float, np.floating)):
        if math.isnan(cell) or not float(cell).is_integer():
            return None
        value = int(cell)
    else:
        value = None
    if value is not None:
        return value if fits_int64(value) else None
    if isinstance(cell, str):
        return _parse_text_cell(cell)
    return None


def _graph_from_rows(rows: list, parse, source, graph_cls=None) -> Graph:
    if graph_cls is None:
        from ..core.graph import Graph as graph_cls

    n = len(rows)
    W = np.zeros((n, n), dtype=np.int64)
    mask = np.zeros((n, n), dtype=bool)
    for y, row in enumerate(rows):
        if len(row) < n:
            raise ParseError(f"Matrix row {y} has {len(row)} fields, expected {n}.")
        for x in range(n):
            w = parse(row[x])
            if w is not None:
                W[y, x] = w
                mask[y, x] = True

    vertices = [Vertex(i) for i in range(n)]
    # argwhere walks row-major, which keeps edges in (from, to) order
    edges = [EdgeRecord(int(y), int(x), int(W[y, x])) for y, x in np.argwhere(mask)]
    return graph_cls._from_records(vertices, edges, source=source)


def _cell_weights(graph: Graph) -> tuple[int, dict]:
    """Map ``(from, to) -> weight`` for every edge that fits the N x N grid."""
    n = graph.number_of_vertices()
    weights: dict[tuple[int, int], int] = {}
    dropped = []
    for e in graph._edges:
        if not (0 <= e.source < n and 0 <= e.target < n) or e.key in weights:
            dropped.append(e)
            continue
        weights[e.key] = e.weight
    if dropped:
        msgs = ", ".join(f"{e.source}->{e.target}" for e in dropped[:5])
        more = f" (+{len(dropped) - 5} more)" if len(dropped) > 5 else ""
        warnings.warn(
            f"Matrix export is lossy: {len(dropped)} edge(s) not representable: {msgs}{more}",
            UserWarning,
            stacklevel=3,
        )
    return n, weights


# ---------------------------
# Text
# ---------------------------


def from_matrix_lines(
    lines: Iterable[str], separator: str = DEFAULT_SEPARATOR, *, graph_cls=None
) -> Graph:
    """Build a Graph from matrix rows.

    Parameters
    --
    lines : Iterable[str]
        One string per row; a trailing newline is stripped.
    separator : str, default ";"
    graph_cls : type, optional
        Graph subclass to build. Defaults to :class:`Graph`.

    Raises
    --
    ParseError
        If a row has fewer fields than there are rows.
    ValueError
        If ``separator`` is not a single character.

    """
    _check_separator(separator)
    rows = [line.rstrip("\r\n").split(separator) for line in lines]
    return _graph_from_rows(rows, _parse_text_cell, source="<lines>", graph_cls=graph_cls)


def to_matrix_string(graph: Graph, separator: str = DEFAULT_SEPARATOR) -> str:
    """Encode ``graph`` as an N x N separator-joined grid, rows newline-terminated."""
    _check_separator(separator)
    n, weights = _cell_weights(graph)
    out = []
    for y in range(n):
        cells = (str(weights[(y, x)]) if (y, x) in weights else "" for x in range(n))
        out.append(separator.join(cells) + "\n")
    return "".join(out)


# ---------------------------
# Files
# ---------------------------


def from_matrix_csv(path, separator: str = DEFAULT_SEPARATOR, *, graph_cls=None) -> Graph:
    """Load a Graph from a delimited matrix file (whole-file read).

    Raises
    --
    ParseError
        If the file is not valid UTF-8 or a row is too short.

    """
    _check_separator(separator)
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as exc:
        raise ParseError(f"Matrix file {path} is not valid UTF-8: {exc}") from exc
    rows = [line.split(separator) for line in text.splitlines()]
    return _graph_from_rows(rows, _parse_text_cell, source=str(path), graph_cls=graph_cls)


def to_matrix_csv(graph: Graph, path, separator: str = DEFAULT_SEPARATOR) -> None:
    """Write ``graph`` to ``path`` as a delimited matrix (whole-file write)."""
    text = to_matrix_string(graph, separator=separator)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


# ---------------------------
# DataFrames
# ---------------------------


def to_matrix_frame(graph: Graph) -> pl.DataFrame:
    """Adjacency matrix as a Polars DF [DataFrame].

    Columns are named ``"0".."N-1"`` (Int64); absent edges are null.
    """
    n, weights = _cell_weights(graph)
    data = {
        str(x): pl.Series(str(x), [weights.get((y, x)) for y in range(n)], dtype=pl.Int64)
        for x in range(n)
    }
    return pl.DataFrame(data)


def from_matrix_frame(df, *, graph_cls=None) -> Graph:
    """Build a Graph from a square matrix frame (Polars, pandas, ...).

    Integer (or integral float) cells become edge weights; nulls, NaN and
    non-numeric strings mean "no edge". Column names are ignored.
    """
    ndf = nw.from_native(df, eager_only=True)
    rows = ndf.rows()
    return _graph_from_rows(rows, _parse_value_cell, source="<frame>", graph_cls=graph_cls)
