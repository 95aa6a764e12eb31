"""Structured-document (JSON) I/O.

Document shape, written with stable field order::

    {
      "vertices": [{"number": 0}, ...],
      "edges": [{"from": 0, "weight": 5, "to": 1}, ...]
    }

Only vertices and edge records are persisted; the adjacency projection is
derived and rebuilt by the reconciliation pass that every loader runs.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from ..core._errors import ParseError
from ..core._records import EdgeRecord, Vertex, fits_int64

if TYPE_CHECKING:
    from ..core.graph import Graph


def _to_doc(graph: Graph) -> dict:
    return {
        "vertices": [v.to_dict() for v in graph._vertices],
        "edges": [e.to_dict() for e in graph._edges],
    }


def _require_int(rec, key, where):
    if not isinstance(rec, dict):
        raise ParseError(f"{where}: expected an object, got {type(rec).__name__}.")
    if key not in rec:
        raise ParseError(f"{where}: missing required field '{key}'.")
    val = rec[key]
    # bool is an int subclass; reject it explicitly
    if isinstance(val, bool) or not isinstance(val, int):
        raise ParseError(f"{where}: field '{key}' must be an integer, got {val!r}.")
    if not fits_int64(val):
        raise ParseError(f"{where}: field '{key}' is outside the 64-bit integer range.")
    return val


def _from_doc(doc, source=None, graph_cls=None) -> Graph:
    if graph_cls is None:
        from ..core.graph import Graph as graph_cls

    if not isinstance(doc, dict):
        raise ParseError("Graph document must be a JSON object.")
    for key in ("vertices", "edges"):
        if not isinstance(doc.get(key), list):
            raise ParseError(f"Graph document must contain a '{key}' list.")

    vertices = [
        Vertex(_require_int(rec, "number", f"vertices[{i}]"))
        for i, rec in enumerate(doc["vertices"])
    ]
    edges = [
        EdgeRecord(
            source=_require_int(rec, "from", f"edges[{i}]"),
            target=_require_int(rec, "to", f"edges[{i}]"),
            weight=_require_int(rec, "weight", f"edges[{i}]"),
        )
        for i, rec in enumerate(doc["edges"])
    ]
    return graph_cls._from_records(vertices, edges, source=source)


def to_json_string(graph: Graph, *, indent: int = 2) -> str:
    """Encode ``graph`` as an indented JSON document."""
    return json.dumps(_to_doc(graph), ensure_ascii=False, indent=indent)


def from_json_string(text: str, *, graph_cls=None) -> Graph:
    """Decode a JSON document and reconcile it into a Graph.

    Raises
    --
    ParseError
        On malformed JSON, a missing ``vertices``/``edges`` list, or a record with a
        missing, non-integer or out-of-range field.
    NotFoundError
        If an edge references a vertex that is not in the document.

    """
    try:
        doc = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"Malformed JSON document: {exc}") from exc
    return _from_doc(doc, source="<string>", graph_cls=graph_cls)


def to_json(graph: Graph, path, *, indent: int = 2):
    """Write ``graph`` to ``path`` as an indented JSON document (whole-file write)."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_json_string(graph, indent=indent))
        f.write("\n")


def from_json(path, *, graph_cls=None) -> Graph:
    """Load a Graph from a JSON document at ``path``.

    See :func:`from_json_string` for the errors raised.
    """
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
        doc = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"Malformed JSON document {path}: {exc}") from exc
    return _from_doc(doc, source=str(path), graph_cls=graph_cls)
