# labgraph/__init__.py
"""labgraph: single import, full API."""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "io": "labgraph.io",
    "jsonio": "labgraph.io.json_io",
    "csvio": "labgraph.io.csv_io",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "Graph": ("labgraph.core.graph", "Graph"),
    "Vertex": ("labgraph.core._records", "Vertex"),
    "EdgeRecord": ("labgraph.core._records", "EdgeRecord"),
    "AdjacencyEntry": ("labgraph.core._records", "AdjacencyEntry"),
    # Errors
    "ErrorKind": ("labgraph.core._errors", "ErrorKind"),
    "GraphError": ("labgraph.core._errors", "GraphError"),
    "NotFoundError": ("labgraph.core._errors", "NotFoundError"),
    "ConflictError": ("labgraph.core._errors", "ConflictError"),
    "ParseError": ("labgraph.core._errors", "ParseError"),
    "InvalidOperationError": ("labgraph.core._errors", "InvalidOperationError"),
    # JSON
    "to_json": ("labgraph.io.json_io", "to_json"),
    "from_json": ("labgraph.io.json_io", "from_json"),
    # Delimited matrix
    "to_matrix_csv": ("labgraph.io.csv_io", "to_matrix_csv"),
    "from_matrix_csv": ("labgraph.io.csv_io", "from_matrix_csv"),
    # Annotation
    "HighlightedGraph": ("labgraph.utils.highlight", "HighlightedGraph"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("labgraph")
except PackageNotFoundError:
    __version__ = "0.0.0"
