"""labgraph.io: consolidated I/O API with lazy symbol loading."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_lazy_symbols: dict[str, tuple[str, str]] = {
    # JSON
    "to_json": ("labgraph.io.json_io", "to_json"),
    "from_json": ("labgraph.io.json_io", "from_json"),
    "to_json_string": ("labgraph.io.json_io", "to_json_string"),
    "from_json_string": ("labgraph.io.json_io", "from_json_string"),
    # Delimited matrix
    "to_matrix_csv": ("labgraph.io.csv_io", "to_matrix_csv"),
    "from_matrix_csv": ("labgraph.io.csv_io", "from_matrix_csv"),
    "to_matrix_string": ("labgraph.io.csv_io", "to_matrix_string"),
    "from_matrix_lines": ("labgraph.io.csv_io", "from_matrix_lines"),
    "to_matrix_frame": ("labgraph.io.csv_io", "to_matrix_frame"),
    "from_matrix_frame": ("labgraph.io.csv_io", "from_matrix_frame"),
}

__all__ = sorted(_lazy_symbols)


def __getattr__(name: str) -> Any:
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))
