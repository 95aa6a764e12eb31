from __future__ import annotations

from dataclasses import dataclass

# Bounds of the Int64 columns and int64 matrices the views are built on.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def fits_int64(value) -> bool:
    return INT64_MIN <= value <= INT64_MAX


@dataclass(frozen=True)
class Vertex:
    """A graph vertex identified by its dense, zero-based ``number``."""

    number: int

    def to_dict(self) -> dict:
        return {"number": self.number}


@dataclass(frozen=True)
class EdgeRecord:
    """Directed, weighted edge between two vertex numbers.

    The edge list made of these records is the source of truth for the graph
    structure. ``source``/``target`` are persisted as ``from``/``to``.
    """

    source: int
    target: int
    weight: int = 1

    @property
    def key(self) -> tuple[int, int]:
        return (self.source, self.target)

    def to_dict(self) -> dict:
        # field order is part of the document format
        return {"from": self.source, "weight": self.weight, "to": self.target}

    def renumbered(self, removed: int) -> EdgeRecord:
        """Shift endpoints above ``removed`` down by one."""
        s = self.source - 1 if self.source > removed else self.source
        t = self.target - 1 if self.target > removed else self.target
        if s == self.source and t == self.target:
            return self
        return EdgeRecord(s, t, self.weight)


@dataclass(frozen=True)
class AdjacencyEntry:
    """Outgoing edge as seen from its source vertex (derived, read-only)."""

    destination: int
    weight: int
