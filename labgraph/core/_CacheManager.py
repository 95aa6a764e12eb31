import numpy as np
import scipy.sparse as sp

from ._records import AdjacencyEntry


class CacheManager:
    """Cache manager for views derived from the edge list.

    Every cached view is tagged with the graph version it was built from and
    rebuilt on first access after a mutation, so no view can go stale.
    """

    def __init__(self, graph):
        self._G = graph
        self._index = None
        self._adjacency = None
        self._matrix = None
        self._index_version = None
        self._adjacency_version = None
        self._matrix_version = None

    # ==================== Properties ====================

    @property
    def index(self):
        """Get ``{vertex number: position in vertex order}``."""
        if self._index is None or self._index_version != self._G._version:
            self._index = {v.number: pos for pos, v in enumerate(self._G._vertices)}
            self._index_version = self._G._version
        return self._index

    @property
    def adjacency(self):
        """Get the adjacency projection ``{source number: [AdjacencyEntry, ...]}``.

        Every vertex has a (possibly empty) list; entries follow edge-list order.
        """
        if self._adjacency is None or self._adjacency_version != self._G._version:
            proj = {v.number: [] for v in self._G._vertices}
            for e in self._G._edges:
                proj.setdefault(e.source, []).append(AdjacencyEntry(e.target, e.weight))
            self._adjacency = proj
            self._adjacency_version = self._G._version
        return self._adjacency

    @property
    def matrix(self):
        """Get the weighted adjacency matrix in CSR (Compressed Sparse Row) format.

        Rows/columns follow vertex order. When the same ordered pair occurs
        more than once (possible after a raw load) the first edge wins.
        """
        if self._matrix is None or self._matrix_version != self._G._version:
            idx = self.index
            n = len(idx)
            M = sp.dok_matrix((n, n), dtype=np.int64)
            seen = set()
            for e in self._G._edges:
                if e.key in seen:
                    continue
                seen.add(e.key)
                M[idx[e.source], idx[e.target]] = e.weight
            self._matrix = M.tocsr()
            self._matrix_version = self._G._version
        return self._matrix

    def has_index(self) -> bool:
        return self._index is not None and self._index_version == self._G._version

    def has_adjacency(self) -> bool:
        """True if the adjacency cache exists and matches the current graph version."""
        return self._adjacency is not None and self._adjacency_version == self._G._version

    def has_matrix(self) -> bool:
        return self._matrix is not None and self._matrix_version == self._G._version

    # ==================== Cache Management ====================

    def invalidate(self, formats=None):
        """Invalidate cached views.

        Parameters
        --
        formats : list[str], optional
            Views to invalidate ('index', 'adjacency', 'matrix').
            If None, invalidate all.

        """
        if formats is None:
            formats = ["index", "adjacency", "matrix"]

        for fmt in formats:
            if fmt == "index":
                self._index = None
                self._index_version = None
            elif fmt == "adjacency":
                self._adjacency = None
                self._adjacency_version = None
            elif fmt == "matrix":
                self._matrix = None
                self._matrix_version = None

    def build(self, formats=None):
        """Pre-build the given views (eager caching)."""
        if formats is None:
            formats = ["index", "adjacency", "matrix"]

        for fmt in formats:
            if fmt == "index":
                _ = self.index
            elif fmt == "adjacency":
                _ = self.adjacency
            elif fmt == "matrix":
                _ = self.matrix

    def clear(self):
        """Clear all caches."""
        self.invalidate()

    def info(self):
        """Get cache status.

        Returns
        ---
        dict
            ``{"index": {...}, "adjacency": {...}, "matrix": {...}}`` with a
            ``cached`` flag per view, plus ``size_bytes`` for the matrix.

        """
        out = {
            "index": {"cached": self.has_index()},
            "adjacency": {"cached": self.has_adjacency()},
            "matrix": {"cached": self.has_matrix()},
        }
        if self.has_matrix():
            m = self._matrix
            out["matrix"]["size_bytes"] = int(m.data.nbytes + m.indices.nbytes + m.indptr.nbytes)
        return out
