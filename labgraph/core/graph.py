import time

from ._CacheManager import CacheManager
from ._errors import ConflictError, InvalidOperationError, NotFoundError
from ._History import History
from ._records import AdjacencyEntry, EdgeRecord, Vertex, fits_int64
from ._Views import ViewsClass

# ===================================


class Graph(History, ViewsClass):
    """Directed, weighted graph over densely numbered vertices.

    The graph owns two ordered collections: vertices and edge records. The edge
    list is authoritative; the per-vertex adjacency projection, the vertex index
    and the weighted adjacency matrix are derived views, rebuilt on demand after
    any mutation.

    Parameters
    --
    n : int, optional
        Number of initial vertices, numbered ``0..n-1``.
    history : bool, default True
        Record mutating calls in the in-memory history.

    Notes
    -
    - At most one edge exists per ordered ``(source, target)`` pair. This is enforced
      by :meth:`add_edge`, not by the loaders.
    - Removing a vertex renumbers every greater vertex (and the edges that point at
      them) down by one, so numbers stay dense.

    See Also

    add_vertex, remove_vertex, add_edge, remove_edge, adjacency

    """

    # Construction

    def __init__(self, n: int = 0, history: bool = True):
        n = int(n) if n and n > 0 else 0
        self._vertices: list[Vertex] = [Vertex(i) for i in range(n)]
        self._edges: list[EdgeRecord] = []

        # Derived views keyed on the mutation version
        self._version = 0
        self._cache = CacheManager(self)

        # History and Timeline
        self._history_enabled = bool(history)
        self._history = []  # list[dict]
        self._history_clock0 = time.perf_counter_ns()
        self._install_history_hooks()  # wrap mutating methods

    @classmethod
    def _from_records(cls, vertices, edges, *, source=None, history: bool = True):
        """Build a graph from raw records and run a full reconciliation pass.

        Used by the loaders: records are taken verbatim (no uniqueness check),
        then every edge must resolve both endpoints.

        Raises
        --
        NotFoundError
            If an edge references a vertex number that is not loaded.

        """
        G = cls(history=history)
        G._vertices = list(vertices)
        G._edges = list(edges)
        G._touch()
        G._reconcile_all()
        G._log_event("load", source=source, vertices=len(G._vertices), edges=len(G._edges))
        return G

    def _touch(self):
        self._version += 1

    # Reconciliation

    def _reconcile(self, edge: EdgeRecord):
        """Resolve both endpoints of ``edge`` against the vertex index."""
        idx = self._cache.index
        missing = [n for n in (edge.source, edge.target) if n not in idx]
        if missing:
            names = " and ".join(str(n) for n in dict.fromkeys(missing))
            raise NotFoundError(
                f"Edge from {edge.source} to {edge.target} references missing vertex {names}."
            )

    def _reconcile_all(self):
        # The projection is derived, so repeated passes never duplicate entries.
        for edge in self._edges:
            self._reconcile(edge)

    # Vertices

    def add_vertex(self, number=None):
        """Append a vertex.

        Parameters
        --
        number : int, optional
            Explicit vertex number. Defaults to ``max(existing numbers) + 1``.

        Returns
        ---
        int
            The number of the new vertex.

        Raises
        --
        InvalidOperationError
            If the graph is empty and no ``number`` is given.
        ConflictError
            If ``number`` is already taken.

        """
        if number is None:
            if not self._vertices:
                raise InvalidOperationError(
                    "Cannot derive a vertex number on an empty graph; pass number= explicitly."
                )
            number = max(v.number for v in self._vertices) + 1
        elif number in self._cache.index:
            raise ConflictError(f"Vertex {number} already exists.")

        self._vertices.append(Vertex(number))
        self._touch()
        return number

    def add_vertices(self, count: int):
        """Append ``count`` vertices; an empty graph starts at number 0."""
        numbers = []
        for _ in range(int(count)):
            numbers.append(self.add_vertex(None if self._vertices else 0))
        return numbers

    def remove_vertex(self, number):
        """Remove a vertex, its incident edges, and compact the numbering.

        Parameters
        --
        number : int

        Raises
        --
        NotFoundError
            If no vertex has that number.

        Notes
        -
        - Every vertex with a greater number is decremented by one.
        - Surviving edges are renumbered with the same rule, so they keep pointing
          at the same vertices.

        """
        if number not in self._cache.index:
            raise NotFoundError(f"Vertex {number} does not exist.")

        self._edges = [
            e.renumbered(number)
            for e in self._edges
            if e.source != number and e.target != number
        ]
        self._vertices = [
            Vertex(v.number - 1) if v.number > number else v
            for v in self._vertices
            if v.number != number
        ]
        self._touch()

    def vertex(self, number) -> Vertex:
        if number not in self._cache.index:
            raise NotFoundError(f"Vertex {number} does not exist.")
        return self._vertices[self._cache.index[number]]

    def has_vertex(self, number) -> bool:
        return number in self._cache.index

    def vertices(self):
        """Vertex numbers in vertex order."""
        return [v.number for v in self._vertices]

    def number_of_vertices(self):
        return len(self._vertices)

    # Edges

    def _find_edge(self, source, target):
        for e in self._edges:
            if e.source == source and e.target == target:
                return e
        return None

    def add_edge(self, source, target, weight=1):
        """Add a directed, weighted edge.

        Parameters
        --
        source, target : int
            Vertex numbers of the endpoints.
        weight : int, default 1

        Returns
        ---
        EdgeRecord
            The stored record.

        Raises
        --
        ConflictError
            If an edge ``(source, target)`` already exists (its weight is left unchanged).
        NotFoundError
            If either endpoint is absent. Nothing is added.
        InvalidOperationError
            If ``weight`` does not fit a signed 64-bit integer.

        """
        if not fits_int64(weight):
            raise InvalidOperationError(f"Edge weight {weight} is outside the 64-bit integer range.")
        if self._find_edge(source, target) is not None:
            raise ConflictError(f"Edge from {source} to {target} already exists.")

        edge = EdgeRecord(source, target, weight)
        self._reconcile(edge)
        self._edges.append(edge)
        self._touch()
        return edge

    def remove_edge(self, source, target):
        """Remove the edge ``(source, target)`` and return its record.

        Raises
        --
        NotFoundError
            If the edge does not exist; the edge list is left unchanged.

        """
        for i, e in enumerate(self._edges):
            if e.source == source and e.target == target:
                del self._edges[i]
                self._touch()
                return e
        raise NotFoundError(f"Edge from {source} to {target} does not exist.")

    def get_edge(self, source, target) -> EdgeRecord:
        edge = self._find_edge(source, target)
        if edge is None:
            raise NotFoundError(f"Edge from {source} to {target} does not exist.")
        return edge

    def has_edge(self, source, target) -> bool:
        return self._find_edge(source, target) is not None

    def edges(self):
        """Edge records in edge-list order."""
        return list(self._edges)

    def number_of_edges(self):
        return len(self._edges)

    # Derived views

    def adjacency(self, number) -> list[AdjacencyEntry]:
        """Outgoing adjacency entries of a vertex, in edge-list order.

        Raises
        --
        NotFoundError
            If the vertex does not exist.

        """
        if number not in self._cache.index:
            raise NotFoundError(f"Vertex {number} does not exist.")
        return list(self._cache.adjacency[number])

    def adjacency_list(self):
        """``{vertex number: [AdjacencyEntry, ...]}`` for every vertex."""
        return {n: list(entries) for n, entries in self._cache.adjacency.items()}

    def adjacency_matrix(self, dense: bool = False):
        """Weighted adjacency matrix, rows and columns in :meth:`vertices` order.

        Parameters
        --
        dense : bool, default False
            Return a NumPy array instead of a SciPy CSR matrix.

        Notes
        -
        Absent edges and zero-weight edges are both 0 here; use :meth:`edges`
        when that distinction matters.

        """
        M = self._cache.matrix
        return M.toarray() if dense else M.copy()

    @property
    def cache(self):
        """Access the derived-view cache manager."""
        return self._cache

    # Persistence

    def save_json(self, path, **kwargs):
        from ..io.json_io import to_json

        to_json(self, path, **kwargs)

    @classmethod
    def from_json(cls, path):
        from ..io.json_io import from_json

        return from_json(path, graph_cls=cls)

    def save_csv(self, path, separator=";"):
        from ..io.csv_io import to_matrix_csv

        to_matrix_csv(self, path, separator=separator)

    @classmethod
    def from_csv(cls, path, separator=";"):
        from ..io.csv_io import from_matrix_csv

        return from_matrix_csv(path, separator=separator, graph_cls=cls)

    # Misc

    def copy(self):
        """Independent copy with the same vertices and edges (history starts empty)."""
        G = type(self)(history=self._history_enabled)
        G._vertices = list(self._vertices)
        G._edges = list(self._edges)
        G._touch()
        return G

    def __len__(self):
        return len(self._vertices)

    def __contains__(self, number):
        return self.has_vertex(number)

    def __repr__(self):
        return f"{type(self).__name__}(vertices={len(self._vertices)}, edges={len(self._edges)})"
