import polars as pl

_EDGE_SCHEMA = {"from": pl.Int64, "to": pl.Int64, "weight": pl.Int64}
_VERTEX_SCHEMA = {"number": pl.Int64, "out_degree": pl.Int64, "in_degree": pl.Int64}


class ViewsClass:
    # Table views

    def edges_view(self):
        """Polars DF [DataFrame] of the edge list.

        Returns
        ---
        polars.DataFrame
            Columns ``from``, ``to``, ``weight`` (Int64), one row per edge record in
            edge-list order. An empty graph yields an empty frame with the same schema.

        """
        edges = self._edges
        return pl.DataFrame(
            {
                "from": [e.source for e in edges],
                "to": [e.target for e in edges],
                "weight": [e.weight for e in edges],
            },
            schema=_EDGE_SCHEMA,
        )

    def vertices_view(self):
        """Polars DF [DataFrame] of vertices with out/in degree counts.

        Returns
        ---
        polars.DataFrame
            Columns ``number``, ``out_degree``, ``in_degree`` in vertex order.

        """
        numbers = [v.number for v in self._vertices]
        if not numbers:
            return pl.DataFrame(schema=_VERTEX_SCHEMA)
        out_deg = dict.fromkeys(numbers, 0)
        in_deg = dict.fromkeys(numbers, 0)
        for e in self._edges:
            if e.source in out_deg:
                out_deg[e.source] += 1
            if e.target in in_deg:
                in_deg[e.target] += 1
        return pl.DataFrame(
            {
                "number": numbers,
                "out_degree": [out_deg[n] for n in numbers],
                "in_degree": [in_deg[n] for n in numbers],
            },
            schema=_VERTEX_SCHEMA,
        )
