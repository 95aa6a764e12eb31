import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import unittest
import warnings

import polars as pl

from labgraph.core._errors import ParseError
from labgraph.core._records import EdgeRecord
from labgraph.core.graph import Graph
from labgraph.io import csv_io


class TestMatrixCSV(unittest.TestCase):
    def setUp(self):
        # vertices {0,1,2}, edges 0->1 (5) and 1->2 (3)
        self.G = Graph(n=3)
        self.G.add_edge(0, 1, 5)
        self.G.add_edge(1, 2, 3)

    def _edge_set(self, G):
        return {(e.source, e.target, e.weight) for e in G.edges()}

    def test_encode_example(self):
        self.assertEqual(csv_io.to_matrix_string(self.G), ";5;\n;;3\n;;\n")

    def test_decode_example(self):
        G2 = csv_io.from_matrix_lines([";5;", ";;3", ";;"])
        self.assertEqual(G2.vertices(), [0, 1, 2])
        self.assertEqual(G2.edges(), [EdgeRecord(0, 1, 5), EdgeRecord(1, 2, 3)])

    def test_round_trip_dense(self):
        G = Graph(n=4)
        G.add_edge(3, 1, 0)
        G.add_edge(0, 0, 7)
        G.add_edge(1, 0, 9)
        G.add_edge(0, 1, 2)
        G.add_edge(2, 3, -4)
        G2 = csv_io.from_matrix_lines(csv_io.to_matrix_string(G).splitlines())
        self.assertEqual(self._edge_set(G), self._edge_set(G2))
        # row-major order after load
        self.assertEqual(
            [e.key for e in G2.edges()], [(0, 0), (0, 1), (1, 0), (2, 3), (3, 1)]
        )

    def test_non_numeric_cells_are_absent(self):
        G = csv_io.from_matrix_lines(["x; 4 ;1.5", "-;;+2", ";abc;"])
        self.assertEqual(self._edge_set(G), {(0, 1, 4), (1, 2, 2)})

    def test_custom_separator(self):
        text = csv_io.to_matrix_string(self.G, separator=",")
        self.assertEqual(text, ",5,\n,,3\n,,\n")
        G2 = csv_io.from_matrix_lines(text.splitlines(), separator=",")
        self.assertEqual(self._edge_set(G2), self._edge_set(self.G))

    def test_separator_must_be_single_character(self):
        with self.assertRaises(ValueError):
            csv_io.to_matrix_string(self.G, separator=";;")
        with self.assertRaises(ValueError):
            csv_io.from_matrix_lines([";"], separator="")

    def test_trailing_separator_is_tolerated(self):
        G2 = csv_io.from_matrix_lines([";5;;", ";;3;", ";;;"])
        self.assertEqual(self._edge_set(G2), {(0, 1, 5), (1, 2, 3)})

    def test_short_row_is_rejected(self):
        with self.assertRaises(ParseError):
            csv_io.from_matrix_lines([";5;", ";", ";;"])

    def test_oversized_cell_is_absent(self):
        G = csv_io.from_matrix_lines([";99999999999999999999", "-99999999999999999999;7"])
        self.assertEqual(self._edge_set(G), {(1, 1, 7)})
        # int64 bounds themselves are still weights
        G2 = csv_io.from_matrix_lines([f"{2**63 - 1};{-(2**63)}", ";"])
        self.assertEqual(self._edge_set(G2), {(0, 0, 2**63 - 1), (0, 1, -(2**63))})
        self.assertEqual(G2.adjacency_matrix(dense=True)[0, 0], 2**63 - 1)

    def test_oversized_frame_value_is_absent(self):
        self.assertIsNone(csv_io._parse_value_cell(2**70))
        self.assertIsNone(csv_io._parse_value_cell(1e30))
        self.assertEqual(csv_io._parse_value_cell(4.0), 4)

    def test_single_vertex_and_empty(self):
        G1 = Graph(n=1)
        self.assertEqual(csv_io.to_matrix_string(G1), "\n")
        self.assertEqual(csv_io.to_matrix_string(Graph()), "")
        self.assertEqual(csv_io.from_matrix_lines([""]).vertices(), [0])
        self.assertEqual(csv_io.from_matrix_lines([]).vertices(), [])

    def test_file_round_trip(self):
        import tempfile

        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "graph.csv")
            self.G.save_csv(path)
            with open(path, encoding="utf-8") as f:
                self.assertEqual(f.read(), ";5;\n;;3\n;;\n")
            G2 = Graph.from_csv(path)
            self.assertEqual(self._edge_set(G2), self._edge_set(self.G))

            csv_io.to_matrix_csv(self.G, path, separator="\t")
            G3 = csv_io.from_matrix_csv(path, separator="\t")
            self.assertEqual(self._edge_set(G3), self._edge_set(self.G))

    def test_invalid_utf8_file_is_parse_error(self):
        import tempfile

        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "bad.csv")
            with open(path, "wb") as f:
                f.write(b";5\xff;\n;;\n;;\n")
            with self.assertRaises(ParseError) as ctx:
                csv_io.from_matrix_csv(path)
            self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)

    def test_from_csv_returns_subclass(self):
        import tempfile

        class LabeledGraph(Graph):
            pass

        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "graph.csv")
            self.G.save_csv(path)
            G2 = LabeledGraph.from_csv(path)
        self.assertIsInstance(G2, LabeledGraph)
        self.assertEqual(self._edge_set(G2), self._edge_set(self.G))

    def test_lossy_export_warns(self):
        from labgraph.io.json_io import from_json_string

        G = from_json_string(
            '{"vertices": [{"number": 0}, {"number": 5}],'
            ' "edges": [{"from": 0, "weight": 1, "to": 5}, {"from": 0, "weight": 2, "to": 0}]}'
        )
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            text = csv_io.to_matrix_string(G)
        self.assertEqual(text, "2;\n;\n")
        self.assertTrue(any("lossy" in str(w.message) for w in caught))

    def test_clean_export_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            csv_io.to_matrix_string(self.G)


class TestMatrixFrames(unittest.TestCase):
    def setUp(self):
        self.G = Graph(n=3)
        self.G.add_edge(0, 1, 5)
        self.G.add_edge(1, 2, 3)
        self.G.add_edge(2, 2, 1)

    def test_to_matrix_frame(self):
        df = csv_io.to_matrix_frame(self.G)
        self.assertEqual(df.columns, ["0", "1", "2"])
        self.assertEqual(df.dtypes, [pl.Int64, pl.Int64, pl.Int64])
        self.assertEqual(df.row(0), (None, 5, None))
        self.assertEqual(df.row(2), (None, None, 1))

    def test_polars_frame_round_trip(self):
        G2 = csv_io.from_matrix_frame(csv_io.to_matrix_frame(self.G))
        self.assertEqual(G2.edges(), self.G.edges())

    def test_pandas_frame(self):
        try:
            import pandas as pd
        except ImportError:
            self.skipTest("pandas not installed")
        pdf = pd.DataFrame({"a": [None, None, 7], "b": [4, None, None], "c": ["", "x", "2"]})
        G = csv_io.from_matrix_frame(pdf)
        self.assertEqual(
            {(e.source, e.target, e.weight) for e in G.edges()},
            {(2, 0, 7), (0, 1, 4), (2, 2, 2)},
        )

    def test_empty_frame(self):
        df = csv_io.to_matrix_frame(Graph())
        self.assertEqual(df.height, 0)


if __name__ == "__main__":
    unittest.main()
