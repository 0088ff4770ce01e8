import unittest
import os
import sys
import random

import networkx as nx

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gnosisgraph.errors import ConfigurationError, DanglingReferenceWarning
from gnosisgraph.graph_model import GraphModel, SelectionState
from gnosisgraph.samples import agile_frameworks, knowledge_network


class TestGraphModel(unittest.TestCase):
    def test_from_dicts_reads_aliases_and_metadata(self):
        graph = GraphModel.from_dicts(
            [
                {"id": "a", "label": "A", "initialPosition": [1, 2, 3], "mass": 2, "color": "#fff"},
                {"id": "b", "metadata": {"group": "core"}, "position": (4, 5)},
            ],
            [
                {"from": "a", "to": "b", "strength": 2, "restLength": 1.5},
                {"source": "b", "target": "a"},
            ],
        )
        a = graph.nodes["a"]
        b = graph.nodes["b"]
        self.assertEqual(a.label, "A")
        self.assertEqual(a.position, (1.0, 2.0, 3.0))
        self.assertEqual(a.mass, 2)
        self.assertEqual(a.data, {"color": "#fff"})
        self.assertEqual(b.label, "b")
        self.assertEqual(b.position, (4.0, 5.0, 0.0))
        self.assertEqual(b.data, {"group": "core"})
        self.assertEqual(graph.explicit_positions, {"a", "b"})

        first, second = graph.edges
        self.assertEqual((first.source, first.target, first.strength, first.rest_length), ("a", "b", 2, 1.5))
        self.assertEqual((second.source, second.target, second.strength, second.rest_length), ("b", "a", 1.0, 0.0))

    def test_new_nodes_start_unselected_and_unpinned(self):
        graph = GraphModel.from_dicts([{"id": "a"}], [])
        self.assertIs(graph.nodes["a"].selection, SelectionState.INITIAL)
        self.assertFalse(graph.nodes["a"].pinned)
        self.assertEqual(graph.nodes["a"].velocity, (0.0, 0.0, 0.0))

    def test_duplicate_ids_rejected(self):
        with self.assertRaises(ConfigurationError):
            GraphModel.from_dicts([{"id": "a"}, {"id": "a"}], [])

    def test_bad_mass_and_position_rejected(self):
        with self.assertRaises(ConfigurationError):
            GraphModel.from_dicts([{"id": "a", "mass": 0}], [])
        with self.assertRaises(ConfigurationError):
            GraphModel.from_dicts([{"id": "a", "position": [0, float("nan"), 0]}], [])
        with self.assertRaises(ConfigurationError):
            GraphModel.from_dicts([{"id": "a"}], [{"from": "a", "to": "a", "strength": float("inf")}])

    def test_resolve_edges_reports_dangling(self):
        graph = GraphModel.from_dicts(
            [{"id": "a"}, {"id": "b"}],
            [{"from": "a", "to": "b"}, {"from": "a", "to": "ghost"}, {"from": "nope", "to": "ghost"}],
        )
        seen = []
        resolved = graph.resolve_edges(seen.append)

        self.assertEqual([(e.source, e.target) for e in resolved], [("a", "b")])
        self.assertEqual(len(graph.dangling_edges), 2)
        self.assertEqual(len(seen), 2)
        self.assertIsInstance(seen[0], DanglingReferenceWarning)
        self.assertEqual(seen[0].missing, ["ghost"])
        self.assertEqual(seen[1].missing, ["nope", "ghost"])
        self.assertEqual(graph.outgoing["a"], ["b"])
        self.assertEqual(graph.incoming["b"], ["a"])

    def test_neighbors_cover_both_directions_once(self):
        nodes, edges = agile_frameworks()
        graph = GraphModel.from_dicts(nodes, edges)
        graph.resolve_edges()
        self.assertEqual(graph.neighbors("devops"), ["agile", "safe", "less"])
        self.assertEqual(sorted(graph.neighbors("agile")), ["cynefin", "devops", "less", "safe"])

    def test_place_nodes_origin_policy(self):
        graph = GraphModel.from_dicts([{"id": "a"}, {"id": "b"}], [])
        graph.place_nodes("origin")
        self.assertTrue(all(p == (0.0, 0.0, 0.0) for p in graph.positions().values()))

    def test_place_nodes_random_policy_is_seeded_and_bounded(self):
        nodes, edges = knowledge_network()
        first = GraphModel.from_dicts(nodes, edges)
        second = GraphModel.from_dicts(nodes, edges)
        first.place_nodes("random", 8.0, random.Random(42))
        second.place_nodes("random", 8.0, random.Random(42))

        self.assertEqual(first.positions(), second.positions())
        for position in first.positions().values():
            for c in position:
                self.assertLessEqual(abs(c), 4.0)

    def test_place_nodes_keeps_explicit_positions(self):
        graph = GraphModel.from_dicts([{"id": "a", "position": [5, 5, 5]}, {"id": "b"}], [])
        graph.place_nodes("random", 1.0, random.Random(1), keep=graph.explicit_positions)
        self.assertEqual(graph.nodes["a"].position, (5.0, 5.0, 5.0))

    def test_from_networkx(self):
        nx_graph = nx.DiGraph()
        nx_graph.add_node("x", label="Ex", pos=(1, 1, 1), color="red")
        nx_graph.add_node("y", mass=3.0)
        nx_graph.add_edge("x", "y", weight=0.5, rest_length=2.0)

        graph = GraphModel.from_networkx(nx_graph)
        self.assertEqual(graph.nodes["x"].label, "Ex")
        self.assertEqual(graph.nodes["x"].position, (1.0, 1.0, 1.0))
        self.assertEqual(graph.nodes["x"].data, {"color": "red"})
        self.assertEqual(graph.nodes["y"].label, "y")
        self.assertEqual(graph.nodes["y"].mass, 3.0)
        edge = graph.edges[0]
        self.assertEqual((edge.strength, edge.rest_length), (0.5, 2.0))

    def test_to_networkx_exports_layout(self):
        nodes, edges = agile_frameworks()
        edges.append({"from": "agile", "to": "ghost"})
        graph = GraphModel.from_dicts(nodes, edges)
        graph.resolve_edges()
        graph.place_nodes("random", 8.0, random.Random(0))

        exported = graph.to_networkx()
        self.assertEqual(exported.number_of_nodes(), 5)
        self.assertEqual(exported.number_of_edges(), 6)
        self.assertEqual(exported.nodes["safe"]["pos"], graph.nodes["safe"].position)
        self.assertEqual(exported.nodes["safe"]["label"], "SAFe")
        self.assertEqual(exported.nodes["safe"]["selection"], "initial")


if __name__ == '__main__':
    unittest.main()
