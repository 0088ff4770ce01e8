import unittest
import os
import sys
import math

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gnosisgraph.config import LayoutConfig
from gnosisgraph.graph_model import GraphModel
from gnosisgraph.integrator import Integrator


def single_node(velocity=(0.0, 0.0, 0.0)):
    graph = GraphModel.from_dicts([{"id": "a", "position": [0, 0, 0]}], [])
    graph.nodes["a"].velocity = velocity
    return graph


class TestIntegrator(unittest.TestCase):
    def test_damped_velocity_and_position(self):
        graph = single_node((1.0, 0.0, 0.0))
        Integrator(LayoutConfig(damping=0.5)).apply(graph, {"a": [1.0, 2.0, 0.0]}, 1.0)

        node = graph.nodes["a"]
        self.assertEqual(node.velocity, (1.0, 1.0, 0.0))
        self.assertEqual(node.position, (1.0, 1.0, 0.0))

    def test_anneal_factor_scales_step(self):
        graph = single_node((2.0, 0.0, 0.0))
        Integrator(LayoutConfig(damping=0.5)).apply(graph, {"a": [0.0, 0.0, 0.0]}, 0.5)
        self.assertEqual(graph.nodes["a"].velocity, (0.5, 0.0, 0.0))

    def test_zero_anneal_factor_stops_node(self):
        graph = single_node((3.0, 3.0, 3.0))
        Integrator(LayoutConfig()).apply(graph, {"a": [5.0, 5.0, 5.0]}, 0.0)
        self.assertEqual(graph.nodes["a"].velocity, (0.0, 0.0, 0.0))
        self.assertEqual(graph.nodes["a"].position, (0.0, 0.0, 0.0))

    def test_velocity_clamp_keeps_direction(self):
        graph = single_node()
        Integrator(LayoutConfig(damping=0.5, max_velocity=2.0)).apply(graph, {"a": [6.0, 8.0, 0.0]}, 1.0)

        vx, vy, vz = graph.nodes["a"].velocity
        self.assertAlmostEqual(math.sqrt(vx * vx + vy * vy + vz * vz), 2.0)
        self.assertAlmostEqual(vx / vy, 0.75)

    def test_no_clamp_by_default(self):
        graph = single_node()
        Integrator(LayoutConfig(damping=0.5)).apply(graph, {"a": [60.0, 80.0, 0.0]}, 1.0)
        self.assertAlmostEqual(graph.nodes["a"].speed(), 50.0)

    def test_pinned_node_follows_pointer(self):
        graph = single_node((1.0, 1.0, 1.0))
        graph.nodes["a"].pinned = True
        Integrator(LayoutConfig()).apply(graph, {"a": [9.0, 9.0, 9.0]}, 1.0, pointer=(1.0, 2.0, 3.0))

        self.assertEqual(graph.nodes["a"].position, (1.0, 2.0, 3.0))
        self.assertEqual(graph.nodes["a"].velocity, (0.0, 0.0, 0.0))

    def test_pure_damping_decay_is_monotone(self):
        graph = single_node((3.0, -4.0, 1.0))
        integrator = Integrator(LayoutConfig(damping=0.9))
        previous = graph.nodes["a"].speed()
        for _ in range(100):
            integrator.apply(graph, {"a": [0.0, 0.0, 0.0]}, 1.0)
            speed = graph.nodes["a"].speed()
            self.assertLessEqual(speed, previous)
            previous = speed

    def test_overflow_keeps_previous_position(self):
        graph = single_node()
        with self.assertLogs("gnosisgraph.integrator", level="WARNING"):
            Integrator(LayoutConfig()).apply(graph, {"a": [1e308, 1e308, 1e308]}, 1.0)
            Integrator(LayoutConfig()).apply(graph, {"a": [1e308, 1e308, 1e308]}, 1.0)
        self.assertTrue(graph.nodes["a"].is_finite())


if __name__ == '__main__':
    unittest.main()
