import logging
import random

from .annealing import AnnealingScheduler
from .config import LayoutConfig
from .forces import ForceSolver
from .graph_model import GraphModel, SelectionState
from .integrator import Integrator
from .interaction import InteractionController

logger = logging.getLogger(__name__)


class GraphEngine:
    """Force-directed layout for a small graph, advanced one frame per tick.

    The host render loop calls `tick(elapsed_seconds)` every frame and
    forwards pointer events to `attempt_select` and the `drag_*` methods.
    Everything runs synchronously on the caller's thread.
    """

    def __init__(self, graph=None, config=None, on_diagnostic=None):
        self.config = (config or LayoutConfig()).validate()
        self.on_diagnostic = on_diagnostic
        self.rng = random.Random(self.config.seed)

        self.solver = ForceSolver(self.config, self.rng)
        self.integrator = Integrator(self.config)
        self.scheduler = AnnealingScheduler(self.config.anneal_duration)
        self.tick_count = 0

        self._attach(graph or GraphModel())

    def _attach(self, graph):
        self.graph = graph
        self.graph.resolve_edges(self.on_diagnostic)
        self.controller = InteractionController(
            self.graph,
            selection_gated_on_freeze=self.config.selection_gated_on_freeze,
            is_frozen=lambda: self.scheduler.is_frozen,
        )
        self.restart()
        logger.info(f"Loaded graph with {len(self.graph.nodes)} nodes, "
                    f"{len(self.graph.resolved_edges)} edges ({len(self.graph.dangling_edges)} skipped)")

    @property
    def nodes(self):
        return self.graph.nodes

    @property
    def edges(self):
        return self.graph.resolved_edges

    def load(self, nodes, edges):
        """Replaces the graph with one built from node/edge dicts."""
        self._attach(GraphModel.from_dicts(nodes, edges))

    def load_from_networkx(self, nx_graph):
        self._attach(GraphModel.from_networkx(nx_graph))

    def restart(self, seed=None):
        """Starts a new run: fresh start positions, clock back to zero.

        Selection and drag state are cleared as well.
        """
        if seed is not None:
            self.rng.seed(seed)
        self.controller.drag_end()
        self.controller.selected_uid = None
        for node in self.graph.nodes.values():
            node.selection = SelectionState.INITIAL
        self.graph.place_nodes(self.config.init_policy, self.config.initial_spread,
                               self.rng, keep=self.graph.explicit_positions)
        self.scheduler.reset()
        self.tick_count = 0

    def tick(self, elapsed_seconds):
        """Advances the layout by one frame."""
        factor = self.scheduler.advance(elapsed_seconds)
        self.tick_count += 1

        if self.scheduler.is_frozen:
            # Frozen layout; only a dragged node still moves
            for node in self.graph.nodes.values():
                node.vx = node.vy = node.vz = 0.0
            if self.controller.pointer is not None:
                self.graph.nodes[self.controller.pinned_uid].position = self.controller.pointer
            return

        forces = self.solver.compute(self.graph)
        self.integrator.apply(self.graph, forces, factor, self.controller.pointer)

    step = tick

    @property
    def anneal_factor(self):
        return self.scheduler.factor(self.scheduler.elapsed)

    @property
    def is_frozen(self):
        return self.scheduler.is_frozen

    def positions(self):
        return self.graph.positions()

    def attempt_select(self, uid):
        return self.controller.attempt_select(uid)

    def drag_start(self, uid, point):
        return self.controller.drag_start(uid, point)

    def drag_move(self, point):
        self.controller.drag_move(point)

    def drag_end(self):
        self.controller.drag_end()

    @property
    def selected_uid(self):
        return self.controller.selected_uid

    @property
    def pinned_uid(self):
        return self.controller.pinned_uid
