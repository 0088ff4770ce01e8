import logging
import math

from .graph_model import SelectionState

logger = logging.getLogger(__name__)


class InteractionController:
    """Selection and drag state for one graph.

    Selection is display intent only: at most one node is SELECTED, nodes
    never touched stay INITIAL. Dragging pins at most one node, whose
    position then follows the pointer until the drag ends.
    """

    def __init__(self, graph, selection_gated_on_freeze=False, is_frozen=None):
        self.graph = graph
        self.selection_gated_on_freeze = selection_gated_on_freeze
        self.is_frozen = is_frozen or (lambda: True)
        self.selected_uid = None
        self.pinned_uid = None
        self.pointer = None  # last pointer projection (x, y, z) of the pinned node

    def selection_allowed(self):
        return not self.selection_gated_on_freeze or self.is_frozen()

    def selection_snapshot(self):
        return {uid: node.selection for uid, node in self.graph.nodes.items()}

    def attempt_select(self, uid):
        """Toggles selection of `uid` and returns the resulting snapshot."""
        node = self.graph.nodes.get(uid)
        if node is None:
            logger.debug(f"Select ignored, unknown node {uid!r}")
            return self.selection_snapshot()
        if not self.selection_allowed():
            logger.debug(f"Select of {uid!r} rejected, layout still annealing")
            return self.selection_snapshot()

        if node.selection is SelectionState.SELECTED:
            node.selection = SelectionState.UNSELECTED
            self.selected_uid = None
        else:
            previous = self.graph.nodes.get(self.selected_uid)
            if previous is not None:
                previous.selection = SelectionState.UNSELECTED
            node.selection = SelectionState.SELECTED
            self.selected_uid = uid
        return self.selection_snapshot()

    def _to_point(self, node, point):
        try:
            coords = tuple(float(c) for c in point)
        except (TypeError, ValueError):
            return None
        if len(coords) == 2:
            coords += (node.z,)
        if len(coords) != 3 or not all(math.isfinite(c) for c in coords):
            return None
        return coords

    def drag_start(self, uid, point):
        """Pins `uid` at `point`. Returns False if the drag was rejected."""
        if self.pinned_uid is not None:
            logger.debug(f"Drag on {uid!r} rejected, {self.pinned_uid!r} is already pinned")
            return False
        node = self.graph.nodes.get(uid)
        if node is None:
            logger.debug(f"Drag ignored, unknown node {uid!r}")
            return False
        coords = self._to_point(node, point)
        if coords is None:
            logger.debug(f"Drag on {uid!r} ignored, bad pointer {point!r}")
            return False

        node.pinned = True
        node.vx = node.vy = node.vz = 0.0
        node.x, node.y, node.z = coords
        self.pinned_uid = uid
        self.pointer = coords
        return True

    def drag_move(self, point):
        if self.pinned_uid is None:
            return
        node = self.graph.nodes[self.pinned_uid]
        coords = self._to_point(node, point)
        if coords is None:
            logger.debug(f"Drag move ignored, bad pointer {point!r}")
            return
        self.pointer = coords
        # Zero velocity so it doesn't shoot off when released
        node.vx = node.vy = node.vz = 0.0
        node.x, node.y, node.z = coords

    def drag_end(self):
        if self.pinned_uid is None:
            return
        node = self.graph.nodes[self.pinned_uid]
        node.pinned = False
        node.vx = node.vy = node.vz = 0.0
        self.pinned_uid = None
        self.pointer = None
