import enum
import logging
import math
import random

import networkx as nx

from .errors import ConfigurationError, DanglingReferenceWarning

logger = logging.getLogger(__name__)


class SelectionState(enum.Enum):
    INITIAL = "initial"
    SELECTED = "selected"
    UNSELECTED = "unselected"


class Node:
    def __init__(self, uid, label=None, data=None, position=None, mass=1.0):
        self.uid = uid
        self.label = uid if label is None else label
        self.data = data or {}  # color, group, description... never read by the physics
        self.x, self.y, self.z = position if position is not None else (0.0, 0.0, 0.0)
        self.has_initial_position = position is not None  # kept across restarts instead of the init policy
        self.vx = 0.0
        self.vy = 0.0
        self.vz = 0.0
        self.mass = mass

        # Interaction state, only written by the InteractionController
        self.selection = SelectionState.INITIAL
        self.pinned = False

    @property
    def position(self):
        return (self.x, self.y, self.z)

    @position.setter
    def position(self, value):
        self.x, self.y, self.z = (float(c) for c in value)

    @property
    def velocity(self):
        return (self.vx, self.vy, self.vz)

    @velocity.setter
    def velocity(self, value):
        self.vx, self.vy, self.vz = (float(c) for c in value)

    def speed(self):
        return math.sqrt(self.vx * self.vx + self.vy * self.vy + self.vz * self.vz)

    def is_finite(self):
        return all(math.isfinite(c) for c in self.position + self.velocity)

    def __repr__(self):
        return f"Node({self.uid!r}, pos=({self.x:.3f}, {self.y:.3f}, {self.z:.3f}), {self.selection.value})"


class Edge:
    def __init__(self, source, target, strength=1.0, rest_length=0.0):
        self.source = source
        self.target = target
        self.strength = strength
        self.rest_length = rest_length

    def __iter__(self):
        # Lets callers unpack an edge as (u, v)
        return iter((self.source, self.target))

    def __repr__(self):
        return f"Edge({self.source!r}, {self.target!r})"


def _first(mapping, *keys, default=None):
    for key in keys:
        if key in mapping and mapping[key] is not None:
            return mapping[key]
    return default


def _check_position(uid, position):
    if position is None:
        return None
    position = tuple(float(c) for c in position)
    if len(position) == 2:
        position += (0.0,)
    if len(position) != 3 or not all(math.isfinite(c) for c in position):
        raise ConfigurationError("initial_position", f"node {uid!r} needs 2 or 3 finite components, got {position!r}")
    return position


class GraphModel:
    """Nodes and edges of one layout run.

    Topology is fixed once built; only positions, velocities and the
    per-node interaction fields change afterwards.
    """

    def __init__(self):
        self.nodes = {}  # uid -> Node
        self.edges = []  # every Edge given, dangling ones included
        self.resolved_edges = []  # edges whose endpoints both exist
        self.dangling_edges = []
        self.incoming = {}  # uid -> [uids]
        self.outgoing = {}  # uid -> [uids]
        self.explicit_positions = set()  # uids whose start position was given by the caller

    def add_node(self, node):
        if node.uid in self.nodes:
            raise ConfigurationError("nodes", f"duplicate node id {node.uid!r}")
        if not isinstance(node.mass, (int, float)) or isinstance(node.mass, bool) or not node.mass > 0 or not math.isfinite(node.mass):
            raise ConfigurationError("mass", f"node {node.uid!r} mass must be a positive finite number, got {node.mass!r}")
        self.nodes[node.uid] = node
        self.incoming[node.uid] = []
        self.outgoing[node.uid] = []
        if node.has_initial_position:
            self.explicit_positions.add(node.uid)

    def add_edge(self, edge):
        for name in ("strength", "rest_length"):
            value = getattr(edge, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
                raise ConfigurationError(name, f"edge {edge.source!r} -> {edge.target!r} needs a finite number, got {value!r}")
        self.edges.append(edge)

    def resolve_edges(self, on_diagnostic=None):
        """Splits edges into usable and dangling ones and rebuilds adjacency.

        Dangling edges are reported through `on_diagnostic` (one
        DanglingReferenceWarning each) and otherwise ignored.
        """
        self.resolved_edges = []
        self.dangling_edges = []
        for uid in self.nodes:
            self.incoming[uid] = []
            self.outgoing[uid] = []

        for edge in self.edges:
            missing = [uid for uid in (edge.source, edge.target) if uid not in self.nodes]
            if missing:
                self.dangling_edges.append(edge)
                warning = DanglingReferenceWarning(edge.source, edge.target, missing)
                logger.debug(str(warning))
                if on_diagnostic:
                    on_diagnostic(warning)
                continue
            self.resolved_edges.append(edge)
            self.outgoing[edge.source].append(edge.target)
            self.incoming[edge.target].append(edge.source)
        return self.resolved_edges

    def neighbors(self, uid):
        """Both directions, each neighbour once, in edge order."""
        seen = []
        for other in self.outgoing.get(uid, []) + self.incoming.get(uid, []):
            if other != uid and other not in seen:
                seen.append(other)
        return seen

    def place_nodes(self, policy="random", spread=8.0, rng=None, keep=()):
        """Sets start positions for every node not listed in `keep`.

        "random" scatters nodes uniformly in a cube of side `spread` around
        the origin; "origin" stacks them all at (0, 0, 0) and leaves the
        symmetry breaking to the solver's jitter.
        """
        rng = rng or random.Random()
        for node in self.nodes.values():
            node.velocity = (0.0, 0.0, 0.0)
            if node.uid in keep:
                continue
            if policy == "origin":
                node.position = (0.0, 0.0, 0.0)
            else:
                node.position = tuple((rng.random() - 0.5) * spread for _ in range(3))

    def positions(self):
        return {uid: node.position for uid, node in self.nodes.items()}

    @classmethod
    def from_dicts(cls, nodes, edges):
        """Builds a model from plain dicts.

        Nodes: {id, label?, initialPosition?|position?, mass?, metadata?}; any
        other key (color, group, description...) is folded into metadata.
        Edges: {from|source, to|target, strength?, restLength?|rest_length?}.
        """
        graph = cls()
        node_keys = {"id", "uid", "label", "initialPosition", "initial_position", "position", "mass", "metadata"}
        for spec in nodes:
            uid = _first(spec, "id", "uid")
            if uid is None:
                raise ConfigurationError("nodes", f"node without an id: {spec!r}")
            data = dict(spec.get("metadata") or {})
            data.update({k: v for k, v in spec.items() if k not in node_keys})
            position = _check_position(uid, _first(spec, "initialPosition", "initial_position", "position"))
            node = Node(uid, spec.get("label"), data, position, _first(spec, "mass", default=1.0))
            graph.add_node(node)

        for spec in edges:
            graph.add_edge(Edge(
                _first(spec, "from", "source"),
                _first(spec, "to", "target"),
                strength=_first(spec, "strength", default=1.0),
                rest_length=_first(spec, "restLength", "rest_length", default=0.0),
            ))
        return graph

    @classmethod
    def from_networkx(cls, nx_graph):
        """Builds a model from a networkx graph.

        Node attributes become metadata (`label`, `pos` and `mass` are picked
        out); edge attributes `strength` (or `weight`) and `rest_length` are
        honoured.
        """
        graph = cls()
        for n, data in nx_graph.nodes(data=True):
            data = dict(data)
            label = data.pop("label", str(n))
            position = _check_position(n, data.pop("pos", None))
            mass = data.pop("mass", 1.0)
            graph.add_node(Node(n, label, data, position, mass))

        for u, v, data in nx_graph.edges(data=True):
            graph.add_edge(Edge(
                u, v,
                strength=data.get("strength", data.get("weight", 1.0)),
                rest_length=data.get("rest_length", 0.0),
            ))
        return graph

    def to_networkx(self):
        """Exports the current layout; positions land in the `pos` attribute."""
        nx_graph = nx.DiGraph()
        for uid, node in self.nodes.items():
            attrs = dict(node.data)
            attrs.update(label=node.label, pos=node.position, mass=node.mass, selection=node.selection.value)
            nx_graph.add_node(uid, **attrs)
        for edge in self.resolved_edges:
            nx_graph.add_edge(edge.source, edge.target, strength=edge.strength, rest_length=edge.rest_length)
        return nx_graph
