from .config import LayoutConfig
from .errors import ConfigurationError, DanglingReferenceWarning, GnosisGraphError
from .graph_engine import GraphEngine
from .graph_model import Edge, GraphModel, Node, SelectionState

__all__ = [
    "ConfigurationError",
    "DanglingReferenceWarning",
    "Edge",
    "GnosisGraphError",
    "GraphEngine",
    "GraphModel",
    "LayoutConfig",
    "Node",
    "SelectionState",
]
