class GnosisGraphError(Exception):
    """Base class for layout engine errors."""


class ConfigurationError(GnosisGraphError, ValueError):
    """Raised when a simulation can't be started with the given settings."""

    def __init__(self, field, message):
        self.field = field
        super().__init__(f"{field}: {message}")


class DanglingReferenceWarning(UserWarning):
    """An edge points at a node id that isn't in the graph.

    Never raised. Handed to the engine's diagnostic callback so callers
    (and tests) can see which edges were skipped.
    """

    def __init__(self, source, target, missing):
        self.source = source
        self.target = target
        self.missing = missing
        super().__init__(f"Edge {source!r} -> {target!r} references unknown node(s): {', '.join(map(repr, missing))}")
