import math

from .errors import ConfigurationError

INIT_POLICIES = ("random", "origin")

# camelCase keys as they appear in the original frontend configs
_ALIASES = {
    "repulsionConstant": "repulsion_constant",
    "attractionConstant": "attraction_constant",
    "centerGravityConstant": "center_gravity_constant",
    "annealDurationSeconds": "anneal_duration",
    "annealDuration": "anneal_duration",
    "maxVelocity": "max_velocity",
    "selectionGatedOnFreeze": "selection_gated_on_freeze",
    "repulsionRange": "repulsion_range",
    "minDistance": "min_distance",
    "initPolicy": "init_policy",
    "initialSpread": "initial_spread",
    "useMass": "use_mass",
}


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class LayoutConfig:
    """Physics and interaction settings for one simulation run.

    Defaults are the tuned values of the 3D demo (gentle movement, settles
    in about ten seconds).
    """

    def __init__(self, repulsion_constant=10.0, attraction_constant=0.03, damping=0.85,
                 center_gravity_constant=0.008, anneal_duration=10.0, max_velocity=None,
                 selection_gated_on_freeze=False, repulsion_range=None, min_distance=1e-3,
                 init_policy="random", initial_spread=8.0, seed=None, use_mass=False):
        # Physics constants
        self.repulsion_constant = repulsion_constant
        self.attraction_constant = attraction_constant
        self.damping = damping
        self.center_gravity_constant = center_gravity_constant
        self.max_velocity = max_velocity
        self.repulsion_range = repulsion_range
        self.min_distance = min_distance
        self.use_mass = use_mass

        # Annealing / interaction
        self.anneal_duration = anneal_duration
        self.selection_gated_on_freeze = selection_gated_on_freeze

        # Initial layout
        self.init_policy = init_policy
        self.initial_spread = initial_spread
        self.seed = seed

    @classmethod
    def from_dict(cls, options):
        """Builds a config from a dict with snake_case or camelCase keys."""
        kwargs = {}
        for key, value in (options or {}).items():
            name = _ALIASES.get(key, key)
            if name not in cls().__dict__:
                raise ConfigurationError(key, "unknown option")
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self):
        return dict(self.__dict__)

    def copy(self, **overrides):
        options = self.to_dict()
        options.update(overrides)
        return LayoutConfig(**options)

    def validate(self):
        """Raises ConfigurationError for settings a run can't start with."""
        for name in ("repulsion_constant", "attraction_constant", "center_gravity_constant"):
            value = getattr(self, name)
            if not _is_number(value) or not math.isfinite(value):
                raise ConfigurationError(name, f"must be a finite number, got {value!r}")
            if value < 0:
                raise ConfigurationError(name, f"must not be negative, got {value!r}")

        if not _is_number(self.damping) or not 0 < self.damping < 1:
            raise ConfigurationError("damping", f"must be strictly between 0 and 1, got {self.damping!r}")

        if not _is_number(self.anneal_duration) or not math.isfinite(self.anneal_duration):
            raise ConfigurationError("anneal_duration", f"must be a finite number, got {self.anneal_duration!r}")
        if self.anneal_duration < 0:
            raise ConfigurationError("anneal_duration", f"must not be negative, got {self.anneal_duration!r}")

        for name in ("max_velocity", "repulsion_range"):
            value = getattr(self, name)
            if value is None:
                continue
            if not _is_number(value) or not value > 0:
                raise ConfigurationError(name, f"must be a positive number or None, got {value!r}")

        for name in ("min_distance", "initial_spread"):
            value = getattr(self, name)
            if not _is_number(value) or not math.isfinite(value) or value <= 0:
                raise ConfigurationError(name, f"must be a positive finite number, got {value!r}")

        if self.init_policy not in INIT_POLICIES:
            raise ConfigurationError("init_policy", f"must be one of {INIT_POLICIES}, got {self.init_policy!r}")

        if self.seed is not None and not isinstance(self.seed, (int, str, bytes)):
            raise ConfigurationError("seed", f"must be an int, str, bytes or None, got {self.seed!r}")

        return self

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"LayoutConfig({fields})"
