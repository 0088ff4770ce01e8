import logging
import math

logger = logging.getLogger(__name__)


class Integrator:
    """Moves nodes one frame along the solver's forces."""

    def __init__(self, config):
        self.config = config

    def apply(self, graph, forces, anneal_factor=1.0, pointer=None):
        """Updates velocity and position of every node in place.

        v' = (v + F) * damping * anneal_factor, optionally clamped to
        max_velocity, then p' = p + v'. The pinned node is not integrated:
        it sits at `pointer` (when given) with zero velocity.
        """
        scale = self.config.damping * anneal_factor
        max_velocity = self.config.max_velocity

        for n in graph.nodes.values():
            if n.pinned:
                n.vx = n.vy = n.vz = 0.0
                if pointer is not None:
                    n.x, n.y, n.z = pointer
                continue

            fx, fy, fz = forces.get(n.uid, (0.0, 0.0, 0.0))
            vx = (n.vx + fx) * scale
            vy = (n.vy + fy) * scale
            vz = (n.vz + fz) * scale

            if max_velocity is not None:
                speed = math.sqrt(vx * vx + vy * vy + vz * vz)
                if speed > max_velocity:
                    ratio = max_velocity / speed
                    vx *= ratio
                    vy *= ratio
                    vz *= ratio

            x = n.x + vx
            y = n.y + vy
            z = n.z + vz

            if not all(math.isfinite(c) for c in (vx, vy, vz, x, y, z)):
                # Overflow; hold the node where it was
                logger.warning(f"Non-finite update for node {n.uid!r}, velocity reset")
                n.vx = n.vy = n.vz = 0.0
                continue

            n.vx, n.vy, n.vz = vx, vy, vz
            n.x, n.y, n.z = x, y, z
