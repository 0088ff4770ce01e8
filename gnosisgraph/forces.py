import math
import random


def random_unit_vector(rng):
    """Uniformly distributed direction on the unit sphere."""
    z = rng.uniform(-1.0, 1.0)
    theta = rng.uniform(0.0, 2.0 * math.pi)
    r = math.sqrt(1.0 - z * z)
    return (r * math.cos(theta), r * math.sin(theta), z)


class ForceSolver:
    """Computes the net force on every node for one frame.

    Forces are velocity deltas (mass 1 unless `use_mass` is on). Nothing on
    the graph is mutated; the only hidden state is the RNG used to pull
    coincident nodes apart.
    """

    def __init__(self, config, rng=None):
        self.config = config
        self.rng = rng or random.Random(config.seed)

    def _separation(self, dx, dy, dz):
        """Returns the unit direction (ux, uy, uz), the real distance and
        whether the direction was jittered.

        Points closer than `min_distance` have no usable direction, so a
        random unit vector stands in for it.
        """
        dist = math.sqrt(dx * dx + dy * dy + dz * dz)
        if dist < self.config.min_distance:
            ux, uy, uz = random_unit_vector(self.rng)
            return ux, uy, uz, dist, True
        return dx / dist, dy / dist, dz / dist, dist, False

    def compute(self, graph):
        config = self.config
        forces = {uid: [0.0, 0.0, 0.0] for uid in graph.nodes}
        node_items = list(graph.nodes.values())

        # 1. Repulsion (all vs all)
        if config.repulsion_constant > 0:
            for i in range(len(node_items)):
                n1 = node_items[i]
                f1 = forces[n1.uid]
                for j in range(i + 1, len(node_items)):
                    n2 = node_items[j]
                    ux, uy, uz, dist, jittered = self._separation(n1.x - n2.x, n1.y - n2.y, n1.z - n2.z)

                    # Range is checked on the real distance, coincident nodes are always in range
                    if not jittered and config.repulsion_range is not None and dist >= config.repulsion_range:
                        continue

                    # F = k / dist^2, pushing n1 away from n2; jittered pairs push as if 1 apart
                    if jittered:
                        dist = 1.0
                    f = config.repulsion_constant / (dist * dist)
                    fx = ux * f
                    fy = uy * f
                    fz = uz * f

                    f2 = forces[n2.uid]
                    f1[0] += fx
                    f1[1] += fy
                    f1[2] += fz
                    f2[0] -= fx
                    f2[1] -= fy
                    f2[2] -= fz

        # 2. Spring attraction (edges)
        if config.attraction_constant > 0:
            for edge in graph.resolved_edges:
                if edge.source == edge.target:
                    continue
                n1 = graph.nodes[edge.source]
                n2 = graph.nodes[edge.target]
                ux, uy, uz, dist, _ = self._separation(n2.x - n1.x, n2.y - n1.y, n2.z - n1.z)

                # F = k * (current_dist - rest_length), pulling n1 toward n2.
                # Coincident endpoints keep their real distance; the jitter only picks a direction.
                f = config.attraction_constant * edge.strength * (dist - edge.rest_length)
                fx = ux * f
                fy = uy * f
                fz = uz * f

                f1 = forces[n1.uid]
                f2 = forces[n2.uid]
                f1[0] += fx
                f1[1] += fy
                f1[2] += fz
                f2[0] -= fx
                f2[1] -= fy
                f2[2] -= fz

        # 3. Center gravity (pull to origin)
        k = config.center_gravity_constant
        for n in node_items:
            f = forces[n.uid]
            f[0] -= n.x * k
            f[1] -= n.y * k
            f[2] -= n.z * k

        if config.use_mass:
            for n in node_items:
                f = forces[n.uid]
                f[0] /= n.mass
                f[1] /= n.mass
                f[2] /= n.mass

        return forces
