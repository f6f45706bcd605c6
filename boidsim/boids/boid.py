"""Read-only view of a single boid's state."""

import numpy as np
from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class Boid:
    """
    Snapshot of one boid (bird-oid object) taken from a Population.

    Attributes:
        position: 3D position vector
        velocity: 3D velocity vector
        cohesion: (count, sum) correction factor accumulated this tick
        separation: (count, sum) correction factor accumulated this tick
        alignment: (count, sum) correction factor accumulated this tick
        environmental_force: Boundary force computed this tick
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    cohesion: Tuple[int, np.ndarray] = field(default_factory=lambda: (0, np.zeros(3)))
    separation: Tuple[int, np.ndarray] = field(default_factory=lambda: (0, np.zeros(3)))
    alignment: Tuple[int, np.ndarray] = field(default_factory=lambda: (0, np.zeros(3)))
    environmental_force: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    def is_settled(self) -> bool:
        """True when every per-tick accumulator is zero."""
        return (
            all(count == 0 and not total.any()
                for count, total in (self.cohesion, self.separation, self.alignment))
            and not self.environmental_force.any()
        )
