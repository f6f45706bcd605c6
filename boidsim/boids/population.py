"""Agent collection stored as flat numpy arrays."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

import numpy as np

from .boid import Boid
from .params import ALIGNMENT, COHESION, SEPARATION, ParameterSet


class TickPhase(Enum):
    """Progress of a population through one simulation tick."""
    IDLE = "idle"
    INTERACTION_DONE = "interaction_done"
    ENVIRONMENT_DONE = "environment_done"
    INTEGRATION_DONE = "integration_done"


def restrict_lengths(vectors: np.ndarray, min_len: float, max_len: float) -> np.ndarray:
    """
    Rescale each row of an (n, 3) array into [min_len, max_len].

    Zero-length rows are returned unchanged.
    """
    lengths = np.linalg.norm(vectors, axis=1)
    target = np.clip(lengths, min_len, max_len)
    scale = np.ones_like(lengths)
    nonzero = lengths > 0.0
    scale[nonzero] = target[nonzero] / lengths[nonzero]
    return vectors * scale[:, None]


@dataclass
class Population:
    """
    Per-boid simulation state (structure of arrays, float64).

    Attributes:
        positions: (n, 3) positions
        velocities: (n, 3) velocities
        corr_counts: (n, 3) contributing neighbor counts per rule
        corr_sums: (n, 3, 3) summed contributions, indexed [boid, rule, axis]
        env_forces: (n, 3) boundary force
        phase: Where the population is within the current tick
    """
    positions: np.ndarray
    velocities: np.ndarray
    corr_counts: np.ndarray = None
    corr_sums: np.ndarray = None
    env_forces: np.ndarray = None
    phase: TickPhase = field(default=TickPhase.IDLE)

    def __post_init__(self):
        self.positions = np.ascontiguousarray(self.positions, dtype=np.float64)
        self.velocities = np.ascontiguousarray(self.velocities, dtype=np.float64)
        n = self.positions.shape[0]
        if self.positions.shape != (n, 3) or self.velocities.shape != (n, 3):
            raise ValueError(
                f"positions and velocities must both be ({n}, 3), got "
                f"{self.positions.shape} and {self.velocities.shape}"
            )
        if self.corr_counts is None:
            self.corr_counts = np.zeros((n, 3), dtype=np.int64)
        if self.corr_sums is None:
            self.corr_sums = np.zeros((n, 3, 3), dtype=np.float64)
        if self.env_forces is None:
            self.env_forces = np.zeros((n, 3), dtype=np.float64)

    @property
    def count(self) -> int:
        return self.positions.shape[0]

    def __len__(self) -> int:
        return self.count

    def boid(self, index: int) -> Boid:
        """Copy one boid's state into a Boid view."""
        counts = self.corr_counts[index]
        sums = self.corr_sums[index]
        return Boid(
            position=self.positions[index].copy(),
            velocity=self.velocities[index].copy(),
            cohesion=(int(counts[COHESION]), sums[COHESION].copy()),
            separation=(int(counts[SEPARATION]), sums[SEPARATION].copy()),
            alignment=(int(counts[ALIGNMENT]), sums[ALIGNMENT].copy()),
            environmental_force=self.env_forces[index].copy(),
        )

    def speeds(self) -> np.ndarray:
        return np.linalg.norm(self.velocities, axis=1)

    def reset_accumulators(self):
        self.corr_counts.fill(0)
        self.corr_sums.fill(0.0)
        self.env_forces.fill(0.0)

    def copy(self) -> "Population":
        return Population(
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            corr_counts=self.corr_counts.copy(),
            corr_sums=self.corr_sums.copy(),
            env_forces=self.env_forces.copy(),
            phase=self.phase,
        )


def initialize_population(
    count: int,
    rng: Union[int, np.random.Generator, None] = None,
    params: Optional[ParameterSet] = None,
) -> Population:
    """
    Spawn `count` boids with uniform random state.

    Positions and velocities are drawn from [-1, 1]^3; velocities are
    then rescaled into the speed bounds of `params` (default preset when
    omitted).

    Args:
        count: Number of boids (fixed for the lifetime of the population)
        rng: Seed or numpy Generator; None draws fresh entropy
        params: Parameter set supplying min/max velocity
    """
    if count < 0:
        raise ValueError(f"Population size must be non-negative, got {count}")
    if params is None:
        from boidsim.tools.presets import default_parameters
        params = default_parameters()

    generator = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
    positions = generator.uniform(-1.0, 1.0, size=(count, 3))
    velocities = generator.uniform(-1.0, 1.0, size=(count, 3))
    velocities = restrict_lengths(velocities, params.min_velocity, params.max_velocity)
    return Population(positions=positions, velocities=velocities)
