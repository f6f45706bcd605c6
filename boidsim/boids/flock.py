"""Flock simulation - brute-force pairwise flocking with Numba JIT kernels."""

import math
import threading
from typing import Optional

import numpy as np
from numba import njit, prange

from boidsim.config import boids as config
from .boid import Boid
from .params import ALIGNMENT, COHESION, SEPARATION, ParameterSet
from .population import Population, TickPhase, initialize_population


# ============================================================================
# NUMBA JIT-COMPILED HELPERS
# ============================================================================

@njit(cache=True)
def rule_applies(dist_sq: float, cos: float, threshold_dist_sq: float, threshold_cos: float) -> bool:
    """Distance and view-cone gate shared by all three rules."""
    return dist_sq < threshold_dist_sq and cos > threshold_cos


@njit(cache=True)
def view_cosine(vx: float, vy: float, vz: float,
                dx: float, dy: float, dz: float, dist_sq: float):
    """
    Cosine between a heading and the direction to a neighbor.

    Returns (visible, cos). A zero-length heading or a coincident
    neighbor has no defined direction and is reported as not visible.
    """
    denom = math.sqrt(vx * vx + vy * vy + vz * vz) * math.sqrt(dist_sq)
    if not denom > 0.0:
        return False, 0.0
    return True, (vx * dx + vy * dy + vz * dz) / denom


@njit(cache=True)
def accumulate_view(
    me: int,
    other: int,
    dx: float, dy: float, dz: float,
    dist_sq: float,
    velocities: np.ndarray,
    corr_counts: np.ndarray,
    corr_sums: np.ndarray,
    rule_dist_sq: np.ndarray,
    rule_cos: np.ndarray,
    merged_routing: bool
):
    """Accumulate what boid `me` sees of `other` along delta (dx, dy, dz)."""
    visible, cos = view_cosine(
        velocities[me, 0], velocities[me, 1], velocities[me, 2],
        dx, dy, dz, dist_sq
    )
    if not visible:
        return

    for rule in range(3):
        if not rule_applies(dist_sq, cos, rule_dist_sq[rule], rule_cos[rule]):
            continue

        if rule == COHESION:
            cx, cy, cz = dx, dy, dz
        elif rule == SEPARATION:
            cx, cy, cz = -dx, -dy, -dz
        else:
            cx = velocities[other, 0] - velocities[me, 0]
            cy = velocities[other, 1] - velocities[me, 1]
            cz = velocities[other, 2] - velocities[me, 2]

        target = COHESION if merged_routing else rule
        corr_counts[me, target] += 1
        corr_sums[me, target, 0] += cx
        corr_sums[me, target, 1] += cy
        corr_sums[me, target, 2] += cz


@njit(cache=True)
def clamp_length(x: float, y: float, z: float, min_len: float, max_len: float):
    """Rescale a vector into [min_len, max_len]; a zero vector is returned as is."""
    length = math.sqrt(x * x + y * y + z * z)
    if length == 0.0:
        return x, y, z
    if length < min_len:
        scale = min_len / length
    elif length > max_len:
        scale = max_len / length
    else:
        return x, y, z
    return x * scale, y * scale, z * scale


# ============================================================================
# PASS KERNELS
# ============================================================================

@njit(cache=True)
def interact_pairs(
    positions: np.ndarray,
    velocities: np.ndarray,
    corr_counts: np.ndarray,
    corr_sums: np.ndarray,
    rule_dist_sq: np.ndarray,
    rule_cos: np.ndarray,
    max_dist_sq: float,
    merged_routing: bool,
    num_boids: int
):
    """Serial all-pairs scan; each unordered pair is visited once and updates both boids."""
    for i in range(num_boids):
        for j in range(i + 1, num_boids):
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            dz = positions[j, 2] - positions[i, 2]
            dist_sq = dx * dx + dy * dy + dz * dz

            # Cheap reject before any per-rule work
            if dist_sq >= max_dist_sq:
                continue

            accumulate_view(i, j, dx, dy, dz, dist_sq, velocities,
                            corr_counts, corr_sums, rule_dist_sq, rule_cos, merged_routing)
            accumulate_view(j, i, -dx, -dy, -dz, dist_sq, velocities,
                            corr_counts, corr_sums, rule_dist_sq, rule_cos, merged_routing)


@njit(parallel=True, cache=True)
def interact_owned(
    positions: np.ndarray,
    velocities: np.ndarray,
    corr_counts: np.ndarray,
    corr_sums: np.ndarray,
    rule_dist_sq: np.ndarray,
    rule_cos: np.ndarray,
    max_dist_sq: float,
    merged_routing: bool,
    num_boids: int
):
    """
    Parallel all-pairs scan partitioned by owner.

    Each iteration owns boid i, scans every other boid and writes only
    into i's accumulators, so no two workers touch the same row.
    """
    for i in prange(num_boids):
        for j in range(num_boids):
            if i == j:
                continue

            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            dz = positions[j, 2] - positions[i, 2]
            dist_sq = dx * dx + dy * dy + dz * dz

            if dist_sq >= max_dist_sq:
                continue

            accumulate_view(i, j, dx, dy, dz, dist_sq, velocities,
                            corr_counts, corr_sums, rule_dist_sq, rule_cos, merged_routing)


@njit(parallel=True, cache=True)
def compute_boundary_forces(
    positions: np.ndarray,
    env_forces: np.ndarray,
    boundary_dist_sq: float,
    boundary_force: float,
    num_boids: int
):
    """Inward pull for boids outside the confinement radius."""
    for i in prange(num_boids):
        px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
        len_sq = px * px + py * py + pz * pz

        if len_sq > boundary_dist_sq:
            length = math.sqrt(len_sq)
            scale = boundary_force * (1.0 - length) / length
            env_forces[i, 0] = px * scale
            env_forces[i, 1] = py * scale
            env_forces[i, 2] = pz * scale
        else:
            env_forces[i, 0] = 0.0
            env_forces[i, 1] = 0.0
            env_forces[i, 2] = 0.0


@njit(parallel=True, cache=True)
def integrate_numba(
    positions: np.ndarray,
    velocities: np.ndarray,
    corr_counts: np.ndarray,
    corr_sums: np.ndarray,
    env_forces: np.ndarray,
    rule_forces: np.ndarray,
    min_velocity: float,
    max_velocity: float,
    num_boids: int
):
    """Compose forces, clamp speed, advance position and clear per-tick scratch state."""
    for i in prange(num_boids):
        fx = env_forces[i, 0]
        fy = env_forces[i, 1]
        fz = env_forces[i, 2]

        for rule in range(3):
            count = corr_counts[i, rule]
            if count == 0:
                continue
            # Separation scales the raw sum; cohesion and alignment use the mean
            if rule == SEPARATION:
                weight = rule_forces[rule]
            else:
                weight = rule_forces[rule] / count
            fx += corr_sums[i, rule, 0] * weight
            fy += corr_sums[i, rule, 1] * weight
            fz += corr_sums[i, rule, 2] * weight

        vx, vy, vz = clamp_length(
            velocities[i, 0] + fx,
            velocities[i, 1] + fy,
            velocities[i, 2] + fz,
            min_velocity, max_velocity
        )
        velocities[i, 0] = vx
        velocities[i, 1] = vy
        velocities[i, 2] = vz

        positions[i, 0] += vx
        positions[i, 1] += vy
        positions[i, 2] += vz

        for rule in range(3):
            corr_counts[i, rule] = 0
            corr_sums[i, rule, 0] = 0.0
            corr_sums[i, rule, 1] = 0.0
            corr_sums[i, rule, 2] = 0.0
        env_forces[i, 0] = 0.0
        env_forces[i, 1] = 0.0
        env_forces[i, 2] = 0.0


# ============================================================================
# PASSES
# ============================================================================

def interaction_pass(population: Population, params: ParameterSet, parallel: bool = True):
    """Accumulate cohesion/separation/alignment correction factors for every pair."""
    rule_dist_sq, rule_cos, _ = params.rule_thresholds()
    kernel = interact_owned if parallel else interact_pairs
    kernel(
        population.positions,
        population.velocities,
        population.corr_counts,
        population.corr_sums,
        rule_dist_sq,
        rule_cos,
        float(params.max_dist_sq),
        bool(params.merged_routing),
        population.count
    )


def environment_pass(population: Population, params: ParameterSet):
    """Set each boid's environmental (boundary) force."""
    compute_boundary_forces(
        population.positions,
        population.env_forces,
        float(params.boundary_dist_sq),
        float(params.boundary_force),
        population.count
    )


def integration_pass(population: Population, params: ParameterSet):
    """Turn accumulated forces into new velocity and position."""
    _, _, rule_forces = params.rule_thresholds()
    integrate_numba(
        population.positions,
        population.velocities,
        population.corr_counts,
        population.corr_sums,
        population.env_forces,
        rule_forces,
        float(params.min_velocity),
        float(params.max_velocity),
        population.count
    )


def run_tick(population: Population, params: ParameterSet, parallel: bool = True):
    """Run one full tick (interaction, environment, integration) in place."""
    population.phase = TickPhase.IDLE
    interaction_pass(population, params, parallel)
    population.phase = TickPhase.INTERACTION_DONE
    environment_pass(population, params)
    population.phase = TickPhase.ENVIRONMENT_DONE
    integration_pass(population, params)
    population.phase = TickPhase.INTEGRATION_DONE
    # A finished tick is the idle state of the next one
    population.phase = TickPhase.IDLE


def flock_stats(population: Population) -> dict:
    """Summary numbers for diagnostics output."""
    if population.count == 0:
        return {"count": 0, "mean_speed": 0.0, "min_speed": 0.0, "max_speed": 0.0,
                "centroid": np.zeros(3), "spread": 0.0}

    speeds = population.speeds()
    centroid = population.positions.mean(axis=0)
    spread = np.linalg.norm(population.positions - centroid, axis=1).max()
    return {
        "count": population.count,
        "mean_speed": float(speeds.mean()),
        "min_speed": float(speeds.min()),
        "max_speed": float(speeds.max()),
        "centroid": centroid,
        "spread": float(spread),
    }


# ============================================================================
# FLOCK CLASS
# ============================================================================

class Flock:
    """
    Host-facing simulation: a population plus the active parameter set.

    Parameter replacements are queued and applied atomically at the start
    of the next update, never in the middle of a tick.
    """

    def __init__(
        self,
        num_boids: int = config.BOIDS["count"],
        params: Optional[ParameterSet] = None,
        seed: Optional[int] = None,
        parallel: bool = config.BOIDS["parallel"],
        verbose: bool = True
    ):
        if params is None:
            from boidsim.tools.presets import default_parameters
            params = default_parameters()

        self.params = params
        self.parallel = parallel
        self.verbose = verbose
        self.tick = 0
        self.population = initialize_population(num_boids, seed, params)

        self._pending_params: Optional[ParameterSet] = None
        self._params_lock = threading.Lock()

        self._warmup_numba()

        if self.verbose:
            mode = "parallel" if parallel else "serial"
            print(f"[Boids] Initialized {num_boids:,} boids ({mode} interaction pass)")

    @property
    def num_boids(self) -> int:
        return self.population.count

    @property
    def positions(self) -> np.ndarray:
        return self.population.positions

    @property
    def velocities(self) -> np.ndarray:
        return self.population.velocities

    @property
    def phase(self) -> TickPhase:
        return self.population.phase

    def boid(self, index: int) -> Boid:
        return self.population.boid(index)

    def _warmup_numba(self):
        """Pre-compile Numba functions."""
        scratch = initialize_population(4, 0, self.params)
        run_tick(scratch, self.params, parallel=False)
        run_tick(scratch, self.params, parallel=True)

    def replace_parameters(self, params: ParameterSet):
        """Queue a parameter set for the next tick boundary."""
        with self._params_lock:
            self._pending_params = params

    def _apply_pending_params(self):
        with self._params_lock:
            pending, self._pending_params = self._pending_params, None
        if pending is not None:
            self.params = pending
            if self.verbose:
                print(f"[Boids] Parameters replaced at tick {self.tick}")

    def update(self):
        """Advance the simulation by one tick."""
        self._apply_pending_params()
        run_tick(self.population, self.params, self.parallel)
        self.tick += 1

    def stats(self) -> dict:
        return flock_stats(self.population)
