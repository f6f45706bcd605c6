"""Flocking parameter set consumed by the simulation kernels."""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from boidsim.config import boids as config


# Rule indices into the correction-factor arrays
COHESION = 0
SEPARATION = 1
ALIGNMENT = 2
RULES = ("cohesion", "separation", "alignment")

# Keys every raw preset must provide
CONFIG_KEYS = (
    "coh_force", "sep_force", "ali_force",
    "coh_dist", "sep_dist", "ali_dist",
    "coh_angle", "sep_angle", "ali_angle",
    "min_velocity", "max_velocity",
)


class ConfigurationError(ValueError):
    """Raised when raw flocking values cannot form a valid parameter set."""


def angle_to_cos(angle: float) -> float:
    """
    Convert a configured view angle into the cone threshold cosine.

    The angle is a divisor of pi: 2.0 gives a half-angle of 90 degrees
    (a hemisphere ahead of the heading), 1.0 gives 180 degrees (all around).
    """
    if not math.isfinite(angle) or angle <= 0.0:
        raise ConfigurationError(f"View angle must be a positive finite number, got {angle!r}")
    return math.cos(math.pi / angle)


@dataclass(frozen=True)
class ParameterSet:
    """
    Immutable flocking parameters for one or more ticks.

    Distances are stored squared and view angles as cosines so the
    pairwise loop never needs a square root or a trig call.

    Attributes:
        coh_force, sep_force, ali_force: Blend weights for the three rules
        coh_dist_sq, sep_dist_sq, ali_dist_sq: Squared visibility radii
        coh_angle_cos, sep_angle_cos, ali_angle_cos: View cone thresholds
        min_velocity, max_velocity: Speed clamp bounds
        boundary_dist_sq: Squared radius beyond which the centering force engages
        boundary_force: Strength of the centering force
        merged_routing: Route every rule into the cohesion accumulator
    """
    coh_force: float
    sep_force: float
    ali_force: float
    coh_dist_sq: float
    sep_dist_sq: float
    ali_dist_sq: float
    coh_angle_cos: float
    sep_angle_cos: float
    ali_angle_cos: float
    min_velocity: float
    max_velocity: float
    boundary_dist_sq: float = config.BOIDS["boundary_dist_sq"]
    boundary_force: float = config.BOIDS["boundary_force"]
    merged_routing: bool = False

    def __post_init__(self):
        for name in ("coh_force", "sep_force", "ali_force",
                     "coh_dist_sq", "sep_dist_sq", "ali_dist_sq",
                     "min_velocity", "max_velocity",
                     "boundary_dist_sq", "boundary_force"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ConfigurationError(f"{name} must be a non-negative finite number, got {value!r}")
        for name in ("coh_angle_cos", "sep_angle_cos", "ali_angle_cos"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be finite")
        if self.min_velocity > self.max_velocity:
            raise ConfigurationError(
                f"min_velocity ({self.min_velocity}) exceeds max_velocity ({self.max_velocity})"
            )

    @classmethod
    def from_config(cls, values: dict, **overrides) -> "ParameterSet":
        """
        Build a parameter set from raw preset values.

        Args:
            values: Dict with per-rule force, distance and angle plus
                velocity bounds (see CONFIG_KEYS). May also carry
                boundary_dist_sq, boundary_force and merged_routing.
            overrides: Field values that replace the derived ones

        Raises:
            ConfigurationError: On a missing key, a non-positive angle,
                a negative value or inverted velocity bounds.
        """
        missing = [key for key in CONFIG_KEYS if key not in values]
        if missing:
            raise ConfigurationError(f"Missing preset values: {', '.join(missing)}")

        for key in ("coh_dist", "sep_dist", "ali_dist"):
            if values[key] < 0.0:
                raise ConfigurationError(f"{key} must be non-negative, got {values[key]!r}")

        fields = {
            "coh_force": float(values["coh_force"]),
            "sep_force": float(values["sep_force"]),
            "ali_force": float(values["ali_force"]),
            "coh_dist_sq": float(values["coh_dist"]) ** 2,
            "sep_dist_sq": float(values["sep_dist"]) ** 2,
            "ali_dist_sq": float(values["ali_dist"]) ** 2,
            "coh_angle_cos": angle_to_cos(float(values["coh_angle"])),
            "sep_angle_cos": angle_to_cos(float(values["sep_angle"])),
            "ali_angle_cos": angle_to_cos(float(values["ali_angle"])),
            "min_velocity": float(values["min_velocity"]),
            "max_velocity": float(values["max_velocity"]),
            "boundary_dist_sq": float(values.get("boundary_dist_sq", config.BOIDS["boundary_dist_sq"])),
            "boundary_force": float(values.get("boundary_force", config.BOIDS["boundary_force"])),
            "merged_routing": bool(values.get("merged_routing", False)),
        }
        fields.update(overrides)
        return cls(**fields)

    @property
    def max_dist_sq(self) -> float:
        """Largest rule radius (squared); pairs beyond it are rejected early."""
        return max(self.coh_dist_sq, self.sep_dist_sq, self.ali_dist_sq)

    def rule_thresholds(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Per-rule (dist_sq, angle_cos, force) arrays in COHESION/SEPARATION/ALIGNMENT order."""
        dist_sq = np.array([self.coh_dist_sq, self.sep_dist_sq, self.ali_dist_sq], dtype=np.float64)
        angle_cos = np.array([self.coh_angle_cos, self.sep_angle_cos, self.ali_angle_cos], dtype=np.float64)
        forces = np.array([self.coh_force, self.sep_force, self.ali_force], dtype=np.float64)
        return dist_sq, angle_cos, forces
