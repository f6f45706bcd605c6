"""Boids flocking engine."""

from .params import ConfigurationError, ParameterSet
from .boid import Boid
from .population import Population, TickPhase, initialize_population
from .flock import (
    Flock,
    environment_pass,
    flock_stats,
    integration_pass,
    interaction_pass,
    run_tick,
)

__all__ = [
    "Boid",
    "ConfigurationError",
    "Flock",
    "ParameterSet",
    "Population",
    "TickPhase",
    "environment_pass",
    "flock_stats",
    "initialize_population",
    "integration_pass",
    "interaction_pass",
    "run_tick",
]
