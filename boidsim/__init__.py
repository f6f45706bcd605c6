"""Emergent flocking simulation for a fixed population of boids."""

from boidsim.boids import (
    Boid,
    ConfigurationError,
    Flock,
    ParameterSet,
    Population,
    TickPhase,
    initialize_population,
    run_tick,
)

__version__ = "0.1.0"

__all__ = [
    "Boid",
    "ConfigurationError",
    "Flock",
    "ParameterSet",
    "Population",
    "TickPhase",
    "initialize_population",
    "run_tick",
]
