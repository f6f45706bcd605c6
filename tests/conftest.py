import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from boidsim.boids import ParameterSet, Population  # noqa: E402
from boidsim.tools.presets import default_parameters  # noqa: E402


@pytest.fixture
def default_params() -> ParameterSet:
    return default_parameters()


@pytest.fixture
def make_population():
    def _make(positions, velocities) -> Population:
        return Population(
            positions=np.array(positions, dtype=np.float64),
            velocities=np.array(velocities, dtype=np.float64),
        )
    return _make


@pytest.fixture
def facing_pair(make_population) -> Population:
    """Two boids 0.1 apart heading straight at each other."""
    return make_population(
        [[0.0, 0.0, 0.0], [0.1, 0.0, 0.0]],
        [[0.02, 0.0, 0.0], [-0.02, 0.0, 0.0]],
    )
