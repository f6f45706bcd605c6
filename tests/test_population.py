import numpy as np
import pytest
from pytest import approx

from boidsim.boids import Population, TickPhase, initialize_population
from boidsim.boids.population import restrict_lengths


def test_initialize_population_shapes_and_ranges(default_params):
    population = initialize_population(1024, 3, default_params)

    assert len(population) == 1024
    assert population.positions.shape == (1024, 3)
    assert population.corr_counts.shape == (1024, 3)
    assert population.corr_sums.shape == (1024, 3, 3)
    assert np.all(np.abs(population.positions) <= 1.0)
    assert population.phase is TickPhase.IDLE


def test_initial_velocities_are_clamped(default_params):
    speeds = initialize_population(500, 11, default_params).speeds()

    assert np.all(speeds >= default_params.min_velocity - 1e-12)
    assert np.all(speeds <= default_params.max_velocity + 1e-12)


def test_initial_accumulators_are_zero(default_params):
    population = initialize_population(16, 1, default_params)

    assert all(population.boid(i).is_settled() for i in range(16))


def test_same_seed_same_population(default_params):
    a = initialize_population(64, 42, default_params)
    b = initialize_population(64, 42, default_params)
    c = initialize_population(64, 43, default_params)

    np.testing.assert_array_equal(a.positions, b.positions)
    np.testing.assert_array_equal(a.velocities, b.velocities)
    assert not np.array_equal(a.positions, c.positions)


def test_accepts_numpy_generator(default_params):
    a = initialize_population(8, np.random.default_rng(5), default_params)
    b = initialize_population(8, 5, default_params)

    np.testing.assert_array_equal(a.positions, b.positions)


def test_uses_default_preset_when_params_omitted():
    speeds = initialize_population(100, 0).speeds()

    assert speeds.max() <= 0.03 + 1e-12


def test_negative_count_is_rejected():
    with pytest.raises(ValueError):
        initialize_population(-1, 0)


def test_empty_population(default_params):
    assert initialize_population(0, 0, default_params).count == 0


def test_mismatched_shapes_are_rejected():
    with pytest.raises(ValueError):
        Population(positions=np.zeros((3, 3)), velocities=np.zeros((2, 3)))


def test_boid_view_is_a_copy(make_population):
    population = make_population([[0.1, 0.2, 0.3]], [[0.01, 0.0, 0.0]])
    boid = population.boid(0)
    boid.position[0] = 5.0

    assert population.positions[0, 0] == approx(0.1)
    assert boid.speed == approx(0.01)
    assert boid.cohesion[0] == 0


def test_restrict_lengths_leaves_zero_rows_alone():
    vectors = np.array([[0.0, 0.0, 0.0], [3.0, 4.0, 0.0], [0.001, 0.0, 0.0], [0.02, 0.0, 0.0]])
    result = restrict_lengths(vectors, 0.005, 0.03)

    np.testing.assert_array_equal(result[0], [0.0, 0.0, 0.0])
    assert np.linalg.norm(result[1]) == approx(0.03)
    assert np.linalg.norm(result[2]) == approx(0.005)
    np.testing.assert_allclose(result[3], [0.02, 0.0, 0.0])


def test_copy_is_independent(default_params):
    population = initialize_population(4, 0, default_params)
    clone = population.copy()
    clone.positions += 1.0

    assert not np.array_equal(population.positions, clone.positions)
