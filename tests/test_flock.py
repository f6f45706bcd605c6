import numpy as np
import pytest
from pytest import approx

from boidsim.boids import Flock, TickPhase, flock_stats, initialize_population, run_tick
from boidsim.boids import flock as flock_module
from boidsim.tools.presets import get_preset_config


def test_run_tick_resets_accumulators(default_params):
    population = initialize_population(256, 2, default_params)
    population.positions *= 0.3
    run_tick(population, default_params)

    assert population.corr_counts.sum() == 0
    assert not population.corr_sums.any()
    assert not population.env_forces.any()
    assert all(population.boid(i).is_settled() for i in range(0, 256, 17))


@pytest.mark.parametrize("preset", ["git", "book_1", "book_3", "book_4", "book_5"])
def test_speed_stays_within_bounds(preset):
    params = get_preset_config(preset)
    population = initialize_population(256, 8, params)
    population.positions *= 1.4  # some boids start outside the boundary

    for _ in range(5):
        run_tick(population, params)
        speeds = population.speeds()
        assert np.all(speeds >= params.min_velocity - 1e-12)
        assert np.all(speeds <= params.max_velocity + 1e-12)
        assert np.all(np.isfinite(population.positions))


def test_serial_ticks_are_deterministic(default_params):
    first = initialize_population(200, 13, default_params)
    first.positions *= 0.3
    second = first.copy()

    for _ in range(3):
        run_tick(first, default_params, parallel=False)
        run_tick(second, default_params, parallel=False)

    np.testing.assert_array_equal(first.positions, second.positions)
    np.testing.assert_array_equal(first.velocities, second.velocities)


def test_parallel_ticks_match_serial(default_params):
    serial = initialize_population(200, 14, default_params)
    serial.positions *= 0.3
    parallel = serial.copy()

    for _ in range(3):
        run_tick(serial, default_params, parallel=False)
        run_tick(parallel, default_params, parallel=True)

    np.testing.assert_allclose(serial.positions, parallel.positions, rtol=1e-10, atol=1e-12)
    np.testing.assert_allclose(serial.velocities, parallel.velocities, rtol=1e-10, atol=1e-12)


@pytest.mark.parametrize("parallel", [False, True])
def test_trailing_boid_closes_the_gap(make_population, default_params, parallel):
    population = make_population(
        [[0.0, 0.0, 0.0], [0.1, 0.0, 0.0]],
        [[0.02, 0.0, 0.0], [0.02, 0.0, 0.0]],
    )

    gaps = []
    for _ in range(5):
        run_tick(population, default_params, parallel)
        gaps.append(np.linalg.norm(population.positions[1] - population.positions[0]))
        assert np.all(population.speeds() <= default_params.max_velocity + 1e-12)

    # First tick: cohesion pull 0.1 * 0.008 on the trailing boid only
    assert population.velocities[1] == approx([0.02, 0.0, 0.0])
    assert gaps[0] == approx(0.1 - 0.0008)
    assert all(later < earlier for earlier, later in zip(gaps, gaps[1:]))
    assert gaps[-1] < 0.095


def test_facing_pair_updates_mirror_each_other(facing_pair, default_params):
    run_tick(facing_pair, default_params)

    # cohesion +0.1 * 0.008, alignment -0.04 * 0.05
    assert facing_pair.velocities[0, 0] == approx(0.0188)
    assert facing_pair.velocities[0, 0] == approx(-facing_pair.velocities[1, 0])


def test_run_tick_walks_phases(monkeypatch, default_params):
    population = initialize_population(8, 0, default_params)
    seen = []

    def record(name, original):
        def wrapper(pop, *args, **kwargs):
            seen.append((name, pop.phase))
            return original(pop, *args, **kwargs)
        return wrapper

    for name in ("interaction_pass", "environment_pass", "integration_pass"):
        monkeypatch.setattr(flock_module, name, record(name, getattr(flock_module, name)))

    run_tick(population, default_params)

    assert seen == [
        ("interaction_pass", TickPhase.IDLE),
        ("environment_pass", TickPhase.INTERACTION_DONE),
        ("integration_pass", TickPhase.ENVIRONMENT_DONE),
    ]
    assert population.phase is TickPhase.IDLE


def test_flock_reports_initialization(capsys):
    Flock(num_boids=16, seed=0)

    assert "[Boids] Initialized 16 boids" in capsys.readouterr().out


def test_flock_accessors():
    flock = Flock(num_boids=10, seed=3, verbose=False)

    assert flock.num_boids == 10
    assert flock.positions.shape == (10, 3)
    assert flock.velocities.shape == (10, 3)
    assert flock.phase is TickPhase.IDLE
    np.testing.assert_array_equal(flock.boid(4).position, flock.positions[4])

    flock.update()
    assert flock.tick == 1


def test_replaced_parameters_apply_at_next_tick():
    original = get_preset_config("git")
    replacement = get_preset_config("book_3")
    flock = Flock(num_boids=64, params=original, seed=5, parallel=False, verbose=False)
    flock.population.positions *= 0.3

    flock.replace_parameters(replacement)
    assert flock.params is original

    expected = flock.population.copy()
    run_tick(expected, replacement, parallel=False)
    flock.update()

    assert flock.params is replacement
    np.testing.assert_array_equal(flock.positions, expected.positions)
    np.testing.assert_array_equal(flock.velocities, expected.velocities)


def test_only_latest_replacement_is_used():
    flock = Flock(num_boids=8, seed=5, verbose=False)
    flock.replace_parameters(get_preset_config("book_1"))
    latest = get_preset_config("book_4")
    flock.replace_parameters(latest)
    flock.update()

    assert flock.params is latest


def test_flock_stats(make_population):
    population = make_population(
        [[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]],
        [[0.01, 0.0, 0.0], [0.0, 0.03, 0.0]],
    )
    stats = flock_stats(population)

    assert stats["count"] == 2
    assert stats["mean_speed"] == approx(0.02)
    assert stats["min_speed"] == approx(0.01)
    assert stats["max_speed"] == approx(0.03)
    np.testing.assert_allclose(stats["centroid"], [0.0, 0.0, 0.0])
    assert stats["spread"] == approx(1.0)


def test_empty_flock_ticks(default_params):
    population = initialize_population(0, 0, default_params)
    run_tick(population, default_params)

    assert flock_stats(population)["count"] == 0
