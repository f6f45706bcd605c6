import dataclasses
import math

import pytest
from pytest import approx

from boidsim.boids import ConfigurationError, ParameterSet
from boidsim.boids.params import angle_to_cos
from boidsim.tools.presets import (
    PRESETS,
    get_preset_by_index,
    get_preset_config,
    get_preset_list,
    next_preset_key,
    resolve_preset_key,
)


def _raw(**changes) -> dict:
    values = dict(PRESETS["git"])
    values.update(changes)
    return values


def test_from_config_squares_distances_and_converts_angles():
    params = ParameterSet.from_config(_raw(ali_angle=3.0, sep_angle=1.0))

    assert params.coh_dist_sq == approx(0.04)
    assert params.sep_dist_sq == approx(0.0016)
    assert params.ali_dist_sq == approx(0.09)
    assert params.coh_angle_cos == approx(0.0, abs=1e-12)
    assert params.sep_angle_cos == approx(-1.0)
    assert params.ali_angle_cos == approx(0.5)
    assert params.coh_force == approx(0.008)
    assert params.min_velocity == approx(0.005)
    assert params.max_velocity == approx(0.03)


def test_boundary_values_default_from_config():
    params = ParameterSet.from_config(_raw())

    assert params.boundary_dist_sq == approx(1.0)
    assert params.boundary_force == approx(0.001)
    assert params.merged_routing is False


def test_boundary_values_can_be_supplied():
    params = ParameterSet.from_config(_raw(boundary_dist_sq=4.0, boundary_force=0.01))

    assert params.boundary_dist_sq == approx(4.0)
    assert params.boundary_force == approx(0.01)


def test_max_dist_sq_is_largest_rule_radius():
    assert ParameterSet.from_config(_raw()).max_dist_sq == approx(0.09)


@pytest.mark.parametrize("key", ["coh_angle", "sep_angle", "ali_angle"])
@pytest.mark.parametrize("angle", [0.0, -2.0, math.inf, math.nan])
def test_rejects_invalid_angles(key, angle):
    with pytest.raises(ConfigurationError):
        ParameterSet.from_config(_raw(**{key: angle}))


def test_rejects_inverted_velocity_bounds():
    with pytest.raises(ConfigurationError, match="min_velocity"):
        ParameterSet.from_config(_raw(min_velocity=0.05, max_velocity=0.03))


@pytest.mark.parametrize("key", ["coh_force", "sep_force", "ali_force", "sep_dist", "min_velocity"])
def test_rejects_negative_values(key):
    with pytest.raises(ConfigurationError):
        ParameterSet.from_config(_raw(**{key: -0.1}))


def test_rejects_missing_keys():
    values = _raw()
    del values["ali_dist"]

    with pytest.raises(ConfigurationError, match="ali_dist"):
        ParameterSet.from_config(values)


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_equal_velocity_bounds_are_allowed():
    params = ParameterSet.from_config(_raw(min_velocity=0.02, max_velocity=0.02))

    assert params.min_velocity == params.max_velocity


def test_parameter_set_is_immutable():
    params = ParameterSet.from_config(_raw())

    with pytest.raises(dataclasses.FrozenInstanceError):
        params.coh_force = 1.0


def test_overrides_replace_derived_fields():
    params = ParameterSet.from_config(_raw(), merged_routing=True, boundary_force=0.0)

    assert params.merged_routing is True
    assert params.boundary_force == 0.0


def test_rule_thresholds_are_in_rule_order():
    params = ParameterSet.from_config(_raw())
    dist_sq, angle_cos, forces = params.rule_thresholds()

    assert list(dist_sq) == approx([0.04, 0.0016, 0.09])
    assert list(angle_cos) == approx([0.0, 0.0, 0.0], abs=1e-12)
    assert list(forces) == approx([0.008, 0.5, 0.05])


def test_angle_to_cos_full_circle():
    assert angle_to_cos(1.0) == approx(-1.0)


def test_every_preset_builds():
    assert len(get_preset_list()) == 6
    for key, preset in get_preset_list():
        params = get_preset_config(key)
        assert params.min_velocity <= params.max_velocity
        assert preset["name"]


def test_presets_resolve_by_key_or_display_name():
    assert resolve_preset_key("book_3") == "book_3"
    assert resolve_preset_key("Book 3") == "book_3"
    assert resolve_preset_key(" GIT ") == "git"
    assert resolve_preset_key("nope") is None

    assert get_preset_config("Book 3").coh_force == approx(0.2)


def test_unknown_preset_raises_key_error():
    with pytest.raises(KeyError):
        get_preset_config("Book 9")


def test_preset_index_and_cycling():
    assert get_preset_by_index(0)[0] == "git"
    assert get_preset_by_index(6) == (None, None)
    assert next_preset_key("git") == "book_1"
    assert next_preset_key("book_5") == "git"


def test_book_5_sees_all_around_for_cohesion():
    assert get_preset_config("book_5").coh_angle_cos == approx(-1.0)
