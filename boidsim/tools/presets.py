"""
Flocking Presets Library
========================

Named flocking configurations as raw values: per-rule force, visibility
distance and view angle, plus the speed bounds. A view angle is a divisor
of pi (2.0 sees the hemisphere ahead, 1.0 sees all around).

Presets are converted into a ParameterSet with get_preset_config(), which
pre-squares the distances and turns the angles into cone cosines.
"""

from typing import List, Optional, Tuple

from boidsim.boids.params import ParameterSet
from boidsim.config import boids as config


# =============================================================================
# PRESETS
# =============================================================================

PRESETS = {}

PRESETS["git"] = {
    "name": "Git",
    "description": "Balanced flock with a wide alignment radius",
    "coh_force": 0.008,
    "sep_force": 0.5,
    "ali_force": 0.05,
    "coh_dist": 0.2,
    "sep_dist": 0.04,
    "ali_dist": 0.3,
    "coh_angle": 2.0,
    "sep_angle": 2.0,
    "ali_angle": 2.0,
    "min_velocity": 0.005,
    "max_velocity": 0.03,
}

PRESETS["book_1"] = {
    "name": "Book 1",
    "description": "Long-range cohesion, narrow alignment cone",
    "coh_force": 0.008,
    "sep_force": 0.4,
    "ali_force": 0.06,
    "coh_dist": 0.5,
    "sep_dist": 0.05,
    "ali_dist": 0.1,
    "coh_angle": 2.0,
    "sep_angle": 2.0,
    "ali_angle": 3.0,
    "min_velocity": 0.005,
    "max_velocity": 0.03,
}

PRESETS["book_2"] = {
    "name": "Book 2",
    "description": "Same values as Book 1",
    "coh_force": 0.008,
    "sep_force": 0.4,
    "ali_force": 0.06,
    "coh_dist": 0.5,
    "sep_dist": 0.05,
    "ali_dist": 0.1,
    "coh_angle": 2.0,
    "sep_angle": 2.0,
    "ali_angle": 3.0,
    "min_velocity": 0.005,
    "max_velocity": 0.03,
}

PRESETS["book_3"] = {
    "name": "Book 3",
    "description": "Strong cohesion, tight clusters",
    "coh_force": 0.2,
    "sep_force": 0.1,
    "ali_force": 0.03,
    "coh_dist": 0.5,
    "sep_dist": 0.08,
    "ali_dist": 0.1,
    "coh_angle": 2.0,
    "sep_angle": 2.0,
    "ali_angle": 2.0,
    "min_velocity": 0.005,
    "max_velocity": 0.03,
}

PRESETS["book_4"] = {
    "name": "Book 4",
    "description": "Weak, far-reaching cohesion and alignment",
    "coh_force": 0.005,
    "sep_force": 0.5,
    "ali_force": 0.01,
    "coh_dist": 0.8,
    "sep_dist": 0.03,
    "ali_dist": 0.5,
    "coh_angle": 2.0,
    "sep_angle": 2.0,
    "ali_angle": 2.0,
    "min_velocity": 0.005,
    "max_velocity": 0.03,
}

PRESETS["book_5"] = {
    "name": "Book 5",
    "description": "Git with all-around cohesion vision",
    "coh_force": 0.008,
    "sep_force": 0.5,
    "ali_force": 0.05,
    "coh_dist": 0.2,
    "sep_dist": 0.04,
    "ali_dist": 0.3,
    "coh_angle": 1.0,
    "sep_angle": 2.0,
    "ali_angle": 2.0,
    "min_velocity": 0.005,
    "max_velocity": 0.03,
}


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def get_preset_list() -> List[Tuple[str, dict]]:
    """Get list of all presets in menu order."""
    return list(PRESETS.items())


def resolve_preset_key(name: str) -> Optional[str]:
    """Match a preset by key or display name, case-insensitively."""
    wanted = name.strip().lower()
    for key, preset in PRESETS.items():
        if wanted in (key, preset["name"].lower()):
            return key
    return None


def print_preset_menu():
    """Print formatted preset selection menu."""
    print("\n" + "=" * 70)
    print("  BOIDS FLOCKING PRESETS")
    print("=" * 70)

    for idx, (key, preset) in enumerate(get_preset_list()):
        forces = f"coh {preset['coh_force']:<6} sep {preset['sep_force']:<5} ali {preset['ali_force']:<5}"
        print(f"  [{idx:2d}] {preset['name']:<10} {key:<8} | {forces}")
        print(f"       {preset['description']}")

    print("=" * 70)


def get_preset_by_index(index: int) -> Tuple[str, dict]:
    """Get preset by menu index."""
    presets = get_preset_list()
    if 0 <= index < len(presets):
        return presets[index]
    return None, None


def next_preset_key(key: str) -> str:
    """Key of the preset after `key`, wrapping around."""
    keys = list(PRESETS)
    return keys[(keys.index(key) + 1) % len(keys)]


def get_preset_config(key: str, **overrides) -> ParameterSet:
    """
    Build the ParameterSet for a preset.

    Raises:
        KeyError: If no preset matches `key` (key or display name)
    """
    resolved = resolve_preset_key(key)
    if resolved is None:
        raise KeyError(key)
    return ParameterSet.from_config(PRESETS[resolved], **overrides)


def default_parameters() -> ParameterSet:
    return get_preset_config(config.BOIDS["default_preset"])
