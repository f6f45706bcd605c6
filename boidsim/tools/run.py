"""
Headless Boids Runner
=====================

Runs the flocking simulation without a window and reports flock statistics.

Usage:
    python -m boidsim.tools.run                        # Default preset, 1024 boids, 500 ticks
    python -m boidsim.tools.run --list                 # List presets
    python -m boidsim.tools.run --preset "Book 3"      # Preset by name
    python -m boidsim.tools.run --preset-id 4          # Preset by menu index
    python -m boidsim.tools.run --count 2k --ticks 100 # Override population and length
    python -m boidsim.tools.run --cycle 100            # Switch to the next preset every 100 ticks
    python -m boidsim.tools.run --serial --seed 7      # Reproducible single-threaded run
"""

import sys
import time
import shutil
import argparse
from datetime import timedelta

from boidsim.boids import ConfigurationError, Flock
from boidsim.config import boids as config
from boidsim.tools.presets import (
    PRESETS, get_preset_by_index, get_preset_config, next_preset_key,
    print_preset_menu, resolve_preset_key
)


def format_time(seconds: float, short: bool = False) -> str:
    """Format seconds as human-readable time (milliseconds for short sub-second values)."""
    if short and seconds < 1.0:
        return f"{seconds*1000:.1f}ms"
    if seconds < 90:
        return f"{seconds:.1f}s" if short else f"{seconds:.0f}s"
    if seconds < 3600:
        return f"{seconds/60:.1f}m"
    return f"{seconds/3600:.1f}h"


def format_eta(seconds: float) -> str:
    """Format ETA - stays in seconds until 90s, then switches to hh:mm:ss."""
    if seconds < 0:
        return "calculating..."
    if seconds < 90:
        return f"{seconds:.0f}s"
    return str(timedelta(seconds=int(seconds)))


def print_progress(tick: int, total: int, tick_time: float, elapsed: float, eta: float):
    """Redraw a single-line progress bar with timing details."""
    try:
        term_width = shutil.get_terminal_size().columns
    except (OSError, ValueError):
        term_width = 80

    details = (f" {(tick + 1) / total * 100:5.1f}% | Tick {tick+1}/{total} | "
               f"{format_time(tick_time, short=True):>7s} | ETA: {format_eta(eta)}")
    bar_width = max(10, term_width - len(details) - 2)
    filled = int(bar_width * (tick + 1) / total)
    bar = "█" * filled + "░" * (bar_width - filled)

    sys.stdout.write(f"\r\033[K[{bar}]{details}")
    if tick + 1 == total:
        sys.stdout.write("\n")
    sys.stdout.flush()


def print_stats(stats: dict, label: str):
    cx, cy, cz = stats["centroid"]
    print(f"[Run] {label}: speed {stats['mean_speed']:.4f} "
          f"(min {stats['min_speed']:.4f}, max {stats['max_speed']:.4f}) | "
          f"centroid ({cx:+.3f}, {cy:+.3f}, {cz:+.3f}) | spread {stats['spread']:.3f}")


def parse_number(value: str) -> int:
    """Parse number with optional suffix (k, m, K, M)."""
    value = value.strip().lower()
    multipliers = {'k': 1_000, 'm': 1_000_000}

    for suffix, mult in multipliers.items():
        if value.endswith(suffix):
            return int(float(value[:-1]) * mult)

    return int(value)


def simulate(flock: Flock, ticks: int, preset_key: str, cycle: int = 0,
             merged_routing: bool = False, quiet: bool = False) -> dict:
    """Run `ticks` updates, optionally cycling presets, and return final stats."""
    start_time = time.time()
    tick_times = []

    for tick in range(ticks):
        if cycle and tick > 0 and tick % cycle == 0:
            preset_key = next_preset_key(preset_key)
            flock.replace_parameters(get_preset_config(preset_key, merged_routing=merged_routing))
            if not quiet:
                sys.stdout.write("\r\033[K")
                print(f"[Run] Switching to preset: {PRESETS[preset_key]['name']}")

        tick_start = time.time()
        flock.update()
        tick_times.append(time.time() - tick_start)

        if not quiet:
            recent = tick_times[-10:]
            eta = sum(recent) / len(recent) * (ticks - tick - 1)
            print_progress(tick, ticks, tick_times[-1], time.time() - start_time, eta)

    if not quiet and ticks:
        elapsed = time.time() - start_time
        print(f"[Run] ✓ {ticks} ticks in {format_time(elapsed)} "
              f"({ticks / max(elapsed, 1e-9):.1f} ticks/s)")

    return flock.stats()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Headless boids flocking runner")
    parser.add_argument("--list", action="store_true", help="List available presets")
    parser.add_argument("--preset", type=str, help="Use preset by key or name (e.g., 'book_3' or 'Book 3')")
    parser.add_argument("--preset-id", type=int, help="Use preset by index number")
    parser.add_argument("--count", "-n", type=str, default=str(config.BOIDS["count"]),
                        help="Number of boids (e.g., 1024, 2k)")
    parser.add_argument("--ticks", "-t", type=int, default=500, help="Number of ticks to run")
    parser.add_argument("--seed", type=int, help="Random seed for the initial population")
    parser.add_argument("--serial", action="store_true", help="Use the single-threaded interaction pass")
    parser.add_argument("--merged-routing", action="store_true",
                        help="Accumulate all rules into the cohesion factor")
    parser.add_argument("--cycle", type=int, default=0, metavar="TICKS",
                        help="Switch to the next preset every TICKS ticks")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print the final statistics")
    args = parser.parse_args(argv)

    if args.list:
        print_preset_menu()
        return 0

    if args.preset_id is not None:
        preset_key, preset = get_preset_by_index(args.preset_id)
        if preset_key is None:
            print(f"[Run] Invalid preset index: {args.preset_id}")
            return 2
    elif args.preset:
        preset_key = resolve_preset_key(args.preset)
        if preset_key is None:
            print(f"[Run] Unknown preset: {args.preset}")
            print("[Run] Available presets:")
            for key, preset in PRESETS.items():
                print(f"  - {key} ({preset['name']})")
            return 2
    else:
        preset_key = resolve_preset_key(config.BOIDS["default_preset"])

    try:
        count = parse_number(args.count)
    except ValueError:
        print(f"[Run] Invalid count value: {args.count}")
        return 2

    if count < 0 or args.ticks < 0 or args.cycle < 0:
        print("[Run] --count, --ticks and --cycle must be non-negative")
        return 2

    try:
        params = get_preset_config(preset_key, merged_routing=args.merged_routing)
    except ConfigurationError as e:
        print(f"[Run] Invalid preset {preset_key}: {e}")
        return 2

    if not args.quiet:
        routing = "merged" if args.merged_routing else "per-rule"
        print(f"[Run] Using preset: {PRESETS[preset_key]['name']} ({routing} routing)")

    flock = Flock(num_boids=count, params=params, seed=args.seed,
                  parallel=not args.serial, verbose=not args.quiet)

    if not args.quiet:
        print_stats(flock.stats(), "Start")
    stats = simulate(flock, args.ticks, preset_key, args.cycle, args.merged_routing, args.quiet)
    print_stats(stats, f"Tick {flock.tick}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
