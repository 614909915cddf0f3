import os
import random
from typing import Dict, Any, List

import pytest

from scanner_registration.backend.scanner import Scanner
from scanner_registration.common.geometry import (
    Displacement,
    Point,
    Rotation,
    Reflect,
    Swap,
    Dim,
    unrotate,
)

TEST_DIR = os.path.dirname(__file__)
DATA_DIR = os.path.join(TEST_DIR, "data")
PKG_ROOT = os.path.dirname(TEST_DIR)


# =============================================================================
# Data Fixtures
# =============================================================================


@pytest.fixture
def example_path() -> str:
    """Path to the canonical 5-scanner beacon report."""
    return os.path.join(DATA_DIR, "example_scanners.txt")


@pytest.fixture
def example_text(example_path) -> str:
    with open(example_path, encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def example_expected() -> Dict[str, Any]:
    """Known answer for the canonical example, positions in scanner 0's frame."""
    return {
        "n_beacons": 79,
        "max_scanner_distance": 3621,
        "positions": {
            0: Point(0, 0, 0),
            1: Point(68, -1246, -43),
            2: Point(1105, -1205, 1229),
            3: Point(-92, -2380, -20),
            4: Point(-20, -1133, 1061),
        },
    }


@pytest.fixture
def base_config_path() -> str:
    return os.path.join(PKG_ROOT, "config", "scanner_registration_base.yaml")


# =============================================================================
# Synthetic Scenes
# =============================================================================


def random_points(rng: random.Random, n: int, span: int = 1000) -> List[Point]:
    """`n` distinct points with no repeated component magnitudes inside a point."""
    points = set()
    while len(points) < n:
        x, y, z = (rng.randint(-span, span) for _ in range(3))
        if len({abs(x), abs(y), abs(z)}) < 3 or 0 in (x, y, z):
            continue
        points.add(Point(x, y, z))
    return sorted(points, key=lambda p: p.as_tuple())


def observe(points: List[Point], rot: Rotation, dsp: Displacement) -> Scanner:
    """
    Scanner that reports global `points` from local frame (rot, dsp).

    Local beacons q satisfy rotate(q, rot) + dsp == p.
    """
    return Scanner(unrotate(p + (-dsp), rot) for p in points)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def skew_rotation() -> Rotation:
    """A proper rotation with a 3-cycle and two sign flips."""
    return Rotation(Swap.twice(Dim.Z, Dim.Y, Dim.X), Reflect(x=True, y=False, z=True))


@pytest.fixture
def make_scene(rng):
    """
    Factory for (base, other, shared) scanner pairs.

    `base` is in the global frame and `other` reports from frame (rot, dsp).
    They share exactly `n_shared` beacons; each also sees `n_noise` beacons
    the other does not.
    """
    def _make(n_shared: int, rot: Rotation, dsp: Displacement, n_noise: int = 13):
        shared = random_points(rng, n_shared)
        noise = [p for p in random_points(rng, 2 * n_noise + 4, span=5000) if p not in shared]
        base_only, other_only = noise[:n_noise], noise[n_noise:2 * n_noise]
        base = Scanner(shared + base_only)
        other = observe(shared + other_only, rot, dsp)
        return base, other, shared

    return _make


@pytest.fixture
def overlapping_pair(make_scene, skew_rotation):
    """(base, other, rot, dsp) sharing exactly 12 beacons."""
    dsp = Displacement(1105, -1205, 1229)
    base, other, _ = make_scene(12, skew_rotation, dsp)
    return base, other, skew_rotation, dsp


@pytest.fixture
def chain_scene(rng, skew_rotation):
    """
    Three scanners overlapping only as a chain 0 - 1 - 2.

    Returns (scanners, positions) with positions in scanner 0's frame.
    """
    pool = random_points(rng, 50, span=5000)
    shared01, shared12 = pool[0:12], pool[12:24]
    only0, only2 = pool[24:37], pool[37:50]

    rot1, dsp1 = skew_rotation, Displacement(68, -1246, -43)
    rot2, dsp2 = Rotation(Swap.once(Dim.X, Dim.Y), Reflect.along(Dim.Z)), Displacement(-92, 2380, 20)
    scanners = [
        Scanner(shared01 + only0),
        observe(shared01 + shared12, rot1, dsp1),
        observe(shared12 + only2, rot2, dsp2),
    ]
    positions = [Point.origin(), Point.from_displacement(dsp1), Point.from_displacement(dsp2)]
    return scanners, positions
