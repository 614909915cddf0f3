"""
Tests for pairwise registration (diff).

Scenes are synthetic: a shared set of beacons observed from two frames related
by a known rotation and displacement, plus beacons only one scanner sees.
"""

import pytest

from scanner_registration import constants
from scanner_registration.backend.registration import RegistrationMatch, diff
from scanner_registration.backend.scanner import Scanner
from scanner_registration.common.geometry import (
    Displacement,
    Point,
    Reflect,
    Rotation,
    Swap,
    valid_rotations,
)
from scanner_registration.frontend.scanner_io import parse_scanners


def _landed(base: Scanner, other: Scanner, match: RegistrationMatch) -> int:
    """Number of `other` beacons the match puts exactly on `base` beacons."""
    targets = set(base.beacons)
    return sum(match.apply(p) in targets for p in other.beacons)


class TestDiff:
    """diff() contract."""

    def test_recovers_known_transform(self, overlapping_pair):
        base, other, rot, dsp = overlapping_pair

        match = diff(base, other)

        assert match is not None
        assert match.as_pair() == (rot, dsp)
        assert match.votes == constants.MIN_OVERLAP

    def test_match_lands_overlap(self, overlapping_pair):
        base, other, _, _ = overlapping_pair
        match = diff(base, other)
        assert _landed(base, other, match) == 12

    @pytest.mark.parametrize("rot", list(valid_rotations()), ids=str)
    def test_recovers_every_valid_rotation(self, make_scene, rot):
        dsp = Displacement(-92, -2380, -20)
        base, other, _ = make_scene(12, rot, dsp, n_noise=6)

        match = diff(base, other)

        assert match is not None
        assert match.rotation == rot
        assert match.displacement == dsp

    def test_fewer_than_min_overlap_is_none(self, make_scene, skew_rotation):
        """11 shared beacons never reach the threshold, whatever collides."""
        base, other, _ = make_scene(11, skew_rotation, Displacement(68, -1246, -43))
        assert diff(base, other) is None

    def test_lower_threshold_accepts_smaller_overlap(self, make_scene, skew_rotation):
        dsp = Displacement(68, -1246, -43)
        base, other, _ = make_scene(6, skew_rotation, dsp)

        assert diff(base, other) is None
        match = diff(base, other, min_overlap=6)

        assert match is not None
        assert match.as_pair() == (skew_rotation, dsp)

    def test_identical_scanners_identity(self, make_scene):
        base, _, _ = make_scene(12, Rotation.identity(), Displacement())
        match = diff(base, base.copy())
        assert match is not None
        assert match.rotation == Rotation.identity()
        assert match.displacement == Displacement()

    def test_disjoint_scanners(self):
        a = Scanner(Point(i, 2 * i + 1, 3 * i + 7) for i in range(1, 20))
        b = Scanner(Point(1000 + i * i, -i, 5 * i) for i in range(1, 20))
        assert diff(a, b) is None

    def test_too_few_beacons(self):
        a = Scanner([Point(1, 2, 3)])
        assert diff(a, a) is None

    def test_rejects_degenerate_threshold(self, overlapping_pair):
        base, other, _, _ = overlapping_pair
        with pytest.raises(ValueError):
            diff(base, other, min_overlap=1)

    def test_inputs_untouched(self, overlapping_pair):
        base, other, _, _ = overlapping_pair
        before = (list(base.beacons), list(other.beacons))
        diff(base, other)
        assert (base.beacons, other.beacons) == before


def test_example_scanner_1_against_0(example_text, example_expected):
    scanners = parse_scanners(example_text)

    match = diff(scanners[0], scanners[1])

    assert match is not None
    assert match.rotation == Rotation(Swap.none(), Reflect(x=True, y=False, z=True))
    assert Point.from_displacement(match.displacement) == example_expected["positions"][1]
