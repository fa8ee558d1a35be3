"""
Unit tests for curve_lut module.

Tests secant and tangent computation and lookup table generation,
including range and boundary behavior for non-monotone point sets.
"""

import pytest

from BB_Libs.CurvesLib.curve_lut import (
    compute_lut,
    compute_secants,
    compute_tangents,
    identity_lut,
)


class TestIdentityLut:
    """Tests for identity_lut function."""

    def test_maps_every_level_to_itself(self):
        lut = identity_lut()
        assert len(lut) == 256
        assert list(lut) == list(range(256))


class TestComputeTangents:
    """Tests for compute_secants and compute_tangents."""

    def test_secants(self):
        assert compute_secants([0, 10, 20], [0, 20, 20]) == [2.0, 0.0]

    def test_interior_tangent_is_mean_of_secants(self):
        assert compute_tangents([1.0, 3.0]) == [1.0, 2.0, 3.0]

    def test_interior_tangent_zero_at_extremum(self):
        """Opposite-signed secants force a flat tangent."""
        assert compute_tangents([1.0, -1.0]) == [1.0, 0.0, -1.0]

    def test_interior_tangent_zero_next_to_flat_segment(self):
        assert compute_tangents([0.0, 2.0]) == [0.0, 0.0, 2.0]

    def test_single_segment_uses_its_slope_at_both_ends(self):
        assert compute_tangents([0.5]) == [0.5, 0.5]


class TestComputeLut:
    """Tests for compute_lut function."""

    def test_default_points_give_identity(self):
        assert compute_lut([(0, 0), (255, 255)]) == identity_lut()

    def test_fewer_than_two_points_give_identity(self):
        assert compute_lut([]) == identity_lut()
        assert compute_lut([(128, 30)]) == identity_lut()

    def test_unsorted_input_is_sorted(self, sample_points):
        assert compute_lut(list(reversed(sample_points))) == compute_lut(sample_points)

    def test_passes_through_control_points(self, sample_points):
        lut = compute_lut(sample_points)
        for x, y in sample_points:
            assert lut[x] == y

    def test_boundary_exactness(self):
        lut = compute_lut([(0, 30), (128, 128), (255, 220)])
        assert lut[0] == 30
        assert lut[255] == 220

    def test_levels_outside_points_are_clamped_to_end_values(self):
        lut = compute_lut([(50, 100), (200, 150)])
        assert all(value == 100 for value in lut[:51])
        assert all(value == 150 for value in lut[200:])

    def test_s_curve_is_monotone(self, sample_points):
        lut = compute_lut(sample_points)
        assert all(a <= b for a, b in zip(lut, lut[1:]))

    def test_inverted_curve(self):
        lut = compute_lut([(0, 255), (255, 0)])
        assert lut[0] == 255
        assert lut[255] == 0
        assert lut[100] == 155

    @pytest.mark.parametrize(
        "points",
        [
            [(0, 255), (50, 0), (100, 255), (150, 0), (255, 255)],
            [(0, 0), (10, 255), (20, 0), (255, 255)],
            [(0, 128), (128, 255), (130, 0), (255, 128)],
        ],
    )
    def test_non_monotone_points_stay_in_range(self, points):
        lut = compute_lut(points)
        assert len(lut) == 256
        assert all(isinstance(value, int) for value in lut)
        assert all(0 <= value <= 255 for value in lut)

    def test_no_overshoot_at_local_extremum(self):
        """A peak point gets a flat tangent so neighbours never exceed it."""
        lut = compute_lut([(0, 0), (128, 200), (255, 0)])
        assert max(lut) == 200
        assert lut[128] == 200

    def test_duplicate_x_is_collapsed(self):
        """Points sharing an x keep the later one instead of dividing by zero."""
        lut = compute_lut([(0, 0), (100, 50), (100, 80), (255, 255)])
        assert lut[100] == 80
        assert all(0 <= value <= 255 for value in lut)
