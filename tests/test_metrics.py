"""Tests for the Hausdorff, Fréchet and turning-angle distance engines."""

import math

import numpy as np
import pytest

from trackmatch.geometry.resample import resample
from trackmatch.metrics.cyclic import offset_candidates, rotate_sequence
from trackmatch.metrics.frechet import discrete_frechet, frechet_distance
from trackmatch.metrics.hausdorff import directional_hausdorff, hausdorff_distance
from trackmatch.metrics.turning import turning_angle_distance, turning_angles, wrap_angle


class TestCyclic:
    """Tests for the offset search helpers."""

    def test_offsets_every_eighth(self):
        assert list(offset_candidates(64)) == [0, 8, 16, 24, 32, 40, 48, 56]

    def test_offsets_minimum_step(self):
        assert list(offset_candidates(5)) == [0, 1, 2, 3, 4]

    def test_offsets_empty(self):
        assert list(offset_candidates(0)) == []

    def test_rotate_sequence(self):
        seq = np.array([[0, 0], [1, 1], [2, 2]])

        assert np.array_equal(rotate_sequence(seq, 1), [[1, 1], [2, 2], [0, 0]])
        assert np.array_equal(rotate_sequence(seq, 4), rotate_sequence(seq, 1))


class TestHausdorff:
    """Tests for the Hausdorff distance."""

    def test_identical_sets(self, circuit_like):
        assert hausdorff_distance(circuit_like, circuit_like) == 0.0

    def test_known_value(self):
        a = [[0, 0], [1, 0]]
        b = [[0, 0], [1, 0], [1, 3]]

        assert directional_hausdorff(a, b) == 0.0
        assert directional_hausdorff(b, a) == pytest.approx(3.0)
        assert hausdorff_distance(a, b) == pytest.approx(3.0)

    def test_symmetry(self):
        rng = np.random.default_rng(7)
        a = rng.random((64, 2))
        b = rng.random((64, 2))

        assert hausdorff_distance(a, b) == hausdorff_distance(b, a)

    def test_ignores_order(self, circuit_like):
        reversed_order = list(reversed(circuit_like))

        assert hausdorff_distance(circuit_like, reversed_order) == 0.0

    def test_empty_raises(self, circuit_like):
        with pytest.raises(ValueError):
            hausdorff_distance([], circuit_like)


class TestFrechet:
    """Tests for the discrete Fréchet distance."""

    def test_parallel_lines(self):
        a = [[0, 0], [1, 0], [2, 0]]
        b = [[0, 1], [1, 1], [2, 1]]

        assert discrete_frechet(a, b) == pytest.approx(1.0)

    def test_order_sensitive(self):
        a = [[0, 0], [1, 0], [2, 0]]

        assert discrete_frechet(a, list(reversed(a))) == pytest.approx(2.0)

    def test_identical(self, circuit_like):
        assert frechet_distance(circuit_like, circuit_like) == 0.0

    def test_offset_search_recovers_start_point(self, circle):
        shifted = np.roll(circle, -16, axis=0)

        assert discrete_frechet(circle, shifted) > 1.0
        assert frechet_distance(circle, shifted) == pytest.approx(0.0, abs=1e-9)

    def test_never_worse_than_fixed_alignment(self, circle, circuit_like):
        b = resample(circuit_like, 64)

        assert frechet_distance(circle, b) <= discrete_frechet(circle, b)

    def test_unequal_lengths(self):
        a = [[0, 0], [1, 0], [2, 0], [3, 0]]
        b = [[0, 0], [3, 0]]

        assert discrete_frechet(a, b) == pytest.approx(1.0)

    def test_empty_is_infinite(self, circuit_like):
        assert frechet_distance([], circuit_like) == math.inf
        assert frechet_distance(circuit_like, []) == math.inf
        assert discrete_frechet([], []) == math.inf


class TestTurningAngles:
    """Tests for turning-angle profiles."""

    def test_wrap_range(self):
        angles = np.array([np.pi, -np.pi, 3 * np.pi / 2, -3 * np.pi / 2, 0.25])
        wrapped = wrap_angle(angles)

        assert np.all(wrapped > -np.pi)
        assert np.all(wrapped <= np.pi)
        assert wrapped[0] == pytest.approx(np.pi)
        assert wrapped[1] == pytest.approx(np.pi)
        assert wrapped[2] == pytest.approx(-np.pi / 2)
        assert wrapped[3] == pytest.approx(np.pi / 2)
        assert wrapped[4] == pytest.approx(0.25)

    def test_square_profile(self, unit_square):
        profile = turning_angles(unit_square)

        assert np.allclose(profile, np.pi / 2)

    def test_resampled_square_has_four_corners(self, unit_square):
        profile = turning_angles(resample(unit_square, 64))

        corners = np.abs(np.abs(profile) - np.pi / 2) < 1e-6
        assert corners.sum() == 4
        assert np.all(np.abs(profile[~corners]) < 1e-6)

    def test_clockwise_square_turns_negative(self, unit_square):
        profile = turning_angles(list(reversed(unit_square)))

        assert np.allclose(profile, -np.pi / 2)

    def test_empty_profile(self):
        assert len(turning_angles([])) == 0


class TestTurningAngleDistance:
    """Tests for the turning-angle distance."""

    def test_identical(self, circuit_like):
        assert turning_angle_distance(circuit_like, circuit_like) == 0.0

    def test_offset_search(self, circuit_like):
        resampled = resample(circuit_like, 64)
        shifted = np.roll(resampled, -24, axis=0)

        assert turning_angle_distance(resampled, shifted) == pytest.approx(0.0, abs=1e-12)

    def test_line_vs_circle_is_far(self, line_segment, circle):
        line = resample(line_segment, 64)

        assert turning_angle_distance(line, circle) > 0.15

    def test_empty_is_infinite(self, circuit_like):
        assert turning_angle_distance([], circuit_like) == math.inf
