"""
Arc-length resampling of polylines.

Distance engines compare sequences index by index, so both shapes are first
redistributed to the same number of points spaced evenly along the path.
"""

import numpy as np

from trackmatch.geometry.primitives import as_points, segment_lengths

DEFAULT_RESAMPLE_COUNT = 64


def resample(points, n=DEFAULT_RESAMPLE_COUNT):
    """
    Resample a polyline to exactly n points evenly spaced by arc length.

    The first output point is the first input point and path direction is
    preserved. Floating-point shortfall at the end of the walk is padded
    with the final input point.

    Args:
        points: point sequence in any form accepted by as_points
        n: number of output points

    Returns:
        new (n, 2) array; empty when the input is empty
    """
    if n < 1:
        raise ValueError(f"Resample count must be positive, got {n}")

    pts = as_points(points)
    if len(pts) == 0:
        return pts

    if n == 1:
        return pts[:1].copy()

    lengths = segment_lengths(pts)
    total_length = float(lengths.sum())

    if total_length == 0:
        # single point or all points coincident
        return np.repeat(pts[:1], n, axis=0)

    spacing = total_length / (n - 1)
    resampled = [pts[0]]
    accumulated = 0.0

    for i in range(1, len(pts)):
        prev = pts[i - 1]
        curr = pts[i]
        dist = lengths[i - 1]

        accumulated += dist

        while accumulated >= spacing and len(resampled) < n:
            ratio = (accumulated - spacing) / dist
            resampled.append(curr - ratio * (curr - prev))
            # subtract rather than reset so rounding does not compound
            accumulated -= spacing

    while len(resampled) < n:
        resampled.append(pts[-1])

    return np.array(resampled[:n], dtype=np.float64)


def path_length(points):
    """Total length of a polyline."""
    return float(segment_lengths(as_points(points)).sum())
