"""
Discrete Fréchet distance with a cyclic starting-offset search.

The coupling table is filled iteratively, row by row:

    ca[0][0] = d(0, 0)
    ca[i][0] = max(ca[i-1][0], d(i, 0))
    ca[0][j] = max(ca[0][j-1], d(0, j))
    ca[i][j] = max(d(i, j), min(ca[i-1][j], ca[i-1][j-1], ca[i][j-1]))

One table is allocated per call and reset before every offset trial.
"""

import math

import numpy as np

from trackmatch.geometry.primitives import as_points, pairwise_distances
from trackmatch.metrics.cyclic import DEFAULT_OFFSET_DIVISIONS, offset_candidates


def discrete_frechet(a, b):
    """Discrete Fréchet distance for a fixed alignment of a and b."""
    pa = as_points(a)
    pb = as_points(b)
    if len(pa) == 0 or len(pb) == 0:
        return math.inf

    dist = pairwise_distances(pa, pb)
    table = np.empty_like(dist)
    return _fill_coupling_table(dist, table)


def frechet_distance(a, b, divisions=DEFAULT_OFFSET_DIVISIONS):
    """
    Minimum discrete Fréchet distance over rotated starting points of b.

    Args:
        a: reference sequence (kept fixed)
        b: sequence treated as a closed loop and rotated
        divisions: number of evenly spaced offsets to try

    Returns:
        float distance, math.inf when either sequence is empty
    """
    pa = as_points(a)
    pb = as_points(b)
    if len(pa) == 0 or len(pb) == 0:
        return math.inf

    # rotating b only permutes the columns of the distance matrix
    dist = pairwise_distances(pa, pb)
    table = np.empty_like(dist)

    best = math.inf
    for offset in offset_candidates(len(pb), divisions):
        rotated = np.roll(dist, -offset, axis=1)
        best = min(best, _fill_coupling_table(rotated, table))

    return best


def _fill_coupling_table(dist, table):
    """Fill table in place from the distance matrix and return the corner."""
    n, m = dist.shape
    table.fill(np.inf)

    table[0, :] = np.maximum.accumulate(dist[0, :])
    table[:, 0] = np.maximum.accumulate(dist[:, 0])

    for i in range(1, n):
        row_prev = table[i - 1]
        row = table[i]
        d_row = dist[i]
        for j in range(1, m):
            reachable = min(row_prev[j], row_prev[j - 1], row[j - 1])
            row[j] = max(d_row[j], reachable)

    return float(table[n - 1, m - 1])
