"""
Turning-angle profile distance.

Every vertex of a (cyclic) path gets the signed change of heading between
its incoming and outgoing segment. Two shapes are compared by the mean
absolute difference of their profiles, with the same cyclic offset search
as the Fréchet engine.
"""

import math

import numpy as np

from trackmatch.geometry.primitives import as_points
from trackmatch.metrics.cyclic import DEFAULT_OFFSET_DIVISIONS, offset_candidates, rotate_sequence


def wrap_angle(angle):
    """Wrap angles (scalar or array) into (-pi, pi]."""
    return np.pi - np.mod(np.pi - angle, 2 * np.pi)


def turning_angles(points):
    """
    Signed turning angle at every vertex, treating the sequence as cyclic.

    Index -1 and index N wrap around to the opposite ends.
    """
    pts = as_points(points)
    if len(pts) == 0:
        return np.zeros(0, dtype=np.float64)

    prev_pts = np.roll(pts, 1, axis=0)
    next_pts = np.roll(pts, -1, axis=0)

    incoming = pts - prev_pts
    outgoing = next_pts - pts

    heading_in = np.arctan2(incoming[:, 1], incoming[:, 0])
    heading_out = np.arctan2(outgoing[:, 1], outgoing[:, 0])

    return wrap_angle(heading_out - heading_in)


def turning_angle_distance(a, b, divisions=DEFAULT_OFFSET_DIVISIONS):
    """
    Mean absolute turning-angle difference, minimized over offsets of b.

    Returns math.inf when either sequence is empty.
    """
    profile_a = turning_angles(a)
    profile_b = turning_angles(b)
    if len(profile_a) == 0 or len(profile_b) == 0:
        return math.inf

    overlap = min(len(profile_a), len(profile_b))
    head_a = profile_a[:overlap]

    best = math.inf
    for offset in offset_candidates(len(profile_b), divisions):
        # the profile of a rotated cyclic sequence is the rotated profile
        rotated = rotate_sequence(profile_b, offset)
        diff = float(np.mean(np.abs(head_a - rotated[:overlap])))
        best = min(best, diff)

    return best
