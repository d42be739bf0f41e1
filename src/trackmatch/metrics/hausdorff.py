"""
Hausdorff distance between two point sets.

Ignores path order entirely: the result is the worst nearest-point gap in
either direction.
"""

from trackmatch.geometry.primitives import as_points, pairwise_distances


def directional_hausdorff(a, b):
    """max over points of a of the distance to the nearest point of b."""
    pa = as_points(a)
    pb = as_points(b)
    if len(pa) == 0 or len(pb) == 0:
        raise ValueError("Hausdorff distance is undefined for an empty point set")
    return float(pairwise_distances(pa, pb).min(axis=1).max())


def hausdorff_distance(a, b):
    """
    Symmetric Hausdorff distance.

    Raises ValueError when either set is empty; callers are expected to
    guard against that before reaching this layer.
    """
    pa = as_points(a)
    pb = as_points(b)
    if len(pa) == 0 or len(pb) == 0:
        raise ValueError("Hausdorff distance is undefined for an empty point set")

    dist = pairwise_distances(pa, pb)
    forward = dist.min(axis=1).max()
    backward = dist.min(axis=0).max()
    return float(max(forward, backward))
