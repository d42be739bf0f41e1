"""
Geometry primitives shared by the normalizer, resampler and distance engines.

Point sequences are handled as (N, 2) float64 numpy arrays.
"""

import numpy as np

from trackmatch.models import BoundingBox, InvalidGeometryError, Point


def as_points(points):
    """
    Coerce a point sequence to an (N, 2) float64 array.

    Accepts an (N, 2) array, Point models, [x, y] / (x, y) pairs, or
    {"x": .., "y": ..} dicts. Always returns a new array.

    Raises InvalidGeometryError for malformed or non-finite coordinates.
    """
    if isinstance(points, np.ndarray):
        arr = np.array(points, dtype=np.float64)
    else:
        points = list(points)
        if not points:
            return np.empty((0, 2), dtype=np.float64)
        try:
            arr = np.array([_coords(p) for p in points], dtype=np.float64)
        except (TypeError, ValueError, KeyError) as e:
            raise InvalidGeometryError(f"Malformed point sequence: {e}") from e

    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidGeometryError(f"Expected (N, 2) coordinates, got shape {arr.shape}")

    if not np.all(np.isfinite(arr)):
        bad = int(np.argmax(~np.isfinite(arr).all(axis=1)))
        raise InvalidGeometryError(f"Non-finite coordinate at index {bad}")

    return arr


def _coords(p):
    if isinstance(p, Point):
        return (p.x, p.y)
    if isinstance(p, dict):
        return (p["x"], p["y"])
    if len(p) != 2:
        raise ValueError(f"point {p!r} does not have two coordinates")
    return (p[0], p[1])


def bounding_box(points):
    """
    Compute the bounding box of a point sequence.

    Returns a zeroed box for empty input; callers treat that as the
    degenerate-shape signal.
    """
    pts = as_points(points)
    if len(pts) == 0:
        return BoundingBox()

    min_x, min_y = pts.min(axis=0)
    max_x, max_y = pts.max(axis=0)

    return BoundingBox(
        min_x=float(min_x),
        max_x=float(max_x),
        min_y=float(min_y),
        max_y=float(max_y),
        width=float(max_x - min_x),
        height=float(max_y - min_y),
        center_x=float((min_x + max_x) / 2),
        center_y=float((min_y + max_y) / 2),
    )


def centroid(points):
    """Arithmetic mean of the points; (0.0, 0.0) for an empty sequence."""
    pts = as_points(points)
    if len(pts) == 0:
        return (0.0, 0.0)
    cx, cy = pts.mean(axis=0)
    return (float(cx), float(cy))


def distance(p1, p2):
    """Euclidean distance between two points."""
    x1, y1 = _coords(p1)
    x2, y2 = _coords(p2)
    return float(np.hypot(x1 - x2, y1 - y2))


def segment_lengths(pts):
    """Lengths of consecutive segments of an (N, 2) array."""
    if len(pts) < 2:
        return np.zeros(0, dtype=np.float64)
    return np.linalg.norm(np.diff(pts, axis=0), axis=1)


def pairwise_distances(a, b):
    """Distance matrix D[i, j] = |a[i] - b[j]| for two (N, 2) arrays."""
    diff = a[:, np.newaxis, :] - b[np.newaxis, :, :]
    return np.sqrt(np.einsum("ijk,ijk->ij", diff, diff))
