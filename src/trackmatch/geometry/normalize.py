"""
Shape normalization.

Makes a sketch and a catalog layout comparable regardless of where they were
drawn and in which units. Two policies exist and one must be applied to both
sides of every comparison:

- bbox: translate the bounding-box minimum to the origin and divide by the
  larger box dimension. Orientation is preserved.
- pca: translate to the centroid, rotate the principal axis onto x, then
  apply the bbox step.

The pca angle is measured on an arc-length resampling of the path, so the
same track sampled densely or sparsely turns by the same amount.

Known limitations of the pca policy:

- The principal axis of a 2x2 covariance is only defined up to 180 degrees,
  so two visually identical shapes (for instance a mirror or a reversed
  point order) can come out facing opposite ways. That ambiguity is left
  unresolved.
- Shapes whose spread is the same in every direction (circles, squares)
  have no principal axis. Their angle is taken as 0, so they keep their
  drawn orientation. Nearly isotropic shapes just above the tolerance can
  still turn by an arbitrary amount.
"""

import numpy as np

from trackmatch.geometry.primitives import as_points
from trackmatch.geometry.resample import resample
from trackmatch.models import NormalizationPolicy, parse_policy

# samples along the path used to estimate the principal axis
PCA_SAMPLE_COUNT = 256

# relative covariance anisotropy below which the axis is undefined
ISOTROPY_TOLERANCE = 1e-9


def normalize(points, policy=NormalizationPolicy.BBOX):
    """
    Normalize a point sequence with the given policy.

    Args:
        points: point sequence in any form accepted by as_points
        policy: NormalizationPolicy or its string value

    Returns:
        new (N, 2) array
    """
    policy = parse_policy(policy)
    if policy is NormalizationPolicy.BBOX:
        return normalize_bbox(points)
    return normalize_pca(points)


def normalize_bbox(points):
    """
    Translate the bounding-box minimum to the origin and scale by
    max(width, height).

    Coincident points are returned translated but unscaled.
    """
    pts = as_points(points)
    if len(pts) == 0:
        return pts

    mins = pts.min(axis=0)
    extent = pts.max(axis=0) - mins
    scale = float(max(extent[0], extent[1]))

    translated = pts - mins
    if scale == 0:
        return translated
    return translated / scale


def normalize_pca(points):
    """
    Center on the centroid, align the principal axis with x, then apply
    the bbox translate/scale step.
    """
    pts = as_points(points)
    if len(pts) == 0:
        return pts

    centered = pts - pts.mean(axis=0)
    angle = principal_angle(resample(centered, PCA_SAMPLE_COUNT))
    rotated = rotate_points(centered, -angle)

    return normalize_bbox(rotated)


def principal_angle(points):
    """
    Angle of the principal axis of a point cloud, in radians.

    Uses the population covariance of the points around their centroid.
    Returns 0 for fewer than two points and for clouds with no dominant
    direction.
    """
    pts = as_points(points)
    if len(pts) < 2:
        return 0.0

    d = pts - pts.mean(axis=0)
    cxx = float(np.mean(d[:, 0] * d[:, 0]))
    cxy = float(np.mean(d[:, 0] * d[:, 1]))
    cyy = float(np.mean(d[:, 1] * d[:, 1]))

    anisotropy = float(np.hypot(cxx - cyy, 2 * cxy))
    if anisotropy <= ISOTROPY_TOLERANCE * (cxx + cyy):
        return 0.0

    return 0.5 * float(np.arctan2(2 * cxy, cxx - cyy))


def rotate_points(points, angle):
    """Rotate points counter-clockwise by angle (radians) about the origin."""
    pts = as_points(points)
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    rotation = np.array([[cos_a, -sin_a], [sin_a, cos_a]])
    return pts @ rotation.T
