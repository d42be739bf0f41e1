"""
Overlay alignment of a catalog layout onto a drawn shape.
"""

import numpy as np

from trackmatch.geometry.primitives import as_points, bounding_box


def align_to_reference(candidate, reference):
    """
    Scale and translate candidate so it sits centered inside the bounding
    box of reference, keeping its aspect ratio.

    Returns a new (N, 2) array. Empty inputs return the candidate unchanged.
    """
    cand = as_points(candidate)
    ref = as_points(reference)
    if len(cand) == 0 or len(ref) == 0:
        return cand

    ref_box = bounding_box(ref)
    cand_box = bounding_box(cand)

    ratios = []
    if cand_box.width > 0:
        ratios.append(ref_box.width / cand_box.width)
    if cand_box.height > 0:
        ratios.append(ref_box.height / cand_box.height)

    if not ratios:
        # candidate collapsed to a point: just move it to the reference center
        offset = np.array([ref_box.center_x - cand_box.center_x, ref_box.center_y - cand_box.center_y])
        return cand + offset

    scale = min(ratios)
    origin = np.array([cand_box.min_x, cand_box.min_y])
    pad = np.array([
        (ref_box.width - cand_box.width * scale) / 2,
        (ref_box.height - cand_box.height * scale) / 2,
    ])
    return np.array([ref_box.min_x, ref_box.min_y]) + (cand - origin) * scale + pad
