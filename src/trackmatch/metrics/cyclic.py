"""
Cyclic offset search shared by the order-sensitive metrics.

Closed circuits and sketches rarely start at the same physical spot, so the
second sequence is tried at several rotated starting indices. Only every
len/divisions-th offset is tried, which bounds the search at `divisions`
trials instead of one per point.
"""

import numpy as np

DEFAULT_OFFSET_DIVISIONS = 8


def offset_candidates(length, divisions=DEFAULT_OFFSET_DIVISIONS):
    """Starting offsets to try for a cyclic sequence of the given length."""
    if length <= 0:
        return range(0)
    step = max(1, length // max(1, divisions))
    return range(0, length, step)


def rotate_sequence(seq, offset):
    """Return a copy of seq that starts at index offset and wraps around."""
    if len(seq) == 0:
        return np.array(seq, copy=True)
    return np.roll(seq, -(offset % len(seq)), axis=0)
