"""
Distance to similarity mapping.

similarity = 100 * exp(-distance * decay), clamped to [0, 100]. The decay
constant is per metric and comes from ScoringConfig.
"""

import math

from trackmatch.config import ScoringConfig
from trackmatch.models import MatchAlgorithm, parse_algorithm


def distance_to_similarity(distance, decay):
    """Map a raw distance to a score in [0, 100]."""
    if distance is None or math.isnan(distance):
        return 0.0
    if math.isinf(distance):
        return 0.0 if distance > 0 else 100.0

    similarity = 100.0 * math.exp(-distance * decay)
    return max(0.0, min(100.0, similarity))


def decay_for(algorithm, scoring=None):
    """Decay constant configured for an algorithm."""
    scoring = scoring or ScoringConfig()
    algorithm = parse_algorithm(algorithm)

    if algorithm is MatchAlgorithm.HAUSDORFF:
        return scoring.hausdorff_decay
    if algorithm is MatchAlgorithm.FRECHET:
        return scoring.frechet_decay
    if algorithm is MatchAlgorithm.TURNING_ANGLE:
        return scoring.turning_angle_decay

    raise AssertionError(f"unhandled algorithm {algorithm!r}")


def score(distance, algorithm, scoring=None):
    """Similarity for a raw distance produced by the given algorithm."""
    return distance_to_similarity(distance, decay_for(algorithm, scoring))
