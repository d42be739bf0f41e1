"""
Matcher façade.

Runs normalize -> resample -> distance -> score for one pair of shapes and
ranks a catalog of candidates against a drawn shape. This is the only module
that knows about candidate identifiers.
"""

import math
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed

from trackmatch.config import MatchConfig
from trackmatch.geometry.normalize import normalize
from trackmatch.geometry.primitives import as_points
from trackmatch.geometry.resample import resample
from trackmatch.metrics.cyclic import DEFAULT_OFFSET_DIVISIONS
from trackmatch.metrics.frechet import frechet_distance
from trackmatch.metrics.hausdorff import hausdorff_distance
from trackmatch.metrics.turning import turning_angle_distance
from trackmatch.models import Circuit, MatchAlgorithm, MatchResult, parse_algorithm, parse_policy
from trackmatch.scoring import score
from trackmatch.tracer import get_tracer, trace


def prepare_shape(points, matching):
    """Normalize and resample a shape with the configured policy and count."""
    normalized = normalize(points, parse_policy(matching.policy))
    return resample(normalized, matching.resample_count)


def compute_distance(algorithm, a, b, divisions=DEFAULT_OFFSET_DIVISIONS):
    """
    Raw distance between two prepared shapes.

    Empty shapes yield math.inf for every algorithm, so they score 0.
    """
    algorithm = parse_algorithm(algorithm)
    if len(a) == 0 or len(b) == 0:
        return math.inf

    if algorithm is MatchAlgorithm.HAUSDORFF:
        return hausdorff_distance(a, b)
    if algorithm is MatchAlgorithm.FRECHET:
        return frechet_distance(a, b, divisions)
    if algorithm is MatchAlgorithm.TURNING_ANGLE:
        return turning_angle_distance(a, b, divisions)

    raise AssertionError(f"unhandled algorithm {algorithm!r}")


def match_shape(drawn, candidate, algorithm, config=None):
    """
    Similarity in [0, 100] between a drawn shape and one candidate.

    Both shapes go through the same normalization policy and resample
    count before the distance is computed.
    """
    config = config or MatchConfig()
    algorithm = parse_algorithm(algorithm)

    prepared_drawn = prepare_shape(drawn, config.matching)
    prepared_candidate = prepare_shape(candidate, config.matching)

    distance = compute_distance(
        algorithm, prepared_drawn, prepared_candidate, config.matching.offset_divisions
    )
    return score(distance, algorithm, config.scoring)


def catalog_entries(catalog):
    """
    Flatten a catalog into an ordered list of (identifier, points) pairs.

    Accepts a mapping of id -> points, an iterable of Circuit models, or an
    iterable of (id, points) pairs. Coordinates are validated here.
    """
    if isinstance(catalog, Mapping):
        items = catalog.items()
    else:
        items = catalog

    entries = []
    for item in items:
        if isinstance(item, Circuit):
            circuit_id, points = item.id, item.layout
        else:
            circuit_id, points = item
        entries.append((str(circuit_id), as_points(points)))
    return entries


@trace(label="match_catalog")
def match_catalog(drawn, catalog, algorithm, config=None):
    """
    Rank catalog candidates by similarity to the drawn shape.

    Args:
        drawn: drawn point sequence
        catalog: mapping, Circuit iterable, or (id, points) pairs
        algorithm: MatchAlgorithm or its string value
        config: MatchConfig (defaults when omitted)

    Returns:
        list of MatchResult, highest similarity first; equal scores keep
        catalog order
    """
    tracer = get_tracer()
    config = config or MatchConfig()
    algorithm = parse_algorithm(algorithm)

    prepared_drawn = prepare_shape(drawn, config.matching)
    entries = catalog_entries(catalog)

    tracer.event(
        f"Matching {len(entries)} candidates",
        algorithm=algorithm,
        policy=config.matching.policy,
        workers=config.parallel.workers,
    )

    scored = []
    workers = config.parallel.workers or 1

    if workers > 1 and len(entries) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_score_candidate, index, circuit_id, points, prepared_drawn, algorithm, config)
                for index, (circuit_id, points) in enumerate(entries)
            ]
            for future in as_completed(futures):
                scored.append(future.result())
    else:
        for index, (circuit_id, points) in enumerate(entries):
            scored.append(_score_candidate(index, circuit_id, points, prepared_drawn, algorithm, config))

    scored.sort(key=lambda item: (-item[1].similarity, item[0]))
    results = [result for _, result in scored]

    if results:
        tracer.event(f"Best match {results[0].circuit_id} ({results[0].similarity:.1f})")

    return results


def _score_candidate(index, circuit_id, points, prepared_drawn, algorithm, config):
    """Full candidate pipeline; returns (catalog index, MatchResult)."""
    tracer = get_tracer()

    prepared = prepare_shape(points, config.matching)
    distance = compute_distance(algorithm, prepared_drawn, prepared, config.matching.offset_divisions)
    similarity = score(distance, algorithm, config.scoring)

    tracer.event(f"Scored {circuit_id}", level="DEBUG", distance=distance, similarity=similarity)

    return index, MatchResult(circuit_id=circuit_id, similarity=similarity)
