"""
File-level orchestrator for trackmatch.

Loads a drawing and a catalog, ranks the catalog, and writes the report.
"""

import os

from trackmatch.config import load_config
from trackmatch.export.svg_overlay import export_overlays
from trackmatch.io.load_catalog import catalog_pairs, load_catalog, load_drawing, validate_inputs
from trackmatch.io.save_artifacts import ensure_dir, save_json
from trackmatch.matcher import match_catalog
from trackmatch.models import MatchReport, parse_algorithm, parse_policy
from trackmatch.tracer import get_tracer, trace


@trace(label="run_matching")
def run_matching(drawing_path, catalog_path, out_dir=None, algorithm=None,
                 config=None, config_path=None):
    """
    Rank every catalog circuit against a drawn shape.

    Args:
        drawing_path: JSON file with the drawn points
        catalog_path: JSON circuit catalog
        out_dir: directory for results.json and overlays (optional)
        algorithm: overrides config.matching.algorithm when given
        config: MatchConfig object (optional)
        config_path: path to YAML config file (optional)

    Returns:
        MatchReport holding the top_k results
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)

    algorithm = parse_algorithm(algorithm or config.matching.algorithm)
    policy = parse_policy(config.matching.policy)

    errors = validate_inputs(drawing_path, catalog_path)
    if errors:
        for error in errors:
            tracer.event(error, level="ERROR")
        raise ValueError(f"Input validation failed: {errors}")

    with tracer.span("load_inputs", module="pipeline"):
        drawn = load_drawing(drawing_path)
        circuits = load_catalog(catalog_path)
        pairs = catalog_pairs(circuits)

    with tracer.span("rank_catalog", module="pipeline"):
        results = match_catalog(drawn, pairs, algorithm, config)

    top_k = config.output.top_k
    if top_k and top_k > 0:
        results = results[:top_k]

    report = MatchReport(
        algorithm=algorithm,
        policy=policy,
        resample_count=config.matching.resample_count,
        drawn_point_count=len(drawn),
        candidate_count=len(pairs),
        results=results,
    )

    if out_dir:
        with tracer.span("write_outputs", module="pipeline"):
            ensure_dir(out_dir)
            save_json(report, os.path.join(out_dir, "results.json"))

            if config.output.overlay:
                export_overlays(drawn, dict(pairs), results, out_dir, config.output)

    tracer.event(f"Matching complete: {len(results)} results from {len(pairs)} circuits")

    return report
