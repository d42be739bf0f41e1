"""
Command-line interface for trackmatch.

Provides commands for ranking a catalog, comparing two shapes, and writing
a default configuration file.
"""

import argparse
import sys

from trackmatch.config import load_config, save_default_config
from trackmatch.models import MatchAlgorithm, NormalizationPolicy
from trackmatch.tracer import configure_tracer, get_tracer

ALGORITHM_CHOICES = [a.value for a in MatchAlgorithm]
POLICY_CHOICES = [p.value for p in NormalizationPolicy]


def _add_trace_arguments(parser):
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="trackmatch",
        description="trackmatch: find the race circuits that look like a sketch",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Match command
    match_parser = subparsers.add_parser("match", help="Rank a circuit catalog against a drawing")
    match_parser.add_argument(
        "--drawing", "-d",
        required=True,
        help="JSON file with the drawn points",
    )
    match_parser.add_argument(
        "--catalog",
        required=True,
        help="JSON circuit catalog",
    )
    match_parser.add_argument(
        "--algorithm", "-a",
        default=None,
        choices=ALGORITHM_CHOICES,
        help="Distance metric (default from config)",
    )
    match_parser.add_argument(
        "--policy",
        default=None,
        choices=POLICY_CHOICES,
        help="Normalization policy (default from config)",
    )
    match_parser.add_argument(
        "--top", "-k",
        type=int,
        default=None,
        help="Number of results to keep",
    )
    match_parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Worker threads for scoring candidates",
    )
    match_parser.add_argument(
        "--out", "-o",
        default=None,
        help="Output directory for results.json",
    )
    match_parser.add_argument(
        "--overlay",
        action="store_true",
        help="Write SVG overlays for the top results",
    )
    match_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    _add_trace_arguments(match_parser)

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Score one drawing against one candidate")
    compare_parser.add_argument(
        "--drawing", "-d",
        required=True,
        help="JSON file with the drawn points",
    )
    compare_parser.add_argument(
        "--candidate",
        required=True,
        help="JSON file with the candidate points",
    )
    compare_parser.add_argument(
        "--algorithm", "-a",
        default=None,
        choices=ALGORITHM_CHOICES,
        help="Distance metric (all metrics when omitted)",
    )
    compare_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    _add_trace_arguments(compare_parser)

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="trackmatch_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "match":
        return handle_match(args)
    elif args.command == "compare":
        return handle_compare(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def _configure_tracing(args, config):
    configure_tracer(
        enabled=args.trace or config.tracing.enabled,
        level=args.trace_level if args.trace else config.tracing.level,
        file_path=args.trace_file or config.tracing.file_path,
        json_output=args.trace_json or config.tracing.json_output,
    )


def handle_match(args):
    """Handle the match command."""
    config = load_config(args.config)

    if args.policy:
        config.matching.policy = args.policy
    if args.top is not None:
        config.output.top_k = args.top
    if args.workers is not None:
        config.parallel.workers = args.workers
    if args.overlay:
        config.output.overlay = True

    _configure_tracing(args, config)
    tracer = get_tracer()

    try:
        from trackmatch.pipeline import run_matching

        with tracer.span("cli_match", module="cli"):
            report = run_matching(
                drawing_path=args.drawing,
                catalog_path=args.catalog,
                out_dir=args.out,
                algorithm=args.algorithm,
                config=config,
            )

        print(f"\nAlgorithm: {report.algorithm.value} (policy: {report.policy.value})")
        print(f"Candidates scored: {report.candidate_count}\n")
        for rank, result in enumerate(report.results, start=1):
            print(f"  {rank:>3}. {result.circuit_id:<30} {result.similarity:6.2f}")

        if args.out:
            print(f"\nResults saved to: {args.out}/results.json")

        return 0

    except Exception as e:
        tracer.event(f"Matching failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_compare(args):
    """Handle the compare command."""
    config = load_config(args.config)
    _configure_tracing(args, config)
    tracer = get_tracer()

    try:
        from trackmatch.io.load_catalog import load_drawing
        from trackmatch.matcher import match_shape

        drawn = load_drawing(args.drawing)
        candidate = load_drawing(args.candidate)

        algorithms = [MatchAlgorithm(args.algorithm)] if args.algorithm else list(MatchAlgorithm)

        with tracer.span("cli_compare", module="cli"):
            for algorithm in algorithms:
                similarity = match_shape(drawn, candidate, algorithm, config)
                print(f"{algorithm.value:<14} {similarity:6.2f}")

        return 0

    except Exception as e:
        tracer.event(f"Comparison failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
