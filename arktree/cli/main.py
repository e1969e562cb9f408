"""
Arktree command line.

Usage:
    arktree generate 5
    arktree generate 64 --seed 7 --json
    arktree generate 128 --config tree.yaml --output out/stats.json
    arktree generate 32 --no-weights -v
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from arktree.analysis.analyzer import analyze_tree
from arktree.config.settings import Settings
from arktree.core.exceptions import ArkTreeError
from arktree.generation import GenerationConfig, GenerationService, load_config

from .display import DisplayService

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arktree",
        description="Generate vtxo trees and report statistics about their branches.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate",
        help="Generate a vtxo tree with the specified number of leaves",
        description="Generate a vtxo tree with the specified number of leaves. "
                    "The number of leaves must be a positive integer.",
    )
    # kept as a string so invalid input gets our own error message
    generate.add_argument("num_leaves", metavar="NUMBER_OF_LEAVES", help="Number of leaves")
    generate.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    generate.add_argument("--config", "-c", type=Path, help="Generation configuration YAML file")
    generate.add_argument("--no-weights", action="store_true", help="Skip broadcast weight statistics")

    output = generate.add_argument_group("Output")
    output.add_argument("--output", "-o", metavar="FILE", type=Path, help="Export statistics to JSON file")
    output.add_argument("--tree-output", metavar="FILE", type=Path, help="Export the generated tree to JSON file")
    output.add_argument("--json", action="store_true", help="Print statistics as JSON to stdout")
    output.add_argument("--no-color", action="store_true", help="Disable colored output")
    output.add_argument("--quiet", "-q", action="store_true", help="Suppress console display")
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def parse_num_leaves(raw: str) -> int:
    try:
        num_leaves = int(raw)
    except ValueError:
        raise ValueError(f"Invalid number of leaves: {raw}") from None
    if num_leaves <= 0:
        raise ValueError("Number of leaves must be a positive integer")
    return num_leaves


def setup_logging(args: argparse.Namespace, settings: Settings) -> None:
    level = (
        logging.DEBUG if args.verbose
        else logging.WARNING if args.quiet
        else getattr(logging, settings.log_level, logging.WARNING)
    )
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ---------------------------------------------------------------------------
# Generate Command
# ---------------------------------------------------------------------------

def resolve_config(args: argparse.Namespace, settings: Settings, num_leaves: int) -> GenerationConfig:
    if args.config:
        config = load_config(args.config)
        config.num_leaves = num_leaves
        if args.seed is not None:
            config.seed = args.seed
        return config
    return GenerationConfig.from_settings(settings, num_leaves, seed=args.seed)


def export_json(data: Dict[str, Any], path: Path) -> None:
    """Write data to a JSON file, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def run_generate(args: argparse.Namespace, settings: Settings, display: DisplayService) -> int:
    show = not (args.quiet or args.json)

    num_leaves = parse_num_leaves(args.num_leaves)
    config = resolve_config(args, settings, num_leaves)

    if show:
        display.print_header("Ark Tree Generator")
        print(f"Generating Ark tree with {num_leaves} leaves...\n")
        display.step(f"Generating {num_leaves} leaves and building vtxo tree")
    generated = GenerationService(config).generate()
    if show:
        display.done(f"{generated.build_time_ms:.2f} ms")
        display.step("Calculating tree statistics")
    result = analyze_tree(generated.graph, include_weights=not args.no_weights)
    if show:
        display.done()

    payload = {
        "config": config.to_dict(),
        "build_time_ms": round(generated.build_time_ms, 2),
        "analysis": result.to_dict(),
    }
    if args.output:
        export_json(payload, args.output)
    if args.tree_output:
        export_json(generated.to_dict(), args.tree_output)

    if args.json:
        print(json.dumps(payload, indent=2))
    elif show:
        green = display.Colors.GREEN
        display.display_result(result)
        print()
        if args.output:
            print(display.colored(f"✓ Statistics exported to: {args.output}", green))
        if args.tree_output:
            print(display.colored(f"✓ Tree exported to: {args.tree_output}", green))
        print(display.colored(
            f"Successfully generated Ark tree with {num_leaves} leaves!", green, bold=True
        ))
    return 0


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    display = DisplayService(use_color=not args.no_color and sys.stdout.isatty())
    try:
        settings = Settings.from_env()
        setup_logging(args, settings)
        return run_generate(args, settings, display)
    except (ArkTreeError, ValueError, OSError, yaml.YAMLError) as exc:
        print(display.error(str(exc)), file=sys.stderr)
        if args.verbose:
            logger.exception("Generation failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
