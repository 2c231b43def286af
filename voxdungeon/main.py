"""voxdungeon CLI entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import structlog
from structlog.stdlib import add_log_level, add_logger_name

from voxdungeon.config import DungeonMapSpec, load_config
from voxdungeon.generator import MAX_GENERATE_TRIES, GenerationError, generate_with_retry
from voxdungeon.output import VoxelMap, export_json, export_voxels

log = structlog.get_logger()


def setup_logging(verbose: bool) -> None:
    """Configure structlog for console output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_logger_name,
            add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the voxdungeon command."""
    parser = argparse.ArgumentParser(
        description="voxdungeon - Generate voxel dungeon layouts",
    )
    parser.add_argument(
        "config",
        type=Path,
        nargs="?",
        default=None,
        help="Path to config.toml (optional, uses defaults if not provided)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("./output"),
        help="Output directory (default: ./output)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        nargs=4,
        metavar="WORD",
        help="Four 32-bit seed words (overrides config)",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=MAX_GENERATE_TRIES,
        help=f"Max generation attempts (default: {MAX_GENERATE_TRIES})",
    )
    parser.add_argument(
        "--voxels",
        action="store_true",
        help="Also write voxels.json",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    # Load or create config
    try:
        if args.config:
            try:
                config = load_config(args.config)
                log.debug("Loaded config", path=str(args.config))
            except FileNotFoundError:
                print(f"Error: Config file not found: {args.config}", file=sys.stderr)
                return 1
        else:
            config = DungeonMapSpec()
            log.debug("Using default configuration")

        if args.seed is not None:
            config = replace(config, seed=tuple(args.seed))
    except ValueError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    voxels = VoxelMap()
    try:
        result = generate_with_retry(config, voxels, max_attempts=args.max_attempts)
    except GenerationError as e:
        print(f"Error: Generation failed: {e}", file=sys.stderr)
        return 1

    if args.verbose and result.validation.warnings:
        print("Validation warnings:")
        for warning in result.validation.warnings:
            print(f"  - {warning}")

    print(f"Generated dungeon with seed {list(config.seed)}")
    print(f"  Attempts: {result.attempts}")
    print(f"  Rooms: {len(result.rooms)}")
    print(f"  Doors: {len(result.doors)}")
    print(f"  Main path: {result.main_path}")
    print(f"  Spawn points: {len(result.meta.spawn_area.valid_spawn_points)}")

    json_path = args.output / "dungeon.json"
    export_json(result, config, json_path)
    print(f"Written: {json_path}")

    if args.voxels:
        voxels_path = args.output / "voxels.json"
        export_voxels(voxels, voxels_path)
        print(f"Written: {voxels_path} ({len(voxels)} voxels)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
