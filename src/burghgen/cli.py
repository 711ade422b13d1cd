"""Command-line interface for map generation."""

import argparse
import json
import sys
from pathlib import Path

import structlog

from .config import GenerationConfig, load_config
from .exceptions import ConfigError, InvalidDimensionsError
from .generator import generate_from_config
from .preview import save_preview
from .state import tiles_to_payload
from .validation import validate_map


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a procedural medieval town map"
    )
    parser.add_argument(
        "--type",
        dest="map_type",
        type=str,
        default=None,
        help="Map type: river, lake or seaside (overrides config, default: seaside)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed (overrides config, default: 1234)"
    )
    parser.add_argument(
        "--width", type=int, default=None, help="Map width (overrides config, default: 256)"
    )
    parser.add_argument(
        "--height", type=int, default=None, help="Map height (overrides config, default: 256)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a generation TOML config file",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Write the tile list as JSON here (default: stdout)",
    )
    parser.add_argument(
        "--preview",
        type=str,
        default=None,
        help="Write a PNG preview of the map here (optional)",
    )
    parser.add_argument(
        "--tile-px", type=positive_int, default=1, help="Preview pixels per tile (default: 1)"
    )
    parser.add_argument(
        "--validate", action="store_true", help="Validate the map and fail on errors"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Configure structlog; logs go to stderr so stdout stays clean JSON."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if verbose else 20),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for map generation."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    logger = structlog.get_logger()

    # Load config
    if args.config:
        try:
            config = load_config(Path(args.config))
        except FileNotFoundError:
            logger.error("config_not_found", path=args.config)
            raise SystemExit(1)
        except ConfigError as e:
            logger.error("config_invalid", path=args.config, error=str(e))
            raise SystemExit(1)
        logger.info("config_loaded", path=args.config)
    else:
        config = GenerationConfig()

    # Apply CLI overrides
    if args.map_type is not None:
        config.map_type = args.map_type
    if args.seed is not None:
        config.seed = args.seed
    if args.width is not None:
        config.width = args.width
    if args.height is not None:
        config.height = args.height

    try:
        result = generate_from_config(config)
    except InvalidDimensionsError as e:
        logger.error("invalid_dimensions", error=str(e))
        raise SystemExit(1)

    payload = json.dumps(tiles_to_payload(result.tiles.tiles))
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload)
        logger.info("tiles_written", path=str(output_path), tiles=len(result.tiles))
    else:
        sys.stdout.write(payload + "\n")

    if args.preview:
        save_preview(result.tiles, result.width, result.height, Path(args.preview), args.tile_px)
        logger.info("preview_written", path=args.preview)

    if args.validate:
        validation = validate_map(result)
        if not validation.passed:
            raise SystemExit(1)


if __name__ == "__main__":
    main()
