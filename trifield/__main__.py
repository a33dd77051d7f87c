import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from trifield import (
    NumpyRandomSource,
    TrifieldError,
    build_level,
    generate_placements,
    generate_tikz_document,
    load_config,
    load_template,
    resolve_markers,
    save_level,
)
from trifield.config import DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _run(args: argparse.Namespace) -> None:
    if args.config != DEFAULT_CONFIG_PATH:
        logger.info("Using config: %s instead of default", args.config)
    config = load_config(args.config)

    options = config.placement
    if args.max_attempts is not None:
        options = options.replace(max_attempts=args.max_attempts)
    seed = args.seed if args.seed is not None else config.seed
    output = Path(args.output) if args.output else config.output

    region = config.build_region()
    rng = NumpyRandomSource.from_seed(seed)
    logger.info("Generating placements (seed=%s, stop rule=%s)", seed, options.stop_rule.value)

    start = time.perf_counter()

    def _report(placed: int, attempts: int) -> None:
        logger.info(
            "Elapsed: %.3fs (placed: %d, attempts: %d)",
            time.perf_counter() - start,
            placed,
            attempts,
        )

    result = generate_placements(region, rng, options, progress=_report)
    markers = resolve_markers(result.placements)
    logger.info("Marker validation done after %.3fs", time.perf_counter() - start)

    template = load_template(config.template) if config.template else None
    level = build_level(
        result.placements,
        markers,
        template=template,
        region=region if config.include_region else None,
    )
    save_level(level, output)
    print(f"Placed {result.accepted} triangle(s) and {len(markers)} marker(s) in {result.attempts} attempt(s)")
    print(f"Level written to {output}")

    if args.tikz_output_path:
        tikz_path = Path(args.tikz_output_path)
        tikz_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing TikZ document to %s", tikz_path)
        tikz_path.write_text(
            generate_tikz_document(result.placements, markers, region=region),
            encoding="utf-8",
        )
        print(f"TikZ document written to {tikz_path}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Scatter triangular obstacles over a region")
    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the JSON run configuration (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed; overrides the config value",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        help="Override the attempt cap of the placement options",
    )
    parser.add_argument(
        "--output",
        help="Where to write the level JSON; overrides the config value",
    )
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ preview to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        _run(args)
    except TrifieldError as exc:
        logger.error("%s", exc)
        raise SystemExit(1)


if __name__ == "__main__":
    main(sys.argv[1:])
