"""
Command-line entry point for the hackathon aggregator.

Usage:
    python -m servers.hackathon_feed                    # Run all sources, print summary
    python -m servers.hackathon_feed --json             # Print events as JSON
    python -m servers.hackathon_feed --sources devpost,mlh
    python -m servers.hackathon_feed --test-sources     # Run each source on its own
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog

from .aggregator import CONCURRENCY_MODES
from .config import ConfigError, load_config
from .consumers import format_run_summary
from .pipeline import Pipeline
from .resilience.health import HealthMonitor
from .sources import SOURCE_REGISTRY, build_adapters


def configure_logging(verbose: bool = False) -> None:
    """Route structlog output to stderr so stdout stays clean for --json."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hackathon-feed",
        description="Aggregate hackathon listings from multiple sources",
    )
    parser.add_argument("--config", type=Path, help="JSON config file")
    parser.add_argument(
        "--sources",
        help=f"Comma-separated subset of sources ({', '.join(SOURCE_REGISTRY)})",
    )
    parser.add_argument(
        "--concurrency",
        choices=CONCURRENCY_MODES,
        help="Fan-out mode (overrides config)",
    )
    parser.add_argument("--json", action="store_true", help="Print events as JSON")
    parser.add_argument("--limit", type=int, default=10, help="Events shown in the summary")
    parser.add_argument(
        "--test-sources",
        action="store_true",
        help="Run each source individually and report its result",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def parse_sources(value: Optional[str]) -> Optional[list[str]]:
    """Split and check a --sources value."""
    if not value:
        return None
    names = [name.strip().lower() for name in value.split(",") if name.strip()]
    unknown = [name for name in names if name not in SOURCE_REGISTRY]
    if unknown:
        raise ValueError(f"Unknown source(s): {', '.join(unknown)}")
    return names


async def check_sources(config: dict, only: Optional[list[str]] = None) -> int:
    """Run each adapter on its own; returns the number of failing sources."""
    health = HealthMonitor()
    for adapter in build_adapters(config, only=only):
        print(f"\n--- Testing {adapter.website} ---")
        result = await adapter.fetch()
        health.record(result)
        if result.ok:
            print(f"{adapter.website}: {len(result.events)} events ({result.duration_ms} ms)")
            if result.events:
                print(f"Sample event: {result.events[0].event_name}")
        else:
            print(f"{adapter.website}: FAILED - {result.error}")

    summary = health.summary()
    print(f"\n{summary.healthy}/{summary.total} sources healthy")
    failing = health.unhealthy_sources()
    if failing:
        print(f"Failing: {', '.join(failing)}")
    return len(failing)


async def run(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
        only = parse_sources(args.sources)
    except (ConfigError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.concurrency:
        config["concurrency"] = args.concurrency

    if args.test_sources:
        failures = await check_sources(config, only)
        return 1 if failures else 0

    report = await Pipeline.from_config(config, only=only).run_report()

    if args.json:
        print(json.dumps([e.model_dump() for e in report.events], indent=2, ensure_ascii=False))
    else:
        print(format_run_summary(report, limit=args.limit))

    # Nothing from any source is a valid outcome, not a crash
    return 0


def main() -> None:
    args = build_parser().parse_args()
    configure_logging(args.verbose)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
