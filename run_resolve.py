#!/usr/bin/env python3
"""
Command-line entry point for GraphQL schema import resolution.

Follows ``# import`` directives from an entry schema file and writes the
merged schema as SDL.

Usage:
    python run_resolve.py schema/main.graphql
    python run_resolve.py schema/main.graphql --sort-fields --output build/schema.graphql
    python run_resolve.py --config resolver.yml --report
"""

import argparse
import logging
import os
import sys
import time

from dotenv import load_dotenv

from core.resolver_config import ConfigValidationError, load_resolver_settings
from core.run_artifacts import build_run_report, write_run_report
from core.structured_logging import configure_structured_logging, set_run_id
from resolution.errors import ImportResolutionError
from resolution.options import ResolverOptions
from resolution.resolver import resolve_file, result_to_sdl

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="GraphQL schema import resolver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_resolve.py schema/main.graphql\n"
            "  python run_resolve.py schema/main.graphql --sort-fields -o out.graphql\n"
        )
    )

    parser.add_argument(
        "entry",
        nargs="?",
        default=None,
        help="Entry schema file. Overrides 'entry' from the settings file."
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML/JSON resolver settings file."
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the merged SDL here instead of stdout."
    )
    parser.add_argument(
        "--sort-fields",
        action="store_true",
        default=None,
        help="Sort merged and projected fields by name."
    )
    parser.add_argument(
        "--concurrent",
        action="store_true",
        default=None,
        help="Follow sibling imports on a thread pool."
    )
    parser.add_argument(
        "--report",
        action="store_true",
        default=False,
        help="Write a JSON run report to the settings' report_dir."
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for the resolver CLI."""
    # .env may carry DEBUG and SCHEMA_IMPORT_* flags
    load_dotenv()
    configure_structured_logging()
    run_id = set_run_id()
    args = parse_args(argv)

    try:
        settings = load_resolver_settings(args.config)
    except ConfigValidationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    entry = args.entry or settings.entry
    if not entry:
        logger.error("No entry schema given (argument or 'entry' setting)")
        return 1

    overrides = {}
    if args.sort_fields is not None:
        overrides["sort_fields"] = args.sort_fields
    if args.concurrent is not None:
        overrides["concurrent"] = args.concurrent

    try:
        options = ResolverOptions.from_settings(settings, **overrides)
        t0 = time.time()
        result = resolve_file(entry, options)
        elapsed = time.time() - t0
    except ImportResolutionError as e:
        logger.error(f"Resolution failed: {e}")
        return 1

    logger.info("Resolved %s in %.2fs: %s", entry, elapsed, result.stats)

    sdl = result_to_sdl(result)
    output = args.output or settings.output
    if output:
        os.makedirs(os.path.dirname(os.path.abspath(output)), exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            f.write(sdl + "\n")
        logger.info(f"Wrote merged schema to {output}")
    else:
        sys.stdout.write(sdl + "\n")

    if args.report:
        report = build_run_report(entry, result.stats.to_dict(), result.names())
        path = write_run_report(report, run_id, settings.report_dir)
        logger.info(f"Wrote run report to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
