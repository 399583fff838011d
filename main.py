"""log4j-xml-reader — stream, filter, and print log4j XML event logs."""

import logging
import sys
from argparse import ArgumentParser
from dataclasses import replace
from datetime import datetime
from itertools import islice

from log4jxml.config import load_config, load_filter_params, load_yaml_config
from log4jxml.formatter import get_formatter
from log4jxml.models import FilterParams, LevelFilter
from log4jxml.reader import expand_paths
from log4jxml.scanner import follow, scan_many


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="log4j-xml",
        description="Stream, filter, and print log4j XML event logs.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="Log file path(s) or glob pattern(s)",
    )
    parser.add_argument(
        "--level",
        choices=[lvl.name for lvl in LevelFilter],
        type=str.upper,
        help="Only show events of this level",
    )
    parser.add_argument(
        "--since",
        help="Only show events at or after this ISO date/time (local time if no offset)",
    )
    parser.add_argument(
        "--thread",
        help="Only show events from this thread (exact, case-insensitive)",
    )
    parser.add_argument(
        "--logger",
        help="Filter by substring of the logger name (case-insensitive)",
    )
    parser.add_argument(
        "--search",
        help="Filter by keyword in message (case-insensitive)",
    )
    parser.add_argument(
        "--lines",
        type=int,
        help="Limit output to N records",
    )
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Colorize output by log level (ANSI)",
    )
    parser.add_argument(
        "--tail",
        action="store_true",
        help="Follow a log file for new events (like tail -f)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file with reader settings and default filters",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log diagnostics (skipped events, discarded fragments) to stderr",
    )
    return parser


def build_filter_params(args, defaults: FilterParams) -> FilterParams:
    """Overlay the filter flags that were given on top of *defaults*."""
    overrides = {}
    if args.level:
        overrides["level"] = LevelFilter[args.level]
    if args.since:
        overrides["date"] = datetime.fromisoformat(args.since)
    if args.thread:
        overrides["thread"] = args.thread
    if args.logger:
        overrides["logger"] = args.logger
    if args.search:
        overrides["message"] = args.search
    return replace(defaults, **overrides)


def run_pipeline(args):
    """Assemble and execute the record pipeline."""
    if args.tail and len(args.files) > 1:
        print("Error: --tail requires a single file", file=sys.stderr)
        sys.exit(1)

    yaml_data = load_yaml_config(args.config)
    try:
        config = load_config(yaml_data)
        params = build_filter_params(args, load_filter_params(yaml_data))
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    logging.getLogger().setLevel("DEBUG" if args.verbose else config.log_level)

    formatter = get_formatter(output_format=args.output, color=args.color)

    if args.tail:
        # Tail mode: a missing file is created and watched
        records = follow(args.files[0], params, config)
    else:
        try:
            paths = expand_paths(args.files)
        except FileNotFoundError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        records = scan_many(paths, params, config)

    if args.lines:
        records = islice(records, args.lines)

    for record in records:
        print(formatter(record))


def main():
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [LOG4J-XML] %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    parser = build_parser()
    args = parser.parse_args()
    run_pipeline(args)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
