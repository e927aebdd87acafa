"""Command-line front door for srch.

Parses CLI options, merges them with configuration defaults, runs the walk
and prints the summary footer.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import ConfigurationError, create_config_template, load_config
from .models.config import SrchConfig
from .models.search_query import SearchQuery
from .models.search_results import SearchMode, SearchSummary
from .tools import ResultIndexError, ResultSink, TreeWalker


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_OUTPUT_ERROR = 1
EXIT_USAGE_ERROR = 2


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _depth(value: str) -> int:
    """argparse type for the depth bound (0-255)."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if not 0 <= parsed <= 255:
        raise argparse.ArgumentTypeError("depth must be between 0 and 255")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srch",
        description="A feature-rich search tool to find all you want.",
    )
    parser.add_argument("pattern", nargs="?", metavar="PATTERN", help="The pattern you want to search for")
    parser.add_argument("path", nargs="?", default=".", metavar="PATH", help="Where to start searching (default: .)")
    parser.add_argument("-d", "--depth", type=_depth, default=None, help="How deep do you want to dig into? (default: 3)")
    parser.add_argument("-f", "--infile", action="store_true", help="Search through text-based file's contents")
    parser.add_argument("-a", "--all", action="store_true", default=None, help="Search through hidden folders")
    parser.add_argument("-i", "--useignore", action="store_true", default=None,
                        help="Use ignore files to ignore certain files and folders")
    parser.add_argument("-v", "--verbose", action="store_true", help="Display file information along with the path")
    parser.add_argument("-p", "--pathonly", action="store_true", help="Only view the paths")
    selection = parser.add_mutually_exclusive_group()
    selection.add_argument("-l", "--limit", type=_positive_int, help="Only show the first N results")
    selection.add_argument("-g", "--get", type=_positive_int, help="Only show the N-th result (1-based)")
    parser.add_argument("-c", "--config", help="Configuration file (default: discovered .srch.yaml)")
    parser.add_argument("--overflow-file", help="Write results beyond the overflow threshold to this file")
    parser.add_argument("--write-config", metavar="FILE", help="Write a configuration template and exit")
    parser.add_argument("--debug", action="store_true", help="Log debug information to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_query(args: argparse.Namespace, config: SrchConfig) -> SearchQuery:
    """Merge parsed arguments with configuration defaults; arguments win."""
    defaults = config.search
    return SearchQuery(
        pattern=args.pattern,
        root=args.path,
        max_depth=args.depth if args.depth is not None else defaults.max_depth,
        mode=SearchMode.CONTENT if args.infile else SearchMode.NAME,
        include_hidden=args.all if args.all is not None else defaults.include_hidden,
        use_ignore_rules=args.useignore if args.useignore is not None else defaults.use_ignore_rules,
        verbose=args.verbose,
        path_only=args.pathonly,
        limit=args.limit,
        get=args.get,
    )


def run_search(
    query: SearchQuery,
    config: SrchConfig,
    console: Console,
    overflow_file: Optional[str] = None,
) -> SearchSummary:
    """
    Run one search and render its results.

    Results stream to ``console`` as they are found unless ``limit`` or
    ``get`` is set, in which case the whole run completes first and the
    selection is rendered afterwards.

    Raises:
        ResultIndexError: If ``query.get`` is beyond the number of results
        OSError: If writing to the console or the overflow file fails
    """
    sink = ResultSink(
        console,
        pattern=query.pattern,
        verbose=query.verbose,
        path_only=query.path_only,
        stream=query.streams_results(),
        overflow_threshold=config.limits.overflow_threshold,
        highlight_style=config.output.highlight_style,
        location_style=config.output.location_style,
    )
    walker = TreeWalker(
        query,
        sink,
        ignore_file_names=config.search.ignore_file_names,
        sniff_size=config.limits.binary_sniff_bytes,
    )
    walker.walk()
    logger.debug(f"Walk finished: {walker.get_stats()}")

    if not query.streams_results():
        sink.render_all(sink.select(limit=query.limit, index=query.get))

    summary = sink.finalize()
    if summary.deferred:
        target = overflow_file or config.output.overflow_file
        if target:
            sink.write_overflow(target)
        else:
            logger.warning(
                f"{summary.deferred} results beyond the first {config.limits.overflow_threshold} were not shown; "
                f"use --overflow-file to save them"
            )
    return summary


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse CLI arguments, run the search and print the summary footer."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    error_console = Console(stderr=True, highlight=False)

    if args.write_config:
        try:
            create_config_template(args.write_config)
        except ConfigurationError as e:
            error_console.print(f"[red]error:[/red] {escape(str(e))}")
            return EXIT_USAGE_ERROR
        return EXIT_OK

    if args.pattern is None:
        parser.error("the following arguments are required: PATTERN")

    console = Console(highlight=False, soft_wrap=True)
    started = time.perf_counter()

    try:
        config = load_config(args.config).config
        query = build_query(args, config)
        summary = run_search(query, config, console, overflow_file=args.overflow_file)
        if not query.path_only:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            console.print()
            console.print(summary.footer(elapsed_ms), markup=False)
    except (ConfigurationError, ResultIndexError) as e:
        error_console.print(f"[red]error:[/red] {escape(str(e))}")
        return EXIT_USAGE_ERROR
    except ValidationError as e:
        error_console.print(f"[red]error:[/red] invalid arguments: {escape(str(e))}")
        return EXIT_USAGE_ERROR
    except OSError as e:
        logger.error(f"Output failed: {e}")
        return EXIT_OUTPUT_ERROR

    return EXIT_OK
