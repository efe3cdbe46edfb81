#!/usr/bin/env python3
"""
cli.py: Command-line interface for imguri.

Encodes local image files and image URLs into data URIs and prints a summary
table, or a JSON object mapping each input to its data URI / error.

Usage:
    imguri <input> [<input> ...] [--force | --no-force] [--size-limit 131072] [--concurrency 10] [--json]
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table

from .config import EncodeOptions
from .core.batch import EncodeResult, encode
from .errors import InvalidArgument
from .utils.log_utils import configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Encode image files and image URLs into base64 data URIs."
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Local file paths and/or http(s) URLs to encode."
    )
    parser.add_argument(
        "--force",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Encode inputs even if they exceed the size limit (default: IMGURI_FORCE or off)."
    )
    parser.add_argument(
        "--size-limit",
        type=int,
        help="Maximum payload size in bytes (default: IMGURI_SIZE_LIMIT or 131072)."
    )
    parser.add_argument(
        "--timeout",
        type=int,
        help="Deadline for each remote request in milliseconds (default: IMGURI_TIMEOUT or 20000)."
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        help="Number of inputs encoded at the same time (default: IMGURI_CONCURRENCY or 10)."
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON object mapping each input to its data URI or error."
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical", "none"],
        default="none",
        help="Set logging level (default: none; 'none' disables logging)"
    )
    return parser.parse_args(argv)


def results_to_json(results: Dict[str, EncodeResult]) -> str:
    payload = {
        value: {
            "data": result.data,
            "error": f"{type(result.error).__name__}: {result.error}" if result.error else None,
        }
        for value, result in results.items()
    }
    return json.dumps(payload, indent=2)


def print_table(results: Dict[str, EncodeResult], console: Console) -> None:
    table = Table(title="imguri")
    table.add_column("Input", overflow="fold")
    table.add_column("Status")
    table.add_column("Details", overflow="fold")
    for value, result in results.items():
        if result.ok:
            media_type = result.data[5:].split(";", 1)[0]
            table.add_row(value, "[green]ok[/green]", f"{media_type}, {len(result.data)} chars")
        else:
            table.add_row(value, "[red]error[/red]", f"{type(result.error).__name__}: {result.error}")
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.log_level.lower() != "none":
        configure_logging(getattr(logging, args.log_level.upper()))

    try:
        options = EncodeOptions.from_env().with_overrides(
            force=args.force,
            size_limit=args.size_limit,
            timeout=args.timeout,
            concurrency=args.concurrency,
        )
    except InvalidArgument as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logger.debug("Encoding %d input(s) with %s", len(args.inputs), options)
    results = asyncio.run(encode(args.inputs, options))

    if args.json:
        print(results_to_json(results))
    else:
        print_table(results, Console())

    return 0 if all(r.ok for r in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
