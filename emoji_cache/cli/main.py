from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from emoji_cache.manager import EmojiCacheManager
from emoji_cache.settings import ALLOWED_SIZES, get_settings

from .inputs import parse_jsonl, parse_text
from .orchestrator import process_messages


DESCRIPTION = """
Cache custom emojis seen in chat messages as .png files,
organized by server under a local cache directory.
"""

EXAMPLES = """Examples:
  # Report how many emojis are already cached
  emoji-cache init

  # Cache the emojis of a single message
  emoji-cache cache --text "gg <:Pog:10>" --collection "My Server"

  # Batch from JSONL ({"content": ..., "collection": ...} per line)
  emoji-cache cache --jsonl messages.jsonl --size 256 --cache-dir ~/emotes
"""


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--cache-dir",
        type=str,
        default=None,
        help="Cache root directory (blank uses the default data directory)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print progress messages",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Minimal console output",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emoji-cache",
        description=DESCRIPTION,
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init", help="Scan the cache directory and report cached emojis"
    )
    _add_common_arguments(init_parser)

    cache_parser = subparsers.add_parser(
        "cache", help="Cache the emojis found in messages"
    )
    input_group = cache_parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("--text", type=str, help="Message content")
    input_group.add_argument(
        "--jsonl", type=Path, help="JSONL file with one message per line"
    )
    cache_parser.add_argument(
        "--collection",
        type=str,
        help="Server name for --text messages",
    )
    cache_parser.add_argument(
        "--size",
        type=int,
        choices=ALLOWED_SIZES,
        default=None,
        help="Emoji size in pixels (defaults to EMOJI_CACHE_SIZE or 128)",
    )
    _add_common_arguments(cache_parser)
    return parser


def configure_logging(args: argparse.Namespace) -> None:
    if args.quiet:
        level = logging.ERROR
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def run_init(args: argparse.Namespace) -> int:
    settings = get_settings()
    async with EmojiCacheManager(settings) as manager:
        count = manager.bootstrap(args.cache_dir)
        root = manager.resolve_root(args.cache_dir)
    if not args.quiet:
        print(f"Initialized emoji cache with {count} existing emojis in {root}.")
    return 0


async def run_cache(args: argparse.Namespace) -> int:
    try:
        if args.text is not None:
            if not args.collection:
                raise ValueError("--collection is required with --text")
            messages = parse_text(args.text, args.collection)
        else:
            messages = parse_jsonl(args.jsonl)
    except (OSError, ValueError) as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return 1

    if not messages:
        print("No messages were provided.", file=sys.stderr)
        return 1

    settings = get_settings()
    if not args.quiet:
        print(f"Processing {len(messages)} message(s)...")

    stats = await process_messages(
        messages,
        settings=settings,
        cache_dir=args.cache_dir,
        size=args.size,
        verbose=args.verbose,
    )

    if not args.quiet:
        summary = (
            "\nSummary: messages="
            f"{stats['messages']} skipped={stats['skipped']} "
            f"cached={stats['cached']} failed={stats['failed']}"
        )
        print(summary)

    return 0 if stats["failed"] == 0 else 1


async def async_main(args: argparse.Namespace) -> int:
    if args.command == "init":
        return await run_init(args)
    return await run_cache(args)


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args)
    try:
        get_settings()
    except (RuntimeError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    try:
        return asyncio.run(async_main(args))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
