"""
=============================================================================
HTTPETAG CLI ENTRY POINT
=============================================================================

Command-line access to the codec, mostly for debugging caches:
"what tag should this file have?", "what is inside this tag?",
"would this If-None-Match header produce a 304?".

=============================================================================
USAGE
=============================================================================

    # Content tag for a string or a file's bytes
    python -m httpetag encode --text "deno911"
    python -m httpetag encode --file ./public/app.js --weak

    # Metadata tag from the file's size and mtime (never reads it)
    python -m httpetag encode --stat ./public/app.js

    # What's inside a tag?
    python -m httpetag decode 'W/"14-18a2f3"'

    # Evaluate a conditional header (exit status 0 = true, 1 = false)
    python -m httpetag match --if-none-match '"7-MjJk..."' --text deno911

=============================================================================
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .core import (
    ConditionalMatcher,
    ETagCodec,
    ETagOptions,
    Entity,
    InvalidEntityError,
    stat_entity,
)


logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "HTTPETAG_LOG_LEVEL"


def _setup_logging(log_level: str) -> None:
    """Configure logging for CLI runs."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("httpetag").setLevel(level)


def _add_entity_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", "-t", help="Tag this text (UTF-8)")
    source.add_argument("--file", "-f", type=Path, help="Tag this file's bytes")
    source.add_argument(
        "--stat", "-s",
        type=Path,
        help="Tag this file's size and mtime (weak metadata tag)",
    )
    parser.add_argument(
        "--weak", "-w",
        action="store_true",
        help="Produce a weak (W/) tag",
    )


def _load_entity(args: argparse.Namespace) -> Entity:
    if args.text is not None:
        return args.text
    if args.file is not None:
        return args.file.read_bytes()
    return stat_entity(args.stat)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (split out so tests can inspect it)."""
    parser = argparse.ArgumentParser(
        prog="httpetag",
        description="Encode, decode and match HTTP entity tags",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  httpetag encode --text deno911                 # Content tag
  httpetag encode --stat ./index.html            # Metadata tag
  httpetag decode 'W/"14-18a2f3"'                # Inspect a tag
  httpetag match --if-match '*' --file a.json    # Evaluate If-Match
        """
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=os.getenv(LOG_LEVEL_ENV, "WARNING").upper(),
        help=f"Logging level (default: WARNING, or ${LOG_LEVEL_ENV})"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpetag {__version__}"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    # ─────────────────────────────────────────────────────────────────────
    # ENCODE
    # ─────────────────────────────────────────────────────────────────────

    encode_parser = commands.add_parser("encode", help="Print the ETag for an entity")
    _add_entity_arguments(encode_parser)

    # ─────────────────────────────────────────────────────────────────────
    # DECODE
    # ─────────────────────────────────────────────────────────────────────

    decode_parser = commands.add_parser("decode", help="Print the fields of an ETag as JSON")
    decode_parser.add_argument("etag", help='Tag to decode, e.g. \'W/"14-18a2f3"\'')

    # ─────────────────────────────────────────────────────────────────────
    # MATCH
    # ─────────────────────────────────────────────────────────────────────

    match_parser = commands.add_parser(
        "match", help="Evaluate If-Match / If-None-Match against an entity"
    )
    header = match_parser.add_mutually_exclusive_group(required=True)
    header.add_argument("--if-match", dest="if_match", help="If-Match header value")
    header.add_argument("--if-none-match", dest="if_none_match", help="If-None-Match header value")
    _add_entity_arguments(match_parser)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit status: 0 on success / true, 1 on failure / false,
        2 on usage errors (raised by argparse).
    """
    args = build_parser().parse_args(argv)
    _setup_logging(args.log_level)
    logger.debug(f"Running command: {args.command}")

    codec = ETagCodec()

    if args.command == "decode":
        decoded = codec.decode(args.etag)
        if decoded is None:
            print(f"Error: cannot decode ETag {args.etag!r}", file=sys.stderr)
            return 1
        print(json.dumps(decoded.to_dict(), indent=2))
        return 0

    try:
        entity = _load_entity(args)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    options = ETagOptions(weak=True) if args.weak else None

    try:
        if args.command == "encode":
            print(codec.encode(entity, options))
            return 0

        matcher = ConditionalMatcher(codec)
        if args.if_match is not None:
            result = matcher.if_match(args.if_match, entity, options)
        else:
            result = matcher.if_none_match(args.if_none_match, entity, options)
    except InvalidEntityError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("true" if result else "false")
    return 0 if result else 1


# =============================================================================
# ENTRY POINT
# =============================================================================
# This allows running: python -m httpetag

if __name__ == "__main__":
    sys.exit(main())
