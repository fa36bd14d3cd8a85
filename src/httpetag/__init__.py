"""
=============================================================================
HTTPETAG - HTTP Entity Tags: encode, decode, and conditional matching
=============================================================================

Compute ETags for response bodies and files, read them back, and answer
If-Match / If-None-Match the way HTTP says you should.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    HOW AN ETAG IS USED                              │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. Server sends a resource with its tag                           │
    │      ETag: "7-MjJkMWZlOWM5ZDFmOWI3OGQ0YzR"                          │
    │                                                                      │
    │   2. Client revalidates its cached copy                             │
    │      If-None-Match: "7-MjJkMWZlOWM5ZDFmOWI3OGQ0YzR"                 │
    │      → 304 Not Modified if unchanged (no body sent)                 │
    │                                                                      │
    │   3. Client updates only if nobody else did                         │
    │      If-Match: "7-MjJkMWZlOWM5ZDFmOWI3OGQ0YzR"                      │
    │      → 412 Precondition Failed if the resource changed              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpetag/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httpetag)
    ├── config.py            # CodecConfig dataclass
    ├── core/                # Pure tag logic
    │   ├── codec.py         # encode / decode
    │   ├── matcher.py       # if_match / if_none_match
    │   ├── entity.py        # Entity variants and adapters
    │   ├── digest.py        # Content hash rendering
    │   └── radix.py         # Base-N integer conversion
    └── http/                # Header-level helpers
        ├── conditional.py   # evaluate_preconditions, set_etag_header
        └── status_codes.py  # 304 / 412

=============================================================================
QUICK START
=============================================================================

    import httpetag

    tag = httpetag.encode("deno911")
    # '"7-MjJkMWZlOWM5ZDFmOWI3OGQ0YzR"'

    httpetag.decode(tag)
    # DecodedTag(weak=False, etag=..., size=7, mtime=None, hash='MjJk...')

    httpetag.encode(httpetag.stat_entity("index.html"))
    # 'W/"1a4-18f0c2b7e21"'

    httpetag.if_none_match(request_headers["If-None-Match"], body)
    # False → answer 304

=============================================================================
"""

__version__ = "1.0.0"

from .config import CodecConfig, DEFAULT_CONFIG, ETAG_EMPTY
from .core import (
    ConditionalMatcher,
    DecodedTag,
    ETagCodec,
    ETagOptions,
    FileInfo,
    InvalidEntityError,
    decode,
    encode,
    if_match,
    if_no_match,
    if_none_match,
    stat_entity,
    to_entity,
)
from .http import HTTPStatus, evaluate_preconditions, set_etag_header

__all__ = [
    "CodecConfig",
    "ConditionalMatcher",
    "DEFAULT_CONFIG",
    "DecodedTag",
    "ETAG_EMPTY",
    "ETagCodec",
    "ETagOptions",
    "FileInfo",
    "HTTPStatus",
    "InvalidEntityError",
    "__version__",
    "decode",
    "encode",
    "evaluate_preconditions",
    "if_match",
    "if_no_match",
    "if_none_match",
    "set_etag_header",
    "stat_entity",
    "to_entity",
]
