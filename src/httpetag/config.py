"""
=============================================================================
CODEC CONFIGURATION
=============================================================================

The handful of constants that define the ETag wire format, gathered into a
single immutable configuration object.

=============================================================================
WHY A CONFIG CLASS?
=============================================================================

Tags issued today must still compare equal to tags issued last year, and to
tags produced by other implementations of the same format. Every value that
shapes a tag therefore lives here, in one frozen dataclass, instead of being
scattered through the code as magic numbers:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    WHAT SHAPES AN ETAG                              │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │       W/"7-MjJkMWZlOWM5ZDFmOWI3OGQ0YzR"                              │
    │         │ │ └───────────┬────────────┘                               │
    │         │ │             └── hash_length chars of the digest        │
    │         │ │                 (algorithm = sha1)                      │
    │         │ └── separator                                              │
    │         └── entity length in base `radix` (16)                       │
    │                                                                      │
    │       W/"5a-18a2f3c10b2"                                             │
    │             └────┬─────┘                                             │
    │                  └── mtime in ms, base 16; at most mtime_length     │
    │                      (12) digits, which is how decode tells the     │
    │                      two variants apart                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Frozen means a codec built from a config can never drift: two codecs built
from equal configs always produce identical tags.

=============================================================================
"""

import hashlib
from dataclasses import dataclass


ETAG_EMPTY = '"0-2jmj7l5rSw0yVb/vlWAYkK/YBwk="'
"""The well-known tag for a zero-length entity (SHA-1 of no bytes)."""

ETAG_LENGTH = 27
ETAG_RADIX = 16
ETAG_MTIME_LENGTH = 12


@dataclass(frozen=True)
class CodecConfig:
    """
    Configuration for an ETag codec.

    =========================================================================
    DEFAULTS
    =========================================================================

    The defaults reproduce the format used by the `etag` family of
    libraries (jshttp/etag, Oak, deno911/etag), so tags interoperate:

        CodecConfig()                      # sha1, 27 chars, base 16

    Changing any value produces tags that older peers cannot decode or
    match. Only do it for a closed system you fully control:

        CodecConfig(
            algorithm="sha256",
            hash_length=43,
            empty_tag='"0-47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU="',
        )

    empty_tag is not derived from algorithm. A config that changes the
    algorithm must supply the matching empty tag too.

    =========================================================================
    """

    algorithm: str = "sha1"
    """Name of the hashlib digest used for content tags."""

    hash_length: int = ETAG_LENGTH
    """
    Number of digest characters kept in a content tag.
    Truncation trades collision resistance for header size, which is fine
    for cache validation (not for anything security related).
    """

    radix: int = ETAG_RADIX
    """Numeric base for the size and mtime segments."""

    mtime_length: int = ETAG_MTIME_LENGTH
    """
    Longest second segment still read back as a timestamp.
    12 hex digits of milliseconds covers dates until the year 10889.
    """

    empty_tag: str = ETAG_EMPTY
    """Tag returned for zero-length content, never recomputed."""

    def validate(self) -> None:
        """
        Validate configuration values.

        Called by ETagCodec at construction, so a bad config fails at
        startup instead of on the first request.
        """
        try:
            hashlib.new(self.algorithm)
        except (ValueError, TypeError):
            raise ValueError(f"Unknown digest algorithm: {self.algorithm!r}")

        if not 2 <= self.radix <= 36:
            raise ValueError(f"Invalid radix: {self.radix}. Must be 2-36.")

        if self.hash_length < 1:
            raise ValueError("hash_length must be >= 1")

        if self.mtime_length < 1:
            raise ValueError("mtime_length must be >= 1")

        # Content tags must stay longer than the timestamp limit or
        # decode() would read every one of them as a metadata tag
        if self.hash_length <= self.mtime_length:
            raise ValueError(
                f"hash_length ({self.hash_length}) must be greater than "
                f"mtime_length ({self.mtime_length})"
            )

        if not (len(self.empty_tag) >= 2
                and self.empty_tag.startswith('"')
                and self.empty_tag.endswith('"')):
            raise ValueError(f"empty_tag must be a quoted tag: {self.empty_tag!r}")

        if self.algorithm.lower() != "sha1" and self.empty_tag == ETAG_EMPTY:
            raise ValueError(
                f"empty_tag is the SHA-1 tag but algorithm is {self.algorithm!r}; "
                f"set empty_tag for this algorithm"
            )


DEFAULT_CONFIG = CodecConfig()
