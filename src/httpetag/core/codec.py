"""
=============================================================================
ETAG CODEC
=============================================================================

Turns an entity into an ETag string, and an ETag string back into the
fields it was built from.

=============================================================================
THE TWO TAG VARIANTS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONTENT TAG VS METADATA TAG                      │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   CONTENT TAG                                                       │
    │   ───────────                                                       │
    │   "7-MjJkMWZlOWM5ZDFmOWI3OGQ0YzR"                                   │
    │    │ └────────────┬────────────┘                                    │
    │    │              └── first 27 chars of base64(sha1-hex(bytes))     │
    │    └── byte length in hex                                           │
    │                                                                      │
    │   METADATA (STAT) TAG                                               │
    │   ───────────────────                                               │
    │   W/"14-18a2f3"                                                     │
    │   │   │  └── mtime as epoch milliseconds, in hex                    │
    │   │   └── file size in hex                                          │
    │   └── always weak: we never looked at the bytes                     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
STRONG VS WEAK
=============================================================================

A strong tag promises byte-for-byte identity. A weak tag (W/ prefix)
only promises "semantically the same". Metadata tags are weak because two
writes within the same millisecond, or a rewrite with identical size and
restored mtime, are invisible to them.

=============================================================================
DECODING IS LOSSY
=============================================================================

decode() recovers the *fields* of a tag (weak flag, size, and either the
mtime or the truncated hash), never the entity itself. It also has to
guess which variant it is looking at, because the wire format carries no
type marker:

    second segment length <= 12   → metadata tag (timestamp)
    second segment length  > 12   → content tag (hash prefix)

A content tag whose hash segment is 12 characters or shorter (only
possible with a custom hash_length, or a third-party tag) will be
misread as a timestamp. The heuristic is kept as-is so tags from other
implementations of this format decode the same way everywhere.

=============================================================================
INTERVIEW QUESTIONS ABOUT ETAGS
=============================================================================

Q: "Why truncate the hash to 27 characters?"
A: "ETags travel in every conditional request. 27 base64 characters is
   still ~160 bits of the encoded text, far more than enough to tell two
   versions of one resource apart. It's cache validation, not a security
   boundary, so a short prefix is fine."

Q: "Why is the empty tag a constant?"
A: "The digest of zero bytes never changes. Hard-coding it skips a hash
   call on a hot path (204s, empty bodies) and pins the exact string other
   implementations emit."

Q: "Why does decode() return None instead of raising?"
A: "Tags come from clients and caches we don't control. Decoding is for
   diagnostics, so a garbage header must never take down a request."

=============================================================================
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional, Union

from ..config import CodecConfig, DEFAULT_CONFIG
from .digest import digest
from .entity import (
    CONTENT_TYPES, EPOCH, Entity, FileInfo, InvalidEntityError, coerce_timestamp
)
from .radix import parse_radix_prefix, to_radix


logger = logging.getLogger(__name__)

WEAK_PREFIX = "W/"

_QUOTED_PATTERN = re.compile(r'^(?:W/)?"(.*)"$', re.DOTALL)


@dataclass(frozen=True)
class ETagOptions:
    """
    Options for tag generation.

    weak:
        True forces the W/ prefix. None (the default) means "weak only
        if this is a metadata tag". False never removes the prefix from
        a metadata tag.

    stat_tag:
        Prefer a metadata tag. Only FileInfo entities carry size and
        mtime, so this has no effect on content entities.
    """

    weak: Optional[bool] = None
    stat_tag: bool = False


OptionsLike = Union[None, bool, ETagOptions, Mapping[str, Any]]


def resolve_options(options: OptionsLike) -> ETagOptions:
    """
    Normalize the accepted option shapes into ETagOptions.

        None              → defaults
        True / False      → ETagOptions(weak=...)
        ETagOptions       → unchanged
        {"weak": ..., "stat_tag": ...}  (also "statTag")

    Any other value falls back to the defaults.
    """
    if options is None:
        return ETagOptions()
    if isinstance(options, bool):
        return ETagOptions(weak=options)
    if isinstance(options, ETagOptions):
        return options
    if isinstance(options, Mapping):
        weak = options.get("weak")
        stat_tag = options.get("stat_tag", options.get("statTag", False))
        return ETagOptions(
            weak=None if weak is None else bool(weak),
            stat_tag=bool(stat_tag),
        )

    logger.debug(f"Ignoring unsupported ETag options of type {type(options).__name__}")
    return ETagOptions()


@dataclass(frozen=True)
class DecodedTag:
    """
    Fields recovered from an ETag string.

    Exactly one of mtime / hash is set: mtime for metadata tags, hash for
    content tags.
    """

    weak: bool
    etag: str
    size: int
    mtime: Optional[datetime] = None
    hash: Optional[str] = None

    @property
    def is_stat_tag(self) -> bool:
        """True if this was read back as a metadata tag."""
        return self.hash is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "weak": self.weak,
            "etag": self.etag,
            "size": self.size,
            "mtime": self.mtime.isoformat() if self.mtime else None,
            "hash": self.hash,
        }


class ETagCodec:
    """
    Encodes entities to ETags and decodes ETags to their fields.

    =========================================================================
    USAGE
    =========================================================================

        codec = ETagCodec()

        codec.encode("hello")
        # '"5-YWFmNGM2MWRkY2M1ZThhMmRhYmV"'

        codec.encode(FileInfo(size=20, mtime=some_datetime))
        # 'W/"14-18e3f2a9c10"'

        codec.decode('W/"14-18a2f3"')
        # DecodedTag(weak=True, size=20, mtime=datetime(...), hash=None)

    A codec holds nothing but its frozen config, so one instance can be
    shared freely between threads.

    =========================================================================
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        """
        Create a codec.

        Args:
            config: Wire format settings. Validated immediately;
                    raises ValueError if invalid.
        """
        self.config = config or DEFAULT_CONFIG
        self.config.validate()

    # ─────────────────────────────────────────────────────────────────────
    # ENCODING
    # ─────────────────────────────────────────────────────────────────────

    def encode(self, entity: Entity, options: OptionsLike = None) -> str:
        """
        Calculate the ETag for an entity.

        Args:
            entity: Text, bytes-like content, or a FileInfo.
            options: See resolve_options(). A bare bool means `weak`.

        Returns:
            A quoted ETag, prefixed with W/ for metadata tags or when a
            weak tag was requested.

        Raises:
            InvalidEntityError: entity is None or of an unsupported type.
        """
        if entity is None:
            raise InvalidEntityError("Entity cannot be None")

        opts = resolve_options(options)

        if isinstance(entity, FileInfo):
            tag = self._stat_tag(entity)
            weak = True
        elif isinstance(entity, CONTENT_TYPES):
            if opts.stat_tag:
                logger.debug("stat_tag requested for a content entity; using a content tag")
            tag = self._entity_tag(entity)
            weak = bool(opts.weak)
        else:
            raise InvalidEntityError(
                f"Cannot calculate an ETag for {type(entity).__name__}; "
                f"expected str, bytes-like or FileInfo"
            )

        return f"{WEAK_PREFIX}{tag}" if weak else tag

    def _entity_tag(self, entity: Union[str, bytes, bytearray, memoryview]) -> str:
        """Content tag: length and truncated digest of the bytes."""
        if isinstance(entity, str):
            data = entity.encode("utf-8")
        else:
            data = bytes(entity)

        if not data:
            return self.config.empty_tag

        hash_prefix = digest(data, self.config.algorithm)[:self.config.hash_length]
        return f'"{to_radix(len(data), self.config.radix)}-{hash_prefix}"'

    def _stat_tag(self, info: FileInfo) -> str:
        """Metadata tag: size and mtime (milliseconds)."""
        mtime = coerce_timestamp(info.mtime) or datetime.now(timezone.utc)

        millis = (mtime - EPOCH) // timedelta(milliseconds=1)
        size = to_radix(info.size, self.config.radix)
        return f'"{size}-{to_radix(millis, self.config.radix)}"'

    # ─────────────────────────────────────────────────────────────────────
    # DECODING
    # ─────────────────────────────────────────────────────────────────────

    def decode(self, etag: str) -> Optional[DecodedTag]:
        """
        Decode an ETag into its fields.

        Best effort: never raises. A tag that cannot be decoded yields
        None, which callers must treat as "unknown", never as a tag of
        size zero.

        Args:
            etag: A tag as found in an ETag / If-Match / If-None-Match
                  header, e.g. 'W/"14-18a2f3"'.

        Returns:
            DecodedTag, or None if the tag cannot be decoded.
        """
        try:
            return self._decode(etag)
        except Exception as e:
            logger.debug(f"Could not decode ETag {etag!r}: {e}")
            return None

    def _decode(self, etag: str) -> Optional[DecodedTag]:
        etag = etag.strip()
        weak = etag.startswith(WEAK_PREFIX)

        match = _QUOTED_PATTERN.match(etag)
        value = (match.group(1) if match else etag).strip()

        first, separator, second = value.partition("-")
        if not separator:
            logger.debug(f"ETag {etag!r} has no size separator")
            return None

        # Only the text up to the next "-" belongs to the second segment
        second = second.split("-", 1)[0]

        size = parse_radix_prefix(first, self.config.radix) or 0

        if len(second) <= self.config.mtime_length:
            millis = parse_radix_prefix(second, self.config.radix) or 0
            mtime = EPOCH + timedelta(milliseconds=millis)
            return DecodedTag(weak=weak, etag=etag, size=size, mtime=mtime)

        return DecodedTag(weak=weak, etag=etag, size=size, hash=second)


DEFAULT_CODEC = ETagCodec()


def encode(entity: Entity, options: OptionsLike = None) -> str:
    """Calculate an ETag with the default codec. See ETagCodec.encode."""
    return DEFAULT_CODEC.encode(entity, options)


def decode(etag: str) -> Optional[DecodedTag]:
    """Decode an ETag with the default codec. See ETagCodec.decode."""
    return DEFAULT_CODEC.decode(etag)


# =============================================================================
# MODULE SUMMARY
# =============================================================================
#
# 1. encode(): entity → quoted tag (content or metadata variant)
# 2. decode(): tag → DecodedTag, or None when undecodable
# 3. Options accept the same loose shapes callers have always passed
#    (bool, dict, None) and normalize them once
#
# COMPATIBILITY NOTES:
# - Empty content always yields config.empty_tag
# - Metadata tags are always weak
# - Changing CodecConfig changes the wire format
# =============================================================================
