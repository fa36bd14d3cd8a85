"""
=============================================================================
CORE - Tag codec and conditional matcher
=============================================================================

Everything in here is pure: no I/O (except the explicit stat_entity()
adapter), no shared mutable state, no logging above DEBUG.

    codec.py    - encode() / decode() ETags
    matcher.py  - if_match() / if_none_match()
    entity.py   - Entity variants and the adapters that produce them
    digest.py   - hash rendering used by content tags
    radix.py    - base-N integer conversion

=============================================================================
"""

from .codec import (
    DecodedTag,
    ETagCodec,
    ETagOptions,
    decode,
    encode,
    resolve_options,
)
from .entity import (
    Entity,
    FileInfo,
    InvalidEntityError,
    is_file_info_like,
    stat_entity,
    to_entity,
)
from .matcher import (
    ConditionalMatcher,
    if_match,
    if_no_match,
    if_none_match,
    split_tag_list,
)

__all__ = [
    # Codec
    "DecodedTag",
    "ETagCodec",
    "ETagOptions",
    "decode",
    "encode",
    "resolve_options",
    # Entities
    "Entity",
    "FileInfo",
    "InvalidEntityError",
    "is_file_info_like",
    "stat_entity",
    "to_entity",
    # Matcher
    "ConditionalMatcher",
    "if_match",
    "if_no_match",
    "if_none_match",
    "split_tag_list",
]
