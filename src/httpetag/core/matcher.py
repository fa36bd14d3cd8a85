"""
=============================================================================
CONDITIONAL MATCHER
=============================================================================

If-Match / If-None-Match comparison against an entity's current tag.

=============================================================================
THE TWO PRECONDITIONS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    IF-MATCH VS IF-NONE-MATCH                        │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   If-Match: "abc"                                                   │
    │   "Only do this if the resource is STILL version abc"               │
    │   → optimistic locking for PUT / PATCH / DELETE                     │
    │   → strong comparison: a weak tag never matches, not even *         │
    │                                                                      │
    │   If-None-Match: "abc"                                              │
    │   "Only do this if the resource is NOT version abc"                 │
    │   → cache revalidation for GET (304 Not Modified)                   │
    │   → create-only PUT with If-None-Match: *                           │
    │   → weak tags are fine here                                         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Header lists are split on commas with optional surrounding whitespace and
compared with exact string equality, W/ prefix and quotes included.

=============================================================================
"""

import logging
import re
from typing import List, Optional

from .codec import DEFAULT_CODEC, ETagCodec, OptionsLike, WEAK_PREFIX
from .entity import Entity


logger = logging.getLogger(__name__)

WILDCARD = "*"

_LIST_SEPARATOR = re.compile(r"\s*,\s*")


def split_tag_list(value: str) -> List[str]:
    """Split an If-Match / If-None-Match header value into candidate tags."""
    return _LIST_SEPARATOR.split(value.strip())


class ConditionalMatcher:
    """
    Evaluates conditional-request headers against an entity.

    Usage:
        matcher = ConditionalMatcher()

        if not matcher.if_match(request_headers["If-Match"], body):
            ...  # 412 Precondition Failed

        if not matcher.if_none_match(request_headers["If-None-Match"], body):
            ...  # 304 Not Modified
    """

    def __init__(self, codec: Optional[ETagCodec] = None):
        self.codec = codec or DEFAULT_CODEC

    def if_match(self, value: str, entity: Entity, options: OptionsLike = None) -> bool:
        """
        Evaluate an If-Match header value.

        Args:
            value: Raw header value ("*" or a comma separated tag list).
            entity: The resource's current entity.
            options: Tag options, as for ETagCodec.encode.

        Returns:
            True if the precondition holds. Always False when the
            entity's tag is weak.
        """
        etag = self.codec.encode(entity, options)

        # Weak tags cannot satisfy a strong comparison
        if etag.startswith(WEAK_PREFIX):
            logger.debug(f"If-Match failed: {etag} is weak")
            return False

        if value.strip() == WILDCARD:
            return True

        matched = etag in split_tag_list(value)
        logger.debug(f"If-Match {value!r} against {etag}: {matched}")
        return matched

    def if_none_match(self, value: str, entity: Entity, options: OptionsLike = None) -> bool:
        """
        Evaluate an If-None-Match header value.

        Returns:
            True if the entity's tag is NOT listed (proceed with the
            request). "*" always returns False.
        """
        if value.strip() == WILDCARD:
            return False

        etag = self.codec.encode(entity, options)
        none_matched = etag not in split_tag_list(value)
        logger.debug(f"If-None-Match {value!r} against {etag}: {none_matched}")
        return none_matched

    if_no_match = if_none_match


DEFAULT_MATCHER = ConditionalMatcher()


def if_match(value: str, entity: Entity, options: OptionsLike = None) -> bool:
    """Evaluate If-Match with the default codec. See ConditionalMatcher.if_match."""
    return DEFAULT_MATCHER.if_match(value, entity, options)


def if_none_match(value: str, entity: Entity, options: OptionsLike = None) -> bool:
    """Evaluate If-None-Match with the default codec. See ConditionalMatcher.if_none_match."""
    return DEFAULT_MATCHER.if_none_match(value, entity, options)


if_no_match = if_none_match
