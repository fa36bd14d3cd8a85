"""
=============================================================================
CONDITIONAL REQUEST HELPERS
=============================================================================

Framework-agnostic glue between the codec/matcher and HTTP headers. Works
on any mapping of header names to values (a dict, a framework's header
object), so it can sit inside whatever middleware or handler you already
have.

=============================================================================
EVALUATION ORDER
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    PRECONDITION FLOW                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   If-Match present?                                                 │
    │     └── does not match ──────────────► 412 Precondition Failed     │
    │                                                                      │
    │   If-None-Match present?                                            │
    │     └── matches                                                     │
    │           ├── GET / HEAD ─────────────► 304 Not Modified            │
    │           └── anything else ──────────► 412 Precondition Failed     │
    │                                                                      │
    │   Otherwise ──────────────────────────► None (handle the request)   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
USAGE
=============================================================================

    status = evaluate_preconditions(request.headers, body, method=request.method)
    if status is not None:
        return empty_response(status)

    set_etag_header(response.headers, body)

=============================================================================
"""

import logging
from typing import Any, Mapping, MutableMapping, Optional

from ..core.codec import DEFAULT_CODEC, OptionsLike
from ..core.entity import to_entity
from ..core.matcher import ConditionalMatcher
from .status_codes import HTTPStatus


logger = logging.getLogger(__name__)

SAFE_METHODS = frozenset({"GET", "HEAD"})


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    value = headers.get(name)
    if value is not None:
        return value

    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def set_etag_header(
    headers: MutableMapping[str, str],
    body: Any,
    options: OptionsLike = None,
    matcher: Optional[ConditionalMatcher] = None,
) -> Optional[str]:
    """
    Add an ETag header for a response body, unless one is already set.

    Args:
        headers: Response headers (mutated in place).
        body: Response body, FileInfo, stat result or path. Resolved
              with to_entity().
        options: Tag options, as for ETagCodec.encode.
        matcher: Supplies the codec. Defaults to the package defaults.

    Returns:
        The ETag now in effect, or None if there was no body to tag.
    """
    existing = _get_header(headers, "ETag")
    if existing is not None:
        logger.debug(f"ETag already set: {existing}")
        return existing

    entity = to_entity(body)
    if entity is None:
        return None

    codec = matcher.codec if matcher else DEFAULT_CODEC
    etag = codec.encode(entity, options)
    headers["ETag"] = etag
    return etag


def evaluate_preconditions(
    headers: Mapping[str, str],
    body: Any,
    options: OptionsLike = None,
    method: str = "GET",
    matcher: Optional[ConditionalMatcher] = None,
) -> Optional[HTTPStatus]:
    """
    Evaluate If-Match and If-None-Match request headers.

    Args:
        headers: Request headers.
        body: The resource's current representation (see to_entity).
              None means the resource does not exist.
        options: Tag options, as for ETagCodec.encode.
        method: Request method; decides 304 vs 412 for If-None-Match.
        matcher: Matcher to use. Defaults to the package defaults.

    Returns:
        The status to short-circuit with, or None to handle the request
        normally.
    """
    matcher = matcher or ConditionalMatcher()

    if_match_value = _get_header(headers, "If-Match")
    if_none_match_value = _get_header(headers, "If-None-Match")
    if if_match_value is None and if_none_match_value is None:
        return None

    entity = to_entity(body)
    if entity is None:
        # No current representation: nothing can match, not even "*"
        if if_match_value is not None:
            return _short_circuit(HTTPStatus.PRECONDITION_FAILED, "If-Match", if_match_value)
        return None

    if if_match_value is not None and not matcher.if_match(if_match_value, entity, options):
        return _short_circuit(HTTPStatus.PRECONDITION_FAILED, "If-Match", if_match_value)

    if if_none_match_value is not None and not matcher.if_none_match(
        if_none_match_value, entity, options
    ):
        if method.upper() in SAFE_METHODS:
            status = HTTPStatus.NOT_MODIFIED
        else:
            status = HTTPStatus.PRECONDITION_FAILED
        return _short_circuit(status, "If-None-Match", if_none_match_value)

    return None


def _short_circuit(status: HTTPStatus, header: str, value: str) -> HTTPStatus:
    """Log a failed precondition and return its status."""
    # 412 at INFO, 304 (a cache hit) at DEBUG
    level = logging.INFO if status.is_error else logging.DEBUG
    logger.log(level, f"{header} {value!r} -> {int(status)} {status.phrase}")
    return status
