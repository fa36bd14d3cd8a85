"""
=============================================================================
CONDITIONAL REQUEST STATUS CODES
=============================================================================

The statuses a precondition check can produce:

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  304   │ Not Modified        - If-None-Match matched on GET/HEAD:  │
    │        │                       the client's cached copy is current │
    │  412   │ Precondition Failed - If-Match did not match, or          │
    │        │                       If-None-Match matched on a write    │
    └────────┴───────────────────────────────────────────────────────────┘

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes used by conditional requests.

    Being an IntEnum, members compare equal to plain ints:

        >>> HTTPStatus.NOT_MODIFIED == 304
        True
        >>> HTTPStatus.NOT_MODIFIED.phrase
        'Not Modified'
    """

    NOT_MODIFIED = 304          # Cached version is still valid
    PRECONDITION_FAILED = 412   # Client's view of the resource is stale

    @property
    def phrase(self) -> str:
        """Reason phrase for the status line (e.g. "Not Modified")."""
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_error(self) -> bool:
        """True for 4xx and 5xx codes."""
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.NOT_MODIFIED: "Not Modified",
    HTTPStatus.PRECONDITION_FAILED: "Precondition Failed",
}
