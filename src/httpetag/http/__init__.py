"""
HTTP-facing helpers: header-level precondition checks built on the core.
"""

from .conditional import evaluate_preconditions, set_etag_header
from .status_codes import HTTPStatus

__all__ = [
    "HTTPStatus",
    "evaluate_preconditions",
    "set_etag_header",
]
