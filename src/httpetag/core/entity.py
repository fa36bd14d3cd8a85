"""
=============================================================================
ENTITIES
=============================================================================

An entity is whatever we fingerprint. There are exactly two kinds:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    ENTITY VARIANTS                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   CONTENT                           METADATA                        │
    │   ───────                           ────────                        │
    │   str, bytes, bytearray,            FileInfo(size, mtime, ino)      │
    │   memoryview                                                         │
    │                                                                      │
    │   Tag = length + digest             Tag = size + mtime              │
    │   Strong by default                 Always weak                     │
    │   Reads every byte                  Never reads the file            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The codec only ever sees these two shapes. Anything looser (os.stat()
results, dicts that look like stat records, paths, JSON-able response
bodies) is turned into one of them HERE, once, by to_entity(). The codec
does a plain isinstance() check and never probes attributes.

=============================================================================
"""

import json
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional, Union


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class InvalidEntityError(TypeError):
    """
    Raised when a value cannot be fingerprinted.

    A TypeError, because the problem is always the *kind* of value passed
    (None, an int, a socket...), never its contents.
    """


@dataclass(frozen=True)
class FileInfo:
    """
    File metadata record used for metadata ("stat") tags.

    Only size and mtime end up in the tag. ino and birthtime are carried
    so a FileInfo built from os.stat() keeps what the platform told us.
    """

    size: int
    mtime: Optional[datetime] = None
    ino: Optional[int] = None
    birthtime: Optional[datetime] = None

    def __post_init__(self):
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise InvalidEntityError(
                f"FileInfo size must be an int, got {type(self.size).__name__}"
            )
        if self.size < 0:
            raise InvalidEntityError(f"FileInfo size must be >= 0, got {self.size}")

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileInfo":
        """Build a FileInfo from an os.stat() / os.fstat() result."""
        birthtime = getattr(stat_result, "st_birthtime", None)
        return cls(
            size=stat_result.st_size,
            # st_mtime_ns avoids float rounding on the millisecond
            mtime=EPOCH + timedelta(microseconds=stat_result.st_mtime_ns // 1000),
            ino=stat_result.st_ino or None,
            birthtime=coerce_timestamp(birthtime),
        )

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "FileInfo":
        """Build a FileInfo from a dict-like stat record."""
        return cls(
            size=record["size"],
            mtime=coerce_timestamp(record.get("mtime")),
            ino=record.get("ino"),
            birthtime=coerce_timestamp(record.get("birthtime")),
        )


Entity = Union[str, bytes, bytearray, memoryview, FileInfo]

CONTENT_TYPES = (str, bytes, bytearray, memoryview)


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """
    Normalize a timestamp to an aware UTC datetime.

    Accepts datetime (naive values are taken as UTC), epoch seconds as
    int/float, or ISO-8601 text (a trailing "Z" is allowed).
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, bool):
        raise InvalidEntityError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            # Out of range, e.g. a millisecond value passed as seconds
            raise InvalidEntityError(f"Not a timestamp: {value!r}") from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return coerce_timestamp(datetime.fromisoformat(text))
        except ValueError:
            raise InvalidEntityError(f"Not a timestamp: {value!r}")
    raise InvalidEntityError(f"Not a timestamp: {type(value).__name__}")


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _has_field(obj: Any, name: str) -> bool:
    if isinstance(obj, Mapping):
        return name in obj
    return hasattr(obj, name)


def is_file_info_like(obj: Any) -> bool:
    """
    Duck test: does obj look like a file metadata record?

    True for FileInfo, os.stat_result, and any mapping or object with a
    numeric size, an inode field (int or None) and a timestamp-like mtime.
    """
    if isinstance(obj, (FileInfo, os.stat_result)):
        return True
    if obj is None or isinstance(obj, CONTENT_TYPES):
        return False
    if not all(_has_field(obj, name) for name in ("size", "mtime", "ino")):
        return False

    size, mtime, ino = _field(obj, "size"), _field(obj, "mtime"), _field(obj, "ino")
    return (
        isinstance(size, int) and not isinstance(size, bool)
        and (ino is None or isinstance(ino, int))
        and isinstance(mtime, (datetime, int, float, str))
    )


def stat_entity(path: Union[str, os.PathLike]) -> FileInfo:
    """
    Stat a file into a FileInfo.

    This is the one place the package touches the filesystem. OSError
    (missing file, permissions) propagates to the caller.
    """
    return FileInfo.from_stat(os.stat(path))


def to_entity(body: Any) -> Optional[Entity]:
    """
    Resolve an arbitrary response body into an entity.

    =========================================================================
    RESOLUTION ORDER
    =========================================================================

        None                         → None (nothing to tag)
        str / bytes-like / FileInfo  → unchanged
        os.stat_result               → FileInfo.from_stat
        stat-like record             → FileInfo.from_mapping / attributes
        os.PathLike                  → stat_entity(path)
        other dict / list / tuple    → compact JSON text

    Anything else raises InvalidEntityError.

    =========================================================================

    Args:
        body: Response body, file metadata, or path.

    Returns:
        An Entity, or None when there is no body.
    """
    if body is None:
        return None

    if isinstance(body, (FileInfo,) + CONTENT_TYPES):
        return body

    if isinstance(body, os.stat_result):
        return FileInfo.from_stat(body)

    if is_file_info_like(body):
        if isinstance(body, Mapping):
            return FileInfo.from_mapping(body)
        return FileInfo(
            size=body.size,
            mtime=coerce_timestamp(body.mtime),
            ino=body.ino,
            birthtime=coerce_timestamp(getattr(body, "birthtime", None)),
        )

    if isinstance(body, os.PathLike):
        return stat_entity(body)

    if isinstance(body, (Mapping, list, tuple)):
        try:
            # Compact separators match JSON.stringify, so tags agree with
            # JavaScript servers rendering the same document
            return json.dumps(body, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise InvalidEntityError(f"Unable to serialize response body: {e}") from e

    raise InvalidEntityError(
        f"Unable to determine entity from {type(body).__name__}"
    )
